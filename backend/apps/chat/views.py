"""
Chat views.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from apps.core.permissions import IsTokenAuthenticated
from .serializers import ChatMessageSerializer, ChatRoomSerializer, SendMessageSerializer
from .services import chat_service, SIDE_ACADEMY, SIDE_PARENT


def _side(request) -> str:
    return SIDE_ACADEMY if request.query_params.get('side') == SIDE_ACADEMY else SIDE_PARENT


class ChatRoomListView(APIView):
    """
    GET /api/chat/rooms?side=parent|academy
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        rooms = chat_service.list_rooms(request.user.user_id, _side(request))
        return Response({'rooms': rooms, 'count': len(rooms)})


class AcademyChatRoomView(APIView):
    """
    Open (or reuse) the caller's room with an academy

    POST /api/chat/academy/:academyId
    """
    permission_classes = [IsTokenAuthenticated]

    def post(self, request, academy_id):
        room, created = chat_service.get_or_create_room(request.user.user_id, academy_id)
        return Response(
            {'room': ChatRoomSerializer(room).data},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class ChatRoomDetailView(APIView):
    """
    Room with its messages (ascending); marks the other side's messages read

    GET /api/chat/rooms/:roomId
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request, room_id):
        room, messages = chat_service.read_messages(request.user.user_id, room_id)
        return Response({
            'room': ChatRoomSerializer(room).data,
            'messages': ChatMessageSerializer(messages, many=True).data,
        })


class ChatMessageCreateView(APIView):
    """
    POST /api/chat/rooms/:roomId/messages
    """
    permission_classes = [IsTokenAuthenticated]

    def post(self, request, room_id):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        message = chat_service.send_message(request.user.user_id, room_id, serializer.validated_data['content'])
        return Response({'message': ChatMessageSerializer(message).data}, status=status.HTTP_201_CREATED)


class ChatMarkReadView(APIView):
    """
    POST /api/chat/rooms/:roomId/read
    """
    permission_classes = [IsTokenAuthenticated]

    def post(self, request, room_id):
        updated = chat_service.mark_read(request.user.user_id, room_id)
        return Response({'updated': updated})


class UnreadCountView(APIView):
    """
    GET /api/chat/unread-count?side=parent|academy
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        return Response({'unread_count': chat_service.unread_total(request.user.user_id, _side(request))})
