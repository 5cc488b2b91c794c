"""
Family views.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from apps.core.permissions import IsTokenAuthenticated
from .serializers import (
    ChildSerializer,
    ChildConnectionSerializer,
    ConnectionCodeRequestSerializer,
    RedeemCodeSerializer,
)
from .services import family_service


class ChildListView(APIView):
    """
    GET /api/families/children
    POST /api/families/children
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        children = family_service.list_children(request.user.user_id)
        return Response({'children': ChildSerializer(children, many=True).data})

    def post(self, request):
        serializer = ChildSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        child = family_service.add_child(
            request.user.user_id,
            serializer.validated_data['name'],
            serializer.validated_data.get('grade'),
        )
        return Response({'child': ChildSerializer(child).data}, status=status.HTTP_201_CREATED)


class ChildDetailView(APIView):
    """
    PATCH /api/families/children/:childId
    DELETE /api/families/children/:childId
    """
    permission_classes = [IsTokenAuthenticated]

    def patch(self, request, child_id):
        serializer = ChildSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        child = family_service.update_child(request.user.user_id, child_id, serializer.validated_data)
        return Response({'child': ChildSerializer(child).data})

    def delete(self, request, child_id):
        family_service.delete_child(request.user.user_id, child_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ConnectionListView(APIView):
    """
    GET /api/families/connections
    POST /api/families/connections  (issue a code)
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        connections = family_service.list_connections(request.user.user_id)
        return Response({'connections': ChildConnectionSerializer(connections, many=True).data})

    def post(self, request):
        serializer = ConnectionCodeRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        connection = family_service.create_connection_code(
            request.user.user_id,
            serializer.validated_data.get('child_id'),
        )
        return Response(
            {'connection': ChildConnectionSerializer(connection).data},
            status=status.HTTP_201_CREATED
        )


class ConnectionDetailView(APIView):
    """
    DELETE /api/families/connections/:connectionId
    """
    permission_classes = [IsTokenAuthenticated]

    def delete(self, request, connection_id):
        family_service.delete_connection(request.user.user_id, connection_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RedeemCodeView(APIView):
    """
    POST /api/families/connect  (student side)
    """
    permission_classes = [IsTokenAuthenticated]

    def post(self, request):
        serializer = RedeemCodeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        connection = family_service.redeem_code(request.user.user_id, serializer.validated_data['code'])
        return Response({'connection': ChildConnectionSerializer(connection).data})


class MyParentsView(APIView):
    """
    GET /api/families/parents
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        connections = family_service.my_parents(request.user.user_id)
        return Response({'connections': ChildConnectionSerializer(connections, many=True).data})
