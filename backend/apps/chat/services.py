"""
Chat service: rooms between parents and academies, messages and unread counts.
"""

import logging
from typing import List, Tuple
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Count
from django.utils import timezone

from apps.academies.models import AcademyMember
from apps.academies.permissions import is_academy_staff, staff_academy_ids
from apps.academies.services import get_academy
from apps.authentication.models import Profile
from apps.core.exceptions import Forbidden, NotFound, ValidationFailed
from apps.realtime.services import realtime_service
from .models import ChatRoom, ChatMessage

logger = logging.getLogger(__name__)

SIDE_PARENT = 'parent'
SIDE_ACADEMY = 'academy'


class ChatService:

    def get_or_create_room(self, user_id, academy_id) -> Tuple[ChatRoom, bool]:
        academy = get_academy(academy_id)
        return ChatRoom.objects.get_or_create(academy=academy, parent_id=user_id)

    def get_room(self, user_id, room_id) -> Tuple[ChatRoom, bool]:
        """
        Load a room the caller takes part in

        Returns:
            (room, is_staff) where is_staff means the caller speaks for
            the academy side
        """
        try:
            room = ChatRoom.objects.select_related('academy').get(id=room_id)
        except (ChatRoom.DoesNotExist, DjangoValidationError):
            raise NotFound('Chat room not found')

        if str(room.parent_id) == str(user_id):
            return room, False
        if is_academy_staff(user_id, room.academy_id):
            return room, True
        raise Forbidden('Not a participant of this chat room')

    def list_rooms(self, user_id, side: str = SIDE_PARENT) -> List[dict]:
        """
        Rooms with last message and unread count, most recently active first
        """
        if side == SIDE_ACADEMY:
            rooms = ChatRoom.objects.filter(academy_id__in=staff_academy_ids(user_id))
        else:
            rooms = ChatRoom.objects.filter(parent_id=user_id)

        rooms = list(rooms.select_related('academy').order_by('-updated_at'))
        unread = dict(
            ChatMessage.objects.filter(chat_room__in=rooms, is_read=False)
            .exclude(sender_id=user_id)
            .values_list('chat_room_id')
            .annotate(n=Count('id'))
        )

        profiles = {}
        if side == SIDE_ACADEMY:
            profiles = {
                p.user_id: p
                for p in Profile.objects.filter(user_id__in=[r.parent_id for r in rooms])
            }

        result = []
        for room in rooms:
            last = room.messages.order_by('-created_at').first()
            parent = profiles.get(room.parent_id)
            result.append({
                'id': str(room.id),
                'academy': room.academy.to_summary(),
                'parent': parent.to_summary() if parent else None,
                'last_message': last.content if last else None,
                'last_message_at': last.created_at.isoformat() if last else None,
                'unread_count': unread.get(room.id, 0),
                'updated_at': room.updated_at.isoformat(),
            })
        return result

    def read_messages(self, user_id, room_id) -> Tuple[ChatRoom, List[ChatMessage]]:
        """
        Messages of a room in ascending order; the other side's messages
        are marked read
        """
        room, _ = self.get_room(user_id, room_id)
        self._mark_read(room, user_id)
        return room, list(room.messages.all())

    def send_message(self, user_id, room_id, content: str) -> ChatMessage:
        room, is_staff = self.get_room(user_id, room_id)

        content = (content or '').strip()
        if not content:
            raise ValidationFailed('Message content is empty')

        with transaction.atomic():
            message = ChatMessage.objects.create(chat_room=room, sender_id=user_id, content=content)
            ChatRoom.objects.filter(id=room.id).update(updated_at=timezone.now())

        recipients = [room.parent_id] + list(
            AcademyMember.objects.filter(
                academy_id=room.academy_id,
                status=AcademyMember.STATUS_APPROVED,
            ).values_list('user_id', flat=True)
        )
        realtime_service.emit_chat_message(recipients, room.id, message.to_event())

        logger.info(f'Message {message.id} sent in room {room.id} by {"academy" if is_staff else "parent"}')
        return message

    def mark_read(self, user_id, room_id) -> int:
        room, _ = self.get_room(user_id, room_id)
        return self._mark_read(room, user_id)

    def unread_total(self, user_id, side: str = SIDE_PARENT) -> int:
        if side == SIDE_ACADEMY:
            rooms = ChatRoom.objects.filter(academy_id__in=staff_academy_ids(user_id))
        else:
            rooms = ChatRoom.objects.filter(parent_id=user_id)
        return ChatMessage.objects.filter(
            chat_room__in=rooms,
            is_read=False,
        ).exclude(sender_id=user_id).count()

    def _mark_read(self, room: ChatRoom, user_id) -> int:
        return room.messages.filter(is_read=False).exclude(sender_id=user_id).update(is_read=True)


# Create singleton instance
chat_service = ChatService()
