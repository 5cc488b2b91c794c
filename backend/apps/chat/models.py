"""
Chat models.

Tables: chat_rooms, messages
"""

import uuid
from django.db import models
from apps.academies.models import Academy
from apps.authentication.models import User


class ChatRoom(models.Model):
    """
    One conversation between a parent and an academy

    `updated_at` is bumped on every message so rooms sort by activity.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    academy = models.ForeignKey(Academy, on_delete=models.CASCADE, related_name='chat_rooms')
    parent = models.ForeignKey(User, on_delete=models.CASCADE, related_name='chat_rooms')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'chat_rooms'
        unique_together = ['academy', 'parent']
        ordering = ['-updated_at']

    def __str__(self):
        return f'{self.parent_id} <-> {self.academy_id}'


class ChatMessage(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    chat_room = models.ForeignKey(ChatRoom, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(User, on_delete=models.CASCADE, related_name='sent_chat_messages')
    content = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'messages'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['chat_room', 'created_at'], name='messages_room_created_idx'),
        ]

    def __str__(self):
        return f'{self.sender_id}: {self.content[:50]}'

    def to_event(self) -> dict:
        """Payload pushed to websocket clients"""
        return {
            'id': str(self.id),
            'chat_room_id': str(self.chat_room_id),
            'sender_id': str(self.sender_id),
            'content': self.content,
            'is_read': self.is_read,
            'created_at': self.created_at.isoformat(),
        }
