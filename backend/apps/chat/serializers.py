"""
Chat serializers.
"""

from rest_framework import serializers
from .models import ChatRoom, ChatMessage


class ChatMessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ChatMessage
        fields = ['id', 'chat_room_id', 'sender_id', 'content', 'is_read', 'created_at']


class ChatRoomSerializer(serializers.ModelSerializer):
    academy = serializers.SerializerMethodField()

    class Meta:
        model = ChatRoom
        fields = ['id', 'academy', 'parent_id', 'created_at', 'updated_at']

    def get_academy(self, obj):
        return obj.academy.to_summary()


class SendMessageSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=5000, trim_whitespace=True)
