"""
Administration serializers.
"""

from rest_framework import serializers
from apps.authentication.models import UserRole
from .models import Announcement


class AnnouncementSerializer(serializers.ModelSerializer):
    class Meta:
        model = Announcement
        fields = ['id', 'title', 'content', 'priority', 'is_active', 'created_by_id', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_by_id', 'created_at', 'updated_at']


class UserRoleSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserRole
        fields = ['user_id', 'role', 'is_super_admin']


class ChangeRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=[c[0] for c in UserRole.ROLE_CHOICES])
