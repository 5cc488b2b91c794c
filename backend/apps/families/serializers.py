"""
Family serializers.
"""

from rest_framework import serializers
from .models import Child, ChildConnection


class ChildSerializer(serializers.ModelSerializer):
    class Meta:
        model = Child
        fields = ['id', 'parent_id', 'name', 'grade', 'created_at', 'updated_at']
        read_only_fields = ['id', 'parent_id', 'created_at', 'updated_at']


class ChildConnectionSerializer(serializers.ModelSerializer):
    child = ChildSerializer(read_only=True)
    is_expired = serializers.BooleanField(read_only=True)

    class Meta:
        model = ChildConnection
        fields = [
            'id', 'connection_code', 'status', 'child', 'parent_id', 'student_user_id',
            'expires_at', 'connected_at', 'is_expired', 'created_at',
        ]


class ConnectionCodeRequestSerializer(serializers.Serializer):
    child_id = serializers.UUIDField(required=False, allow_null=True)


class RedeemCodeSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=12)
