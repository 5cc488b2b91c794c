"""
Account serializers for request validation.
"""

from rest_framework import serializers
from .models import UserRole


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, min_length=8, write_only=True)
    role = serializers.ChoiceField(choices=UserRole.ROLE_CHOICES, required=False, default=UserRole.ROLE_PARENT)
    userName = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')
    phone = serializers.CharField(required=False, allow_blank=True, max_length=30, default='')


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(required=True)
    password = serializers.CharField(required=True, write_only=True)


class RefreshTokenSerializer(serializers.Serializer):
    refreshToken = serializers.CharField(required=True)


class ProfileUpdateSerializer(serializers.Serializer):
    userName = serializers.CharField(required=False, allow_blank=True, max_length=100)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=30)


class LearningStyleSerializer(serializers.Serializer):
    learningStyle = serializers.CharField(required=True, max_length=50)


class PreferenceTestSerializer(serializers.Serializer):
    """
    Answers of the parent preference test, as tag keys
    """
    tags = serializers.ListField(child=serializers.CharField(max_length=50), allow_empty=False)
