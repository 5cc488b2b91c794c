"""
Verification serializers.
"""

from rest_framework import serializers
from .models import BusinessVerification


class BusinessVerificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = BusinessVerification
        fields = [
            'id', 'user_id', 'document_url', 'business_name', 'business_number',
            'status', 'rejection_reason', 'reviewed_at', 'created_at', 'updated_at',
        ]


class AdminVerificationSerializer(BusinessVerificationSerializer):
    email = serializers.EmailField(source='user.email', read_only=True)

    class Meta(BusinessVerificationSerializer.Meta):
        fields = BusinessVerificationSerializer.Meta.fields + ['email']


class SubmitVerificationSerializer(serializers.Serializer):
    document_url = serializers.CharField()
    business_name = serializers.CharField(max_length=200)
    business_number = serializers.CharField(max_length=20)


class RejectVerificationSerializer(serializers.Serializer):
    reason = serializers.CharField(allow_blank=True)
