"""
Feed serializers.
"""

from rest_framework import serializers
from .models import FeedPost


class FeedPostCreateSerializer(serializers.Serializer):
    academy_id = serializers.UUIDField()
    type = serializers.ChoiceField(choices=[c[0] for c in FeedPost.TYPE_CHOICES], default=FeedPost.TYPE_NOTICE)
    title = serializers.CharField(max_length=200)
    body = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    image_url = serializers.CharField(required=False, allow_blank=True, allow_null=True)
