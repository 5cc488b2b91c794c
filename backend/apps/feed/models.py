"""
Region feed models.

Tables: feed_posts, post_likes
"""

import uuid
from django.db import models
from apps.authentication.models import User
from apps.academies.models import Academy


class FeedPost(models.Model):
    """
    Academy news shown in the regional community feed
    """
    TYPE_NOTICE = 'notice'
    TYPE_SEMINAR = 'seminar'
    TYPE_EVENT = 'event'
    TYPE_CHOICES = [
        (TYPE_NOTICE, '공지'),
        (TYPE_SEMINAR, '설명회'),
        (TYPE_EVENT, '이벤트'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    academy = models.ForeignKey(Academy, on_delete=models.CASCADE, related_name='feed_posts')
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_NOTICE)
    title = models.CharField(max_length=200)
    body = models.TextField(null=True, blank=True)
    image_url = models.TextField(null=True, blank=True)
    target_regions = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'feed_posts'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['academy', '-created_at'], name='idx_feed_posts_academy'),
        ]

    def __str__(self):
        return self.title


class PostLike(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    post = models.ForeignKey(FeedPost, on_delete=models.CASCADE, related_name='likes')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='post_likes')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'post_likes'
        unique_together = [['post', 'user']]
