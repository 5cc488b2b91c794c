"""
Regional feed service.
"""

import logging
from typing import List, Optional
from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Count

from apps.academies.permissions import require_academy_permission
from apps.academies.services import get_academy, bookmark_service
from apps.core.exceptions import NotFound, ValidationFailed
from apps.core.utils.regions import region_filter, resolve_region
from .models import FeedPost, PostLike

logger = logging.getLogger(__name__)

FILTER_ALL = 'all'
FILTER_BOOKMARKED = 'bookmarked'
FEED_FILTERS = [FILTER_ALL, FeedPost.TYPE_NOTICE, FeedPost.TYPE_SEMINAR, FeedPost.TYPE_EVENT, FILTER_BOOKMARKED]


class FeedService:

    def create_post(self, user_id, academy_id, data: dict) -> FeedPost:
        """
        Publish a post to the regions the academy targets
        """
        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'manage_posts')

        title = (data.get('title') or '').strip()
        if not title:
            raise ValidationFailed('Title is required')

        post = FeedPost.objects.create(
            academy=academy,
            type=data.get('type', FeedPost.TYPE_NOTICE),
            title=title,
            body=(data.get('body') or '').strip() or None,
            image_url=data.get('image_url') or None,
            target_regions=list(academy.target_regions or []),
        )
        logger.info(f'Feed post {post.id} created for academy {academy.id} in {post.target_regions}')
        return post

    def delete_post(self, user_id, post_id) -> None:
        post = self.get_post(post_id)
        require_academy_permission(user_id, post.academy_id, 'manage_posts')
        post.delete()

    def get_post(self, post_id) -> FeedPost:
        try:
            return FeedPost.objects.select_related('academy').get(id=post_id)
        except (FeedPost.DoesNotExist, DjangoValidationError):
            raise NotFound('Post not found')

    def list_feed(self, user_id=None, region: Optional[str] = None, feed_filter: str = FILTER_ALL) -> List[dict]:
        """
        Newest posts targeting `region`, with like counts and the caller's
        liked flag
        """
        if feed_filter not in FEED_FILTERS:
            raise ValidationFailed(f'Unknown feed filter: {feed_filter}')
        region = resolve_region(region)

        posts = FeedPost.objects.select_related('academy').annotate(like_count=Count('likes'))
        if feed_filter not in (FILTER_ALL, FILTER_BOOKMARKED):
            posts = posts.filter(type=feed_filter)
        if feed_filter == FILTER_BOOKMARKED:
            if user_id is None:
                return []
            posts = posts.filter(academy_id__in=bookmark_service.bookmarked_academy_ids(user_id))

        posts = posts.filter(region_filter(region)).order_by('-created_at')
        page = []
        for post in posts.iterator():
            if region in (post.target_regions or []):
                page.append(post)
                if len(page) == settings.FEED_PAGE_SIZE:
                    break
        posts = page

        liked = set()
        if user_id is not None and posts:
            liked = set(
                PostLike.objects.filter(user_id=user_id, post__in=posts).values_list('post_id', flat=True)
            )

        return [self.serialize_post(p, p.id in liked) for p in posts]

    def list_for_academy(self, academy_id) -> List[dict]:
        academy = get_academy(academy_id)
        posts = FeedPost.objects.filter(academy=academy).select_related('academy').annotate(like_count=Count('likes'))
        return [self.serialize_post(p, False) for p in posts]

    def toggle_like(self, user_id, post_id) -> dict:
        """Returns the post's like state after the toggle"""
        post = self.get_post(post_id)

        deleted, _ = PostLike.objects.filter(user_id=user_id, post=post).delete()
        if not deleted:
            PostLike.objects.get_or_create(user_id=user_id, post=post)

        return {
            'liked': not deleted,
            'like_count': PostLike.objects.filter(post=post).count(),
        }

    def serialize_post(self, post: FeedPost, liked: bool) -> dict:
        return {
            'id': str(post.id),
            'academy_id': str(post.academy_id),
            'academy': post.academy.to_summary(),
            'type': post.type,
            'title': post.title,
            'body': post.body,
            'image_url': post.image_url,
            'target_regions': post.target_regions,
            'like_count': getattr(post, 'like_count', 0),
            'liked': liked,
            'created_at': post.created_at.isoformat(),
        }


# Create singleton instance
feed_service = FeedService()
