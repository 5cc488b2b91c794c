"""
Feed views.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.permissions import IsTokenAuthenticated, is_token_user
from .serializers import FeedPostCreateSerializer
from .services import feed_service, FILTER_ALL


class FeedListView(APIView):
    """
    GET /api/feed?region=&filter=all|notice|seminar|event|bookmarked
    POST /api/feed
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsTokenAuthenticated()]

    def get(self, request):
        user_id = request.user.user_id if is_token_user(request.user) else None
        posts = feed_service.list_feed(
            user_id=user_id,
            region=request.query_params.get('region'),
            feed_filter=request.query_params.get('filter', FILTER_ALL),
        )
        return Response({'posts': posts, 'count': len(posts)})

    def post(self, request):
        serializer = FeedPostCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        post = feed_service.create_post(request.user.user_id, data['academy_id'], data)
        return Response({'post': feed_service.serialize_post(post, False)}, status=status.HTTP_201_CREATED)


class AcademyFeedView(APIView):
    """
    GET /api/feed/academy/:academyId
    """
    permission_classes = [AllowAny]

    def get(self, request, academy_id):
        return Response({'posts': feed_service.list_for_academy(academy_id)})


class FeedPostDetailView(APIView):
    """
    DELETE /api/feed/:postId
    """
    permission_classes = [IsTokenAuthenticated]

    def delete(self, request, post_id):
        feed_service.delete_post(request.user.user_id, post_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class FeedLikeView(APIView):
    """
    POST /api/feed/:postId/like  (toggle)
    """
    permission_classes = [IsTokenAuthenticated]

    def post(self, request, post_id):
        return Response(feed_service.toggle_like(request.user.user_id, post_id))
