"""
Feed URL configuration.
"""

from django.urls import path
from . import views

app_name = 'feed'

urlpatterns = [
    path('', views.FeedListView.as_view(), name='feed'),
    path('academy/<uuid:academy_id>', views.AcademyFeedView.as_view(), name='academy_feed'),
    path('<uuid:post_id>', views.FeedPostDetailView.as_view(), name='post_detail'),
    path('<uuid:post_id>/like', views.FeedLikeView.as_view(), name='like'),
]
