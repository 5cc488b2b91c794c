"""
Chat URL configuration.
"""

from django.urls import path
from . import views

app_name = 'chat'

urlpatterns = [
    path('rooms', views.ChatRoomListView.as_view(), name='room_list'),
    path('unread-count', views.UnreadCountView.as_view(), name='unread_count'),
    path('academy/<uuid:academy_id>', views.AcademyChatRoomView.as_view(), name='academy_room'),
    path('rooms/<uuid:room_id>', views.ChatRoomDetailView.as_view(), name='room_detail'),
    path('rooms/<uuid:room_id>/messages', views.ChatMessageCreateView.as_view(), name='send_message'),
    path('rooms/<uuid:room_id>/read', views.ChatMarkReadView.as_view(), name='mark_read'),
]
