"""
Platform administration URL configuration.
"""

from django.urls import path
from . import views

app_name = 'administration'

urlpatterns = [
    path('auth-settings', views.AuthSettingsView.as_view(), name='auth_settings'),
    path('settings', views.PlatformSettingsView.as_view(), name='settings'),
    path('regions', views.RegionListView.as_view(), name='regions'),
    path('announcements', views.ActiveAnnouncementsView.as_view(), name='announcements'),

    # Super admin
    path('admin/announcements', views.AdminAnnouncementListView.as_view(), name='admin_announcements'),
    path(
        'admin/announcements/<uuid:announcement_id>',
        views.AdminAnnouncementDetailView.as_view(),
        name='admin_announcement_detail'
    ),
    path(
        'admin/announcements/<uuid:announcement_id>/toggle',
        views.AdminAnnouncementToggleView.as_view(),
        name='admin_announcement_toggle'
    ),
    path('admin/users', views.AdminUserListView.as_view(), name='admin_users'),
    path('admin/users/<uuid:user_id>', views.AdminUserDetailView.as_view(), name='admin_user_detail'),
    path('admin/users/<uuid:user_id>/role', views.AdminUserRoleView.as_view(), name='admin_user_role'),
    path('admin/users/<uuid:user_id>/super-admin', views.AdminSuperAdminToggleView.as_view(), name='admin_super_admin'),
    path('admin/academies', views.AdminAcademyListView.as_view(), name='admin_academies'),
]
