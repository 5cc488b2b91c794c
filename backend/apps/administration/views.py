"""
Platform administration views.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.permissions import IsSuperAdmin
from apps.core.utils.regions import AVAILABLE_REGIONS
from apps.core.utils.params import body_object
from .serializers import AnnouncementSerializer, UserRoleSerializer, ChangeRoleSerializer
from .services import platform_service, user_admin_service


class AuthSettingsView(APIView):
    """
    Toggle email confirmation on sign-up

    POST /api/platform/auth-settings
    Body: {auto_confirm_email: bool}
    """
    permission_classes = [IsSuperAdmin]

    def post(self, request):
        result = platform_service.update_auth_settings(
            request.user.user_id,
            body_object(request).get('auto_confirm_email'),
        )
        return Response(result)


class PlatformSettingsView(APIView):
    """
    GET /api/platform/settings
    """
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'settings': platform_service.list_settings()})


class RegionListView(APIView):
    """
    GET /api/platform/regions
    """
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'regions': AVAILABLE_REGIONS})


class ActiveAnnouncementsView(APIView):
    """
    GET /api/platform/announcements
    """
    permission_classes = [AllowAny]

    def get(self, request):
        announcements = platform_service.active_announcements()
        return Response({'announcements': AnnouncementSerializer(announcements, many=True).data})


class AdminAnnouncementListView(APIView):
    """
    GET /api/platform/admin/announcements
    POST /api/platform/admin/announcements
    """
    permission_classes = [IsSuperAdmin]

    def get(self, request):
        announcements = platform_service.all_announcements()
        return Response({'announcements': AnnouncementSerializer(announcements, many=True).data})

    def post(self, request):
        serializer = AnnouncementSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        announcement = platform_service.create_announcement(request.user.user_id, serializer.validated_data)
        return Response(
            {'announcement': AnnouncementSerializer(announcement).data},
            status=status.HTTP_201_CREATED
        )


class AdminAnnouncementDetailView(APIView):
    """
    PATCH /api/platform/admin/announcements/:announcementId
    DELETE /api/platform/admin/announcements/:announcementId
    """
    permission_classes = [IsSuperAdmin]

    def patch(self, request, announcement_id):
        serializer = AnnouncementSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        announcement = platform_service.update_announcement(announcement_id, serializer.validated_data)
        return Response({'announcement': AnnouncementSerializer(announcement).data})

    def delete(self, request, announcement_id):
        platform_service.delete_announcement(announcement_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminAnnouncementToggleView(APIView):
    """
    POST /api/platform/admin/announcements/:announcementId/toggle
    """
    permission_classes = [IsSuperAdmin]

    def post(self, request, announcement_id):
        announcement = platform_service.toggle_announcement(announcement_id)
        return Response({'announcement': AnnouncementSerializer(announcement).data})


class AdminUserListView(APIView):
    """
    GET /api/platform/admin/users?search=
    """
    permission_classes = [IsSuperAdmin]

    def get(self, request):
        users = user_admin_service.list_users(request.query_params.get('search'))
        return Response({'users': users, 'count': len(users)})


class AdminUserDetailView(APIView):
    """
    DELETE /api/platform/admin/users/:userId
    """
    permission_classes = [IsSuperAdmin]

    def delete(self, request, user_id):
        user_admin_service.delete_user(request.user.user_id, user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminUserRoleView(APIView):
    """
    PUT /api/platform/admin/users/:userId/role
    """
    permission_classes = [IsSuperAdmin]

    def put(self, request, user_id):
        serializer = ChangeRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        role = user_admin_service.change_role(user_id, serializer.validated_data['role'])
        return Response({'role': UserRoleSerializer(role).data})


class AdminSuperAdminToggleView(APIView):
    """
    POST /api/platform/admin/users/:userId/super-admin  (toggle)
    """
    permission_classes = [IsSuperAdmin]

    def post(self, request, user_id):
        role = user_admin_service.toggle_super_admin(request.user.user_id, user_id)
        return Response({'role': UserRoleSerializer(role).data})


class AdminAcademyListView(APIView):
    """
    GET /api/platform/admin/academies
    """
    permission_classes = [IsSuperAdmin]

    def get(self, request):
        academies = user_admin_service.list_academies()
        return Response({'academies': academies, 'count': len(academies)})
