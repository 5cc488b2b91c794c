"""
Platform administration: auth settings, announcements, users and academies.
"""

import logging
from typing import List, Optional
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Count, Q

from apps.academies.models import Academy
from apps.authentication.models import User, UserRole, Profile
from apps.core.exceptions import NotFound, ValidationFailed
from .models import Announcement, PlatformSetting

logger = logging.getLogger(__name__)

EMAIL_VERIFICATION_DESCRIPTION = '회원가입 시 이메일 인증 필수 여부'


class PlatformService:

    def update_auth_settings(self, user_id, auto_confirm_email) -> dict:
        """
        Store whether sign-up requires email verification

        Raises:
            ValidationFailed: If auto_confirm_email is not a boolean
        """
        if not isinstance(auto_confirm_email, bool):
            raise ValidationFailed('Invalid auto_confirm_email value')

        PlatformSetting.objects.update_or_create(
            key=PlatformSetting.EMAIL_VERIFICATION_ENABLED,
            defaults={
                'value': not auto_confirm_email,
                'description': EMAIL_VERIFICATION_DESCRIPTION,
                'updated_by_id': user_id,
            }
        )
        logger.info(f'Auth settings updated: auto_confirm_email={auto_confirm_email}')

        return {
            'success': True,
            'message': '이메일 자동 확인이 활성화되었습니다' if auto_confirm_email else '이메일 인증이 필요합니다',
        }

    def list_settings(self) -> dict:
        return {s.key: s.value for s in PlatformSetting.objects.all()}

    def active_announcements(self) -> List[Announcement]:
        return list(Announcement.objects.filter(is_active=True))

    def all_announcements(self) -> List[Announcement]:
        return list(Announcement.objects.all())

    def create_announcement(self, user_id, data: dict) -> Announcement:
        return Announcement.objects.create(created_by_id=user_id, **data)

    def update_announcement(self, announcement_id, data: dict) -> Announcement:
        announcement = self._get_announcement(announcement_id)
        for field, value in data.items():
            setattr(announcement, field, value)
        announcement.save()
        return announcement

    def toggle_announcement(self, announcement_id) -> Announcement:
        announcement = self._get_announcement(announcement_id)
        announcement.is_active = not announcement.is_active
        announcement.save(update_fields=['is_active', 'updated_at'])
        return announcement

    def delete_announcement(self, announcement_id) -> None:
        self._get_announcement(announcement_id).delete()

    def _get_announcement(self, announcement_id) -> Announcement:
        try:
            return Announcement.objects.get(id=announcement_id)
        except (Announcement.DoesNotExist, DjangoValidationError):
            raise NotFound('Announcement not found')


class UserAdminService:
    """
    Super admin management of accounts
    """

    def list_users(self, search: Optional[str] = None) -> List[dict]:
        users = User.objects.order_by('-created_at')
        if search:
            users = users.filter(Q(email__icontains=search) | Q(profile__user_name__icontains=search))

        users = list(users)
        ids = [u.id for u in users]
        profiles = {p.user_id: p for p in Profile.objects.filter(user_id__in=ids)}
        roles = {r.user_id: r for r in UserRole.objects.filter(user_id__in=ids)}

        result = []
        for user in users:
            profile = profiles.get(user.id)
            role = roles.get(user.id)
            result.append({
                'id': str(user.id),
                'email': user.email,
                'user_name': profile.user_name if profile else None,
                'phone': profile.phone if profile else None,
                'role': role.role if role else None,
                'is_super_admin': bool(role and role.is_super_admin),
                'created_at': user.created_at.isoformat(),
            })
        return result

    def change_role(self, user_id, role: str) -> UserRole:
        if role not in dict(UserRole.ROLE_CHOICES):
            raise ValidationFailed(f'Unknown role: {role}')
        user_role = self._get_role(user_id)
        user_role.role = role
        user_role.save(update_fields=['role'])
        logger.info(f'Role of {user_id} changed to {role}')
        return user_role

    def toggle_super_admin(self, actor_id, user_id) -> UserRole:
        if str(actor_id) == str(user_id):
            raise ValidationFailed('You cannot change your own super admin status')
        user_role = self._get_role(user_id)
        user_role.is_super_admin = not user_role.is_super_admin
        user_role.save(update_fields=['is_super_admin'])
        logger.info(f'Super admin of {user_id} set to {user_role.is_super_admin} by {actor_id}')
        return user_role

    def delete_user(self, actor_id, user_id) -> None:
        if str(actor_id) == str(user_id):
            raise ValidationFailed('You cannot delete your own account')
        deleted, _ = User.objects.filter(id=user_id).delete()
        if not deleted:
            raise NotFound('User not found')
        logger.info(f'User {user_id} deleted by {actor_id}')

    def list_academies(self) -> List[dict]:
        academies = (
            Academy.objects.select_related('owner')
            .annotate(member_count=Count('members'))
            .order_by('name')
        )
        return [
            {
                **academy.to_summary(),
                'address': academy.address,
                'owner_email': academy.owner.email if academy.owner else None,
                'target_regions': academy.target_regions,
                'member_count': academy.member_count,
                'created_at': academy.created_at.isoformat(),
            }
            for academy in academies
        ]

    def _get_role(self, user_id) -> UserRole:
        try:
            return UserRole.objects.get(user_id=user_id)
        except (UserRole.DoesNotExist, DjangoValidationError):
            raise NotFound('User not found')


# Create singleton instances
platform_service = PlatformService()
user_admin_service = UserAdminService()
