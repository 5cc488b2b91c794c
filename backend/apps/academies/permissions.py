"""
Academy-scoped staff permissions.

Each approved member carries a dict of permission flags. Owners and
platform super admins hold every permission regardless of the dict.
"""

from apps.authentication.models import UserRole
from apps.core.exceptions import Forbidden
from .models import AcademyMember

PERMISSION_LABELS = {
    'manage_classes': '수업 관리',
    'manage_teachers': '강사 관리',
    'manage_posts': '게시물 관리',
    'manage_seminars': '설명회 관리',
    'manage_consultations': '상담 관리',
    'view_analytics': '통계 조회',
    'manage_settings': '설정 관리',
    'manage_members': '멤버 관리',
    'edit_profile': '학원 프로필 편집',
}

PERMISSION_KEYS = list(PERMISSION_LABELS)


def full_permissions() -> dict:
    return {key: True for key in PERMISSION_KEYS}


def empty_permissions() -> dict:
    return {key: False for key in PERMISSION_KEYS}


def clean_permissions(raw: dict) -> dict:
    """Keep known keys only and fill missing ones with False."""
    unknown = set(raw) - set(PERMISSION_KEYS)
    if unknown:
        raise ValueError(f'Unknown permissions: {", ".join(sorted(unknown))}')
    return {key: bool(raw.get(key, False)) for key in PERMISSION_KEYS}


def get_membership(user_id, academy_id):
    return AcademyMember.objects.filter(user_id=user_id, academy_id=academy_id).first()


def has_academy_permission(user_id, academy_id, permission: str) -> bool:
    if UserRole.is_super_admin_user(user_id):
        return True

    membership = get_membership(user_id, academy_id)
    if membership is None or not membership.is_approved:
        return False
    if membership.is_owner:
        return True
    return bool((membership.permissions or {}).get(permission))


def require_academy_permission(user_id, academy_id, permission: str) -> None:
    """
    Raises:
        Forbidden: If the caller lacks `permission` on the academy
    """
    if not has_academy_permission(user_id, academy_id, permission):
        raise Forbidden(f'Missing academy permission: {permission}')


def is_academy_staff(user_id, academy_id) -> bool:
    """Approved member of the academy (any permissions) or super admin."""
    if UserRole.is_super_admin_user(user_id):
        return True
    membership = get_membership(user_id, academy_id)
    return membership is not None and membership.is_approved


def staff_academy_ids(user_id) -> list:
    return list(
        AcademyMember.objects.filter(
            user_id=user_id,
            status=AcademyMember.STATUS_APPROVED,
        ).values_list('academy_id', flat=True)
    )
