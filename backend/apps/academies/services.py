"""
Academy services.

Listing, profile management, staff membership, teachers/classes/posts,
bookmarks, class enrolments, recommendations and dashboard numbers.
"""

import logging
from typing import List, Optional
from django.core.exceptions import ValidationError as DjangoValidationError
from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Q

from apps.authentication.models import Profile, UserRole
from apps.core.exceptions import Conflict, Forbidden, NotFound, ValidationFailed
from apps.core.utils.codes import generate_code
from apps.core.utils.regions import is_valid_region, region_filter
from apps.core.utils.schedule import normalize_schedule, timetable_slots
from apps.core.utils.tags import calculate_match_score, validate_academy_tags
from .models import Academy, AcademyMember, Teacher, AcademyClass, ClassEnrollment, Bookmark, Post
from .permissions import (
    clean_permissions,
    empty_permissions,
    full_permissions,
    require_academy_permission,
)

logger = logging.getLogger(__name__)


def get_academy(academy_id) -> Academy:
    try:
        return Academy.objects.get(id=academy_id)
    except (Academy.DoesNotExist, DjangoValidationError):
        raise NotFound('Academy not found')


class AcademyService:
    """
    Academy catalogue and profile management
    """

    def list_academies(
        self,
        region: Optional[str] = None,
        subject: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[List[Academy], int]:
        """
        Filter academies; returns (page, total matching)

        The region is narrowed in the query, then confirmed per row.
        """
        query = Academy.objects.all()
        if region:
            query = query.filter(region_filter(region))
        if subject:
            query = query.filter(subject__icontains=subject)
        if search:
            query = query.filter(Q(name__icontains=search) | Q(address__icontains=search))

        academies = list(query)
        if region:
            academies = [a for a in academies if a.serves_region(region)]

        return academies[offset:offset + limit], len(academies)

    def create_academy(self, user_id, data: dict) -> Academy:
        """
        Create an academy owned by the caller

        Raises:
            Forbidden: Unless the caller has an approved business
                verification or is a super admin
        """
        from apps.verification.services import verification_service

        if not UserRole.is_super_admin_user(user_id) and not verification_service.is_verified(user_id):
            raise Forbidden('Business verification must be approved before creating an academy')

        data = dict(data)
        data['tags'] = self._clean_tags(data.get('tags', []))
        data['target_tags'] = self._clean_tags(data.get('target_tags', []))
        data['target_regions'] = self._clean_regions(data.get('target_regions', []))

        with transaction.atomic():
            academy = Academy.objects.create(owner_id=user_id, **data)
            academy.join_code = self._new_join_code()
            academy.save(update_fields=['join_code'])

            AcademyMember.objects.create(
                academy=academy,
                user_id=user_id,
                role=AcademyMember.ROLE_OWNER,
                grade=AcademyMember.GRADE_OWNER,
                status=AcademyMember.STATUS_APPROVED,
                permissions=full_permissions(),
            )

        logger.info(f'Academy {academy.id} created by {user_id}')
        return academy

    def update_profile(self, user_id, academy_id, data: dict) -> Academy:
        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'edit_profile')

        if 'tags' in data:
            data['tags'] = self._clean_tags(data['tags'])

        for field, value in data.items():
            setattr(academy, field, value)
        academy.save()
        return academy

    def set_target_tags(self, user_id, academy_id, tags: list) -> Academy:
        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'edit_profile')

        academy.target_tags = self._clean_tags(tags)
        academy.save(update_fields=['target_tags', 'updated_at'])
        return academy

    def set_target_regions(self, user_id, academy_id, regions: list) -> Academy:
        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'edit_profile')

        academy.target_regions = self._clean_regions(regions)
        academy.save(update_fields=['target_regions', 'updated_at'])
        return academy

    def delete_academy(self, user_id, academy_id) -> None:
        academy = get_academy(academy_id)
        if str(academy.owner_id) != str(user_id) and not UserRole.is_super_admin_user(user_id):
            raise Forbidden('Only the owner can delete an academy')
        academy.delete()
        logger.info(f'Academy {academy_id} deleted by {user_id}')

    def recommend(
        self,
        parent_tags: List[str],
        limit: int = 3,
        region: Optional[str] = None,
    ) -> List[dict]:
        """
        Rank academies against a parent's preference tags

        Up to RECOMMENDATION_CANDIDATE_LIMIT academies are scored; those
        below RECOMMENDATION_MIN_SCORE are dropped and the best `limit`
        returned, highest score first.
        """
        if not parent_tags:
            return []

        query = Academy.objects.all()
        if region:
            query = query.filter(region_filter(region))
        candidates = list(query[:settings.RECOMMENDATION_CANDIDATE_LIMIT])
        if region:
            candidates = [a for a in candidates if a.serves_region(region)]

        scored = []
        for academy in candidates:
            result = calculate_match_score(parent_tags, academy.matching_tags)
            if result.score >= settings.RECOMMENDATION_MIN_SCORE:
                scored.append((academy, result))

        scored.sort(key=lambda pair: pair[1].score, reverse=True)
        return [
            {'academy': academy, 'match': result}
            for academy, result in scored[:limit]
        ]

    def dashboard_stats(self, user_id, academy_id) -> dict:
        from apps.chat.models import ChatRoom
        from apps.consultations.models import Consultation, ConsultationReservation
        from apps.seminars.models import SeminarApplication

        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'view_analytics')

        return {
            'bookmarks': Bookmark.objects.filter(academy=academy).count(),
            'pending_consultations': Consultation.objects.filter(
                academy=academy, status=Consultation.STATUS_PENDING
            ).count(),
            'pending_reservations': ConsultationReservation.objects.filter(
                academy=academy, status=ConsultationReservation.STATUS_PENDING
            ).count(),
            'seminar_applications': SeminarApplication.objects.filter(seminar__academy=academy).count(),
            'chat_rooms': ChatRoom.objects.filter(academy=academy).count(),
            'members': AcademyMember.objects.filter(
                academy=academy, status=AcademyMember.STATUS_APPROVED
            ).count(),
            'classes': AcademyClass.objects.filter(academy=academy).count(),
        }

    def _new_join_code(self) -> str:
        return generate_code(lambda code: Academy.objects.filter(join_code=code).exists())

    def _clean_tags(self, tags) -> list:
        try:
            return validate_academy_tags(list(tags or []))
        except ValueError as e:
            raise ValidationFailed(str(e))

    def _clean_regions(self, regions) -> list:
        regions = list(dict.fromkeys(regions or []))
        unknown = [r for r in regions if not is_valid_region(r)]
        if unknown:
            raise ValidationFailed(f'Unknown regions: {", ".join(unknown)}')
        return regions


class MembershipService:
    """
    Join codes and staff membership management
    """

    def generate_join_code(self, user_id, academy_id) -> str:
        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'manage_members')

        academy.join_code = academy_service._new_join_code()
        academy.save(update_fields=['join_code', 'updated_at'])
        logger.info(f'New join code issued for academy {academy.id}')
        return academy.join_code

    def join_by_code(self, user_id, code: str) -> AcademyMember:
        """
        Request membership with a join code; the owner approves it later

        Raises:
            NotFound: Unknown code
            Conflict: Caller is already a member (pending or approved)
        """
        code = (code or '').strip().upper()
        academy = Academy.objects.filter(join_code=code).first() if code else None
        if academy is None:
            raise NotFound('Invalid join code')

        if AcademyMember.objects.filter(academy=academy, user_id=user_id).exists():
            raise Conflict('Already a member of this academy', code='ALREADY_MEMBER')

        try:
            return AcademyMember.objects.create(
                academy=academy,
                user_id=user_id,
                role=AcademyMember.ROLE_MEMBER,
                status=AcademyMember.STATUS_PENDING,
                permissions=empty_permissions(),
            )
        except IntegrityError:
            raise Conflict('Already a member of this academy', code='ALREADY_MEMBER')

    def my_memberships(self, user_id) -> List[AcademyMember]:
        return list(
            AcademyMember.objects.filter(user_id=user_id).select_related('academy')
        )

    def list_members(self, user_id, academy_id) -> List[dict]:
        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'manage_members')

        members = list(AcademyMember.objects.filter(academy=academy))
        profiles = {
            p.user_id: p for p in Profile.objects.filter(user_id__in=[m.user_id for m in members])
        }
        return [{'member': m, 'profile': profiles.get(m.user_id)} for m in members]

    def approve_member(self, user_id, academy_id, member_id) -> AcademyMember:
        member = self._get_member(user_id, academy_id, member_id)
        member.status = AcademyMember.STATUS_APPROVED
        member.save(update_fields=['status', 'updated_at'])
        return member

    def remove_member(self, user_id, academy_id, member_id) -> None:
        """Reject a pending request or remove an approved member"""
        member = self._get_member(user_id, academy_id, member_id)
        if member.is_owner:
            raise Forbidden('The academy owner cannot be removed')
        member.delete()

    def change_grade(self, user_id, academy_id, member_id, grade: str) -> AcademyMember:
        member = self._get_member(user_id, academy_id, member_id)
        if member.is_owner:
            raise Forbidden('The owner grade cannot be changed')
        if grade == AcademyMember.GRADE_OWNER or grade not in dict(AcademyMember.GRADE_CHOICES):
            raise ValidationFailed(f'Invalid grade: {grade}')

        member.grade = grade
        member.save(update_fields=['grade', 'updated_at'])
        return member

    def update_permissions(self, user_id, academy_id, member_id, permissions: dict) -> AcademyMember:
        member = self._get_member(user_id, academy_id, member_id)
        if member.is_owner:
            raise Forbidden('Owner permissions cannot be edited')
        try:
            member.permissions = clean_permissions(permissions)
        except ValueError as e:
            raise ValidationFailed(str(e))

        member.save(update_fields=['permissions', 'updated_at'])
        return member

    def _get_member(self, user_id, academy_id, member_id) -> AcademyMember:
        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'manage_members')
        try:
            return AcademyMember.objects.get(id=member_id, academy=academy)
        except (AcademyMember.DoesNotExist, DjangoValidationError):
            raise NotFound('Member not found')


class CatalogService:
    """
    Teachers, classes and academy posts
    """

    def create_teacher(self, user_id, academy_id, data: dict) -> Teacher:
        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'manage_teachers')
        return Teacher.objects.create(academy=academy, **data)

    def update_teacher(self, user_id, teacher_id, data: dict) -> Teacher:
        teacher = self._get(Teacher, teacher_id, 'Teacher not found')
        require_academy_permission(user_id, teacher.academy_id, 'manage_teachers')
        for field, value in data.items():
            setattr(teacher, field, value)
        teacher.save()
        return teacher

    def delete_teacher(self, user_id, teacher_id) -> None:
        teacher = self._get(Teacher, teacher_id, 'Teacher not found')
        require_academy_permission(user_id, teacher.academy_id, 'manage_teachers')
        teacher.delete()

    def create_class(self, user_id, academy_id, data: dict) -> AcademyClass:
        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'manage_classes')

        data = self._clean_class_data(academy, data)
        return AcademyClass.objects.create(academy=academy, **data)

    def update_class(self, user_id, class_id, data: dict) -> AcademyClass:
        academy_class = self._get(AcademyClass, class_id, 'Class not found')
        require_academy_permission(user_id, academy_class.academy_id, 'manage_classes')

        data = self._clean_class_data(academy_class.academy, data)
        for field, value in data.items():
            setattr(academy_class, field, value)
        academy_class.save()
        return academy_class

    def delete_class(self, user_id, class_id) -> None:
        academy_class = self._get(AcademyClass, class_id, 'Class not found')
        require_academy_permission(user_id, academy_class.academy_id, 'manage_classes')
        academy_class.delete()

    def create_post(self, user_id, academy_id, data: dict) -> Post:
        academy = get_academy(academy_id)
        require_academy_permission(user_id, academy.id, 'manage_posts')
        return Post.objects.create(academy=academy, **data)

    def update_post(self, user_id, post_id, data: dict) -> Post:
        post = self._get(Post, post_id, 'Post not found')
        require_academy_permission(user_id, post.academy_id, 'manage_posts')
        for field, value in data.items():
            setattr(post, field, value)
        post.save()
        return post

    def delete_post(self, user_id, post_id) -> None:
        post = self._get(Post, post_id, 'Post not found')
        require_academy_permission(user_id, post.academy_id, 'manage_posts')
        post.delete()

    def _clean_class_data(self, academy: Academy, data: dict) -> dict:
        data = dict(data)
        if 'schedule' in data:
            try:
                data['schedule'] = normalize_schedule(data['schedule'] or '') or None
            except ValueError as e:
                raise ValidationFailed(str(e))

        if data.get('teacher_id') is not None:
            if not Teacher.objects.filter(id=data['teacher_id'], academy=academy).exists():
                raise ValidationFailed('Teacher does not belong to this academy')

        if 'curriculum' in data:
            steps = data['curriculum'] or []
            # Partial updates skip the step serializer's required check
            if any(not step.get('title') for step in steps):
                raise ValidationFailed('Every curriculum step needs a title')
            data['curriculum'] = [
                {'title': step['title'], 'description': step.get('description', '')}
                for step in steps
            ]
        return data

    @staticmethod
    def _get(model, pk, message):
        try:
            return model.objects.get(id=pk)
        except (model.DoesNotExist, DjangoValidationError):
            raise NotFound(message)


class BookmarkService:

    def toggle(self, user_id, academy_id) -> bool:
        """Returns True when the academy is bookmarked after the call"""
        academy = get_academy(academy_id)
        deleted, _ = Bookmark.objects.filter(user_id=user_id, academy=academy).delete()
        if deleted:
            return False
        Bookmark.objects.get_or_create(user_id=user_id, academy=academy)
        return True

    def remove(self, user_id, academy_id) -> None:
        Bookmark.objects.filter(user_id=user_id, academy_id=academy_id).delete()

    def list_for_user(self, user_id) -> List[Bookmark]:
        return list(Bookmark.objects.filter(user_id=user_id).select_related('academy'))

    def is_bookmarked(self, user_id, academy_id) -> bool:
        if user_id is None:
            return False
        return Bookmark.objects.filter(user_id=user_id, academy_id=academy_id).exists()

    def bookmarked_academy_ids(self, user_id) -> list:
        return list(Bookmark.objects.filter(user_id=user_id).values_list('academy_id', flat=True))


class EnrollmentService:

    def enroll(self, user_id, class_id) -> ClassEnrollment:
        academy_class = CatalogService._get(AcademyClass, class_id, 'Class not found')
        enrollment, created = ClassEnrollment.objects.get_or_create(
            user_id=user_id,
            academy_class=academy_class,
        )
        if not created:
            raise Conflict('Already enrolled in this class', code='ALREADY_ENROLLED')
        return enrollment

    def unenroll(self, user_id, class_id) -> None:
        deleted, _ = ClassEnrollment.objects.filter(user_id=user_id, academy_class_id=class_id).delete()
        if not deleted:
            raise NotFound('Enrollment not found')

    def is_enrolled(self, user_id, class_id) -> bool:
        return ClassEnrollment.objects.filter(user_id=user_id, academy_class_id=class_id).exists()

    def list_for_user(self, user_id) -> List[ClassEnrollment]:
        return list(
            ClassEnrollment.objects.filter(user_id=user_id)
            .select_related('academy_class', 'academy_class__academy', 'academy_class__teacher')
        )

    def timetable(self, user_id) -> List[dict]:
        """Weekly slots of every enrolled class, ordered by day then start time"""
        slots = []
        for enrollment in self.list_for_user(user_id):
            academy_class = enrollment.academy_class
            for slot in timetable_slots(academy_class.schedule or ''):
                slots.append({
                    **slot,
                    'class_id': str(academy_class.id),
                    'class_name': academy_class.name,
                    'academy_id': str(academy_class.academy_id),
                    'academy_name': academy_class.academy.name,
                })
        slots.sort(key=lambda s: (s['dayIndex'], s['startHour'], s['startMinute']))
        return slots


# Create singleton instances
academy_service = AcademyService()
membership_service = MembershipService()
catalog_service = CatalogService()
bookmark_service = BookmarkService()
enrollment_service = EnrollmentService()
