"""
Academy models.

Tables: academies, academy_members, teachers, classes, class_enrollments,
bookmarks, posts
"""

import uuid
from django.db import models
from apps.authentication.models import User


class Academy(models.Model):
    """
    A tutoring academy listed in the marketplace
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    subject = models.CharField(max_length=100)
    description = models.TextField(null=True, blank=True)
    address = models.CharField(max_length=500, null=True, blank=True)
    profile_image = models.TextField(null=True, blank=True)
    tags = models.JSONField(default=list, blank=True)
    target_tags = models.JSONField(default=list, blank=True)
    target_grade = models.CharField(max_length=100, null=True, blank=True)
    target_regions = models.JSONField(default=list, blank=True)
    is_mou = models.BooleanField(default=False)
    owner = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='owned_academies'
    )
    join_code = models.CharField(max_length=12, unique=True, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'academies'
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    @property
    def matching_tags(self) -> list:
        """Tags used for recommendations: target tags when set, else general tags"""
        return self.target_tags or self.tags or []

    def serves_region(self, region_id: str) -> bool:
        return region_id in (self.target_regions or [])

    def to_summary(self) -> dict:
        return {
            'id': str(self.id),
            'name': self.name,
            'subject': self.subject,
            'profile_image': self.profile_image,
        }


class AcademyMember(models.Model):
    """
    Staff membership of a user in an academy
    """
    ROLE_OWNER = 'owner'
    ROLE_MEMBER = 'member'
    ROLE_CHOICES = [
        (ROLE_OWNER, 'Owner'),
        (ROLE_MEMBER, 'Member'),
    ]

    GRADE_OWNER = 'owner'
    GRADE_CHOICES = [
        (GRADE_OWNER, '원장'),
        ('vice_owner', '부원장'),
        ('teacher', '강사'),
        ('admin', '관리자'),
    ]

    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    academy = models.ForeignKey(Academy, on_delete=models.CASCADE, related_name='members')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='academy_memberships')
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_MEMBER)
    grade = models.CharField(max_length=20, choices=GRADE_CHOICES, default='admin')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    permissions = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'academy_members'
        unique_together = ['academy', 'user']
        ordering = ['created_at']

    def __str__(self):
        return f'{self.user_id} @ {self.academy_id} ({self.role}/{self.status})'

    @property
    def is_owner(self) -> bool:
        return self.role == self.ROLE_OWNER

    @property
    def is_approved(self) -> bool:
        return self.status == self.STATUS_APPROVED


class Teacher(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    academy = models.ForeignKey(Academy, on_delete=models.CASCADE, related_name='teachers')
    name = models.CharField(max_length=100)
    subject = models.CharField(max_length=100, null=True, blank=True)
    bio = models.TextField(null=True, blank=True)
    image_url = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'teachers'
        ordering = ['created_at']

    def __str__(self):
        return self.name


class AcademyClass(models.Model):
    """
    A class (course) run by an academy

    `schedule` holds the canonical "월 18:00~20:00, 수 19:00~21:00" form.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    academy = models.ForeignKey(Academy, on_delete=models.CASCADE, related_name='classes')
    teacher = models.ForeignKey(
        Teacher,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='classes'
    )
    name = models.CharField(max_length=200)
    description = models.TextField(null=True, blank=True)
    schedule = models.CharField(max_length=255, null=True, blank=True)
    # Ordered steps: [{"title": ..., "description": ...}]
    curriculum = models.JSONField(default=list, blank=True)
    target_grade = models.CharField(max_length=100, null=True, blank=True)
    fee = models.IntegerField(null=True, blank=True)
    is_recruiting = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'classes'
        ordering = ['created_at']
        verbose_name_plural = 'classes'

    def __str__(self):
        return self.name


class ClassEnrollment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='class_enrollments')
    academy_class = models.ForeignKey(
        AcademyClass,
        on_delete=models.CASCADE,
        related_name='enrollments',
        db_column='class_id'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'class_enrollments'
        unique_together = ['user', 'academy_class']
        ordering = ['created_at']


class Bookmark(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='bookmarks')
    academy = models.ForeignKey(Academy, on_delete=models.CASCADE, related_name='bookmarks')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'bookmarks'
        unique_together = ['user', 'academy']
        ordering = ['-created_at']


class Post(models.Model):
    """
    Academy news post shown on the academy page
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    academy = models.ForeignKey(Academy, on_delete=models.CASCADE, related_name='posts')
    category = models.CharField(max_length=50, default='notice')
    title = models.CharField(max_length=200)
    content = models.TextField(null=True, blank=True)
    image_url = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'posts'
        ordering = ['-created_at']

    def __str__(self):
        return self.title
