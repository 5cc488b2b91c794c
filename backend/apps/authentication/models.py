"""
Account models.

Tables: users, refresh_tokens, profiles, user_roles
"""

import uuid
import bcrypt
from django.db import models
from django.utils import timezone


class User(models.Model):
    """
    Login identity (email + bcrypt password hash)
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255)
    password_hash = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'
        ordering = ['-created_at']

    def __str__(self):
        return self.email

    def set_password(self, raw_password):
        """Hash and set password using bcrypt"""
        self.password_hash = bcrypt.hashpw(
            raw_password.encode('utf-8'),
            bcrypt.gensalt()
        ).decode('utf-8')

    def check_password(self, raw_password):
        """Verify password using bcrypt"""
        return bcrypt.checkpw(
            raw_password.encode('utf-8'),
            self.password_hash.encode('utf-8')
        )


class RefreshToken(models.Model):
    """
    Issued refresh token, revoked on rotation or logout
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='refresh_tokens')
    token = models.CharField(max_length=500)  # CharField so MySQL can index it
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)
    revoked_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'refresh_tokens'
        indexes = [
            models.Index(fields=['user'], name='refresh_tok_user_id_idx'),
            models.Index(fields=['token'], name='refresh_tok_token_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f'RefreshToken for {self.user.email}'

    @property
    def is_expired(self):
        return timezone.now() > self.expires_at

    @property
    def is_revoked(self):
        return self.revoked_at is not None

    @property
    def is_valid(self):
        """Check if token is valid (not expired and not revoked)"""
        return not self.is_expired and not self.is_revoked


class Profile(models.Model):
    """
    Public profile shown to academies (chat, reservations, members)
    """
    user = models.OneToOneField(User, on_delete=models.CASCADE, primary_key=True, related_name='profile')
    user_name = models.CharField(max_length=100, blank=True, default='')
    phone = models.CharField(max_length=30, blank=True, default='')
    email = models.EmailField(max_length=255, blank=True, default='')
    learning_style = models.CharField(max_length=50, blank=True, null=True)
    profile_tags = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'profiles'

    def __str__(self):
        return self.user_name or self.email

    def to_summary(self) -> dict:
        return {
            'id': str(self.user_id),
            'userName': self.user_name,
            'phone': self.phone,
            'email': self.email,
        }


class UserRole(models.Model):
    """
    Marketplace role of a user plus the platform super admin flag
    """
    ROLE_PARENT = 'parent'
    ROLE_STUDENT = 'student'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_PARENT, 'Parent'),
        (ROLE_STUDENT, 'Student'),
        (ROLE_ADMIN, 'Academy admin'),
    ]

    user = models.OneToOneField(User, on_delete=models.CASCADE, primary_key=True, related_name='role')
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_PARENT)
    is_super_admin = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'user_roles'

    def __str__(self):
        return f'{self.user_id}: {self.role}'

    @classmethod
    def is_super_admin_user(cls, user_id) -> bool:
        return cls.objects.filter(user_id=user_id, is_super_admin=True).exists()
