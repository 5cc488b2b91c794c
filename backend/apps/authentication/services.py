"""
Account service: registration, login, token management and profiles.
"""

import uuid
import logging
import jwt
from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.core.exceptions import NotFound, ValidationFailed
from apps.core.utils.tags import validate_preference_tags
from .models import User, RefreshToken, Profile, UserRole

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for user registration, login, and token management
    """

    def register(
        self,
        email: str,
        password: str,
        role: str = UserRole.ROLE_PARENT,
        user_name: str = '',
        phone: str = '',
    ) -> User:
        """
        Register a new user together with their profile and role

        Args:
            email: User's email address
            password: User's password (plain text)
            role: parent, student or admin
            user_name: Display name
            phone: Contact number shown to academies

        Returns:
            User instance

        Raises:
            ValueError: If validation fails or user already exists
        """
        # Validate input
        if not email or not password:
            raise ValueError('Email and password are required')

        if len(password) < 8:
            raise ValueError('Password must be at least 8 characters long')

        if role not in dict(UserRole.ROLE_CHOICES):
            raise ValueError(f'Unknown role: {role}')

        email = email.lower()

        # Check if user already exists
        if User.objects.filter(email=email).exists():
            raise ValueError('User with this email already exists')

        with transaction.atomic():
            user = User(email=email)
            user.set_password(password)
            user.save()

            Profile.objects.create(user=user, email=email, user_name=user_name or '', phone=phone or '')
            UserRole.objects.create(user=user, role=role)

        logger.info(f'Registered {role} account {user.id}')
        return user

    def login(self, email: str, password: str) -> tuple[User, dict]:
        """
        Login user and generate tokens

        Raises:
            ValueError: If credentials are invalid
        """
        # Validate input
        if not email or not password:
            raise ValueError('Email and password are required')

        # Find user
        try:
            user = User.objects.get(email=email.lower())
        except User.DoesNotExist:
            raise ValueError('Invalid email or password')

        # Verify password
        if not user.check_password(password):
            raise ValueError('Invalid email or password')

        # Generate tokens
        tokens = self.generate_tokens(user.id, user.email)

        return user, tokens

    def generate_tokens(self, user_id, email: str) -> dict:
        """
        Generate access and refresh tokens

        Args:
            user_id: User's UUID
            email: User's email

        Returns:
            Dict with accessToken and refreshToken
        """
        now = timezone.now()
        payload = {
            'userId': str(user_id),
            'email': email
        }

        # Generate access token
        access_token = jwt.encode(
            {
                **payload,
                'exp': now + settings.JWT_ACCESS_TOKEN_LIFETIME,
                'iat': now,
            },
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM
        )

        # Generate refresh token; jti keeps tokens issued in the same second distinct
        refresh_token_str = jwt.encode(
            {
                **payload,
                'jti': uuid.uuid4().hex,
                'exp': now + settings.JWT_REFRESH_TOKEN_LIFETIME,
                'iat': now,
            },
            settings.JWT_REFRESH_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM
        )

        # Store refresh token in database
        RefreshToken.objects.create(
            user_id=user_id,
            token=refresh_token_str,
            expires_at=now + settings.JWT_REFRESH_TOKEN_LIFETIME
        )

        return {
            'accessToken': access_token,
            'refreshToken': refresh_token_str
        }

    def refresh_access_token(self, refresh_token: str) -> dict:
        """
        Rotate a refresh token: issue a new pair and revoke the old one

        Raises:
            ValueError: If token is invalid, expired, or revoked
        """
        try:
            # Verify refresh token
            jwt.decode(
                refresh_token,
                settings.JWT_REFRESH_SECRET_KEY,
                algorithms=[settings.JWT_ALGORITHM]
            )
        except jwt.ExpiredSignatureError:
            raise ValueError('Refresh token has expired')
        except jwt.InvalidTokenError:
            raise ValueError('Invalid refresh token')

        # Check if refresh token exists and is not revoked
        try:
            token_record = RefreshToken.objects.select_related('user').get(token=refresh_token)
        except RefreshToken.DoesNotExist:
            raise ValueError('Invalid refresh token')

        if token_record.is_revoked:
            raise ValueError('Refresh token has been revoked')

        if token_record.is_expired:
            raise ValueError('Refresh token has expired')

        # Generate new tokens
        new_tokens = self.generate_tokens(
            token_record.user.id,
            token_record.user.email
        )

        # Revoke old refresh token
        token_record.revoked_at = timezone.now()
        token_record.save(update_fields=['revoked_at'])

        return new_tokens

    def logout(self, refresh_token: str) -> None:
        """
        Logout user by revoking refresh token
        """
        RefreshToken.objects.filter(token=refresh_token).update(
            revoked_at=timezone.now()
        )


class ProfileService:
    """
    Profile, role and preference test data of the signed-in user
    """

    def get_profile(self, user_id) -> Profile:
        try:
            return Profile.objects.select_related('user').get(user_id=user_id)
        except Profile.DoesNotExist:
            raise NotFound('Profile not found')

    def get_role(self, user_id) -> UserRole:
        role, _ = UserRole.objects.get_or_create(user_id=user_id)
        return role

    def describe_user(self, user_id) -> dict:
        """Payload for GET /api/auth/me"""
        profile = self.get_profile(user_id)
        role = self.get_role(user_id)
        return {
            'id': str(profile.user_id),
            'email': profile.user.email,
            'createdAt': profile.user.created_at.isoformat(),
            'role': role.role,
            'isSuperAdmin': role.is_super_admin,
            'profile': self.serialize_profile(profile),
        }

    def update_profile(self, user_id, **fields) -> Profile:
        profile = self.get_profile(user_id)
        changed = []
        for name in ('user_name', 'phone'):
            if fields.get(name) is not None:
                setattr(profile, name, fields[name])
                changed.append(name)
        if changed:
            profile.save(update_fields=changed + ['updated_at'])
        return profile

    def set_learning_style(self, user_id, learning_style: str) -> Profile:
        profile = self.get_profile(user_id)
        profile.learning_style = learning_style
        profile.save(update_fields=['learning_style', 'updated_at'])
        return profile

    def submit_preference_test(self, user_id, tags: list) -> Profile:
        """
        Store preference test answers as the profile's tags

        Raises:
            ValidationFailed: If the answers do not satisfy the test rules
        """
        try:
            cleaned = validate_preference_tags(tags)
        except ValueError as e:
            raise ValidationFailed(str(e))

        profile = self.get_profile(user_id)
        profile.profile_tags = cleaned
        profile.save(update_fields=['profile_tags', 'updated_at'])
        logger.info(f'Stored {len(cleaned)} preference tags for {user_id}')
        return profile

    @staticmethod
    def serialize_profile(profile: Profile) -> dict:
        return {
            'userName': profile.user_name,
            'phone': profile.phone,
            'email': profile.email,
            'learningStyle': profile.learning_style,
            'profileTags': profile.profile_tags or [],
        }


# Create singleton instances
auth_service = AuthService()
profile_service = ProfileService()
