"""
Account views.
"""

import logging
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.permissions import IsTokenAuthenticated
from apps.core.utils.tags import PARENT_TEST_QUESTIONS, TAG_CATEGORIES
from .services import auth_service, profile_service
from .serializers import (
    RegisterSerializer,
    LoginSerializer,
    RefreshTokenSerializer,
    ProfileUpdateSerializer,
    LearningStyleSerializer,
    PreferenceTestSerializer,
)

logger = logging.getLogger(__name__)


def _validation_error(serializer):
    return Response({
        'error': {
            'code': 'VALIDATION_ERROR',
            'message': 'Invalid request data',
            'details': serializer.errors,
            'retryable': False,
        }
    }, status=status.HTTP_400_BAD_REQUEST)


class RegisterView(APIView):
    """
    Register a new user

    POST /api/auth/register
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_error(serializer)

        data = serializer.validated_data
        try:
            user = auth_service.register(
                data['email'],
                data['password'],
                role=data['role'],
                user_name=data['userName'],
                phone=data['phone'],
            )
            tokens = auth_service.generate_tokens(user.id, user.email)

            return Response({
                'user': profile_service.describe_user(user.id),
                'tokens': tokens,
            }, status=status.HTTP_201_CREATED)

        except ValueError as e:
            message = str(e)
            exists = 'already exists' in message
            return Response({
                'error': {
                    'code': 'USER_EXISTS' if exists else 'REGISTRATION_FAILED',
                    'message': message,
                    'retryable': False,
                }
            }, status=status.HTTP_409_CONFLICT if exists else status.HTTP_400_BAD_REQUEST)


class LoginView(APIView):
    """
    Login user

    POST /api/auth/login
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_error(serializer)

        try:
            user, tokens = auth_service.login(
                serializer.validated_data['email'],
                serializer.validated_data['password'],
            )

            return Response({
                'user': profile_service.describe_user(user.id),
                'tokens': tokens,
            }, status=status.HTTP_200_OK)

        except ValueError as e:
            return Response({
                'error': {
                    'code': 'AUTHENTICATION_FAILED',
                    'message': str(e),
                    'retryable': False,
                }
            }, status=status.HTTP_401_UNAUTHORIZED)


class RefreshTokenView(APIView):
    """
    Refresh access token

    POST /api/auth/refresh
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RefreshTokenSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_error(serializer)

        try:
            tokens = auth_service.refresh_access_token(serializer.validated_data['refreshToken'])
            return Response({'tokens': tokens}, status=status.HTTP_200_OK)

        except ValueError as e:
            return Response({
                'error': {
                    'code': 'TOKEN_REFRESH_FAILED',
                    'message': str(e),
                    'retryable': False,
                }
            }, status=status.HTTP_401_UNAUTHORIZED)


class LogoutView(APIView):
    """
    Logout user

    POST /api/auth/logout
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RefreshTokenSerializer(data=request.data)
        if not serializer.is_valid():
            return _validation_error(serializer)

        auth_service.logout(serializer.validated_data['refreshToken'])
        return Response({'message': 'Logged out successfully'}, status=status.HTTP_200_OK)


class CurrentUserView(APIView):
    """
    Get current user info with role and super admin flag

    GET /api/auth/me
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        return Response({'user': profile_service.describe_user(request.user.user_id)})


class ProfileView(APIView):
    """
    GET /api/auth/profile
    PATCH /api/auth/profile
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        profile = profile_service.get_profile(request.user.user_id)
        return Response({'profile': profile_service.serialize_profile(profile)})

    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile = profile_service.update_profile(
            request.user.user_id,
            user_name=serializer.validated_data.get('userName'),
            phone=serializer.validated_data.get('phone'),
        )
        return Response({'profile': profile_service.serialize_profile(profile)})


class LearningStyleView(APIView):
    """
    Save the learning style test result

    PUT /api/auth/profile/learning-style
    """
    permission_classes = [IsTokenAuthenticated]

    def put(self, request):
        serializer = LearningStyleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile = profile_service.set_learning_style(
            request.user.user_id,
            serializer.validated_data['learningStyle'],
        )
        return Response({'profile': profile_service.serialize_profile(profile)})


class PreferenceTestView(APIView):
    """
    Preference test questions and answer submission

    GET /api/auth/preference-test
    POST /api/auth/preference-test
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsTokenAuthenticated()]

    def get(self, request):
        return Response({
            'questions': [question.to_dict() for question in PARENT_TEST_QUESTIONS],
            'categories': [
                {'key': c.key, 'label': c.label, 'weight': c.weight}
                for c in TAG_CATEGORIES.values()
            ],
        })

    def post(self, request):
        serializer = PreferenceTestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile = profile_service.submit_preference_test(
            request.user.user_id,
            serializer.validated_data['tags'],
        )
        return Response({'profile': profile_service.serialize_profile(profile)}, status=status.HTTP_200_OK)
