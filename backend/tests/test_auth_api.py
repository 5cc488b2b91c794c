"""
Account endpoints: registration, login, token rotation, profile and the
preference test.
"""

import pytest

from apps.authentication.models import Profile, RefreshToken, UserRole
from apps.authentication.tasks import cleanup_expired_tokens

pytestmark = pytest.mark.django_db

ANSWERS = [
    'grade:mid_2', 'subject:math', 'goal:school_exam', 'style:balanced',
    'class_size:small', 'delivery:offline', 'mgmt:homework',
]


def register(api_client, email='parent@example.com', **extra):
    payload = {'email': email, 'password': 'password123', 'userName': '김부모', **extra}
    return api_client.post('/api/auth/register', payload, format='json')


class TestRegistration:

    def test_register_creates_profile_and_role(self, api_client):
        response = register(api_client, role='student')

        assert response.status_code == 201
        body = response.json()
        assert body['user']['role'] == 'student'
        assert body['user']['isSuperAdmin'] is False
        assert body['user']['profile']['userName'] == '김부모'
        assert body['tokens']['accessToken']

        profile = Profile.objects.get(email='parent@example.com')
        assert UserRole.objects.get(user_id=profile.user_id).role == 'student'

    def test_default_role_is_parent(self, api_client):
        assert register(api_client).json()['user']['role'] == 'parent'

    def test_duplicate_email_conflicts(self, api_client):
        register(api_client)
        response = register(api_client, email='PARENT@example.com')

        assert response.status_code == 409
        assert response.json()['error']['code'] == 'USER_EXISTS'

    def test_short_password_rejected(self, api_client):
        response = api_client.post(
            '/api/auth/register',
            {'email': 'a@example.com', 'password': 'short'},
            format='json'
        )
        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'


class TestLoginAndTokens:

    def test_login(self, api_client):
        register(api_client)
        response = api_client.post(
            '/api/auth/login',
            {'email': 'parent@example.com', 'password': 'password123'},
            format='json'
        )
        assert response.status_code == 200
        assert response.json()['tokens']['refreshToken']

    def test_wrong_password(self, api_client):
        register(api_client)
        response = api_client.post(
            '/api/auth/login',
            {'email': 'parent@example.com', 'password': 'wrong-password'},
            format='json'
        )
        assert response.status_code == 401
        assert response.json()['error']['code'] == 'AUTHENTICATION_FAILED'

    def test_refresh_rotates_token(self, api_client):
        tokens = register(api_client).json()['tokens']

        first = api_client.post('/api/auth/refresh', {'refreshToken': tokens['refreshToken']}, format='json')
        assert first.status_code == 200
        assert first.json()['tokens']['refreshToken'] != tokens['refreshToken']

        replay = api_client.post('/api/auth/refresh', {'refreshToken': tokens['refreshToken']}, format='json')
        assert replay.status_code == 401

    def test_logout_revokes_refresh_token(self, api_client):
        tokens = register(api_client).json()['tokens']
        api_client.post('/api/auth/logout', {'refreshToken': tokens['refreshToken']}, format='json')

        assert RefreshToken.objects.get(token=tokens['refreshToken']).is_revoked

    def test_me_requires_token(self, api_client):
        response = api_client.get('/api/auth/me')
        assert response.status_code == 401
        assert response.json()['error']['code'] == 'UNAUTHORIZED'

    def test_invalid_token(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-jwt')
        assert api_client.get('/api/auth/me').status_code == 401

    def test_cleanup_task_removes_revoked_tokens(self, api_client):
        from datetime import timedelta
        from django.utils import timezone

        tokens = register(api_client).json()['tokens']
        RefreshToken.objects.filter(token=tokens['refreshToken']).update(
            revoked_at=timezone.now() - timedelta(days=2)
        )
        assert cleanup_expired_tokens() == 1


class TestProfile:

    def test_me(self, parent_client, parent):
        body = parent_client.get('/api/auth/me').json()['user']
        assert body['id'] == str(parent.id)
        assert body['role'] == 'parent'

    def test_update_profile(self, parent_client):
        response = parent_client.patch('/api/auth/profile', {'phone': '010-1234-5678'}, format='json')
        assert response.status_code == 200
        assert response.json()['profile']['phone'] == '010-1234-5678'

    def test_preference_questions_are_public(self, api_client):
        body = api_client.get('/api/auth/preference-test').json()
        assert len(body['questions']) == 8
        assert body['questions'][1]['maxSelect'] == 3

    def test_submit_preference_test(self, parent_client, parent):
        response = parent_client.post('/api/auth/preference-test', {'tags': ANSWERS}, format='json')

        assert response.status_code == 200
        assert response.json()['profile']['profileTags'] == ANSWERS
        assert Profile.objects.get(user=parent).profile_tags == ANSWERS

    def test_incomplete_preference_test_rejected(self, parent_client):
        response = parent_client.post('/api/auth/preference-test', {'tags': ANSWERS[:3]}, format='json')
        assert response.status_code == 400
