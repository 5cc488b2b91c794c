"""
Shared fixtures: accounts, authenticated API clients and a listed academy.
"""

import itertools
import pytest
from rest_framework.test import APIClient

from apps.academies.services import academy_service
from apps.authentication.models import UserRole
from apps.authentication.services import auth_service
from apps.verification.models import BusinessVerification

PASSWORD = 'password123'

ACADEMY_TAGS = [
    'grade:mid_2',
    'subject:math',
    'goal:school_exam',
    'style:mentored',
    'class_size:small',
    'delivery:offline',
    'mgmt:homework',
]

_email_counter = itertools.count()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    """Factory registering an account (profile and role included)."""
    def _make_user(role=UserRole.ROLE_PARENT, super_admin=False, user_name='홍길동'):
        user = auth_service.register(
            f'user{next(_email_counter)}@example.com',
            PASSWORD,
            role=role,
            user_name=user_name,
        )
        if super_admin:
            UserRole.objects.filter(user=user).update(is_super_admin=True)
        return user
    return _make_user


@pytest.fixture
def client_for(db):
    """Factory returning an APIClient carrying a bearer token for a user."""
    def _client_for(user):
        tokens = auth_service.generate_tokens(user.id, user.email)
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {tokens["accessToken"]}')
        return client
    return _client_for


@pytest.fixture
def parent(make_user):
    return make_user()


@pytest.fixture
def parent_client(client_for, parent):
    return client_for(parent)


@pytest.fixture
def super_admin(make_user):
    return make_user(role=UserRole.ROLE_ADMIN, super_admin=True, user_name='운영자')


@pytest.fixture
def super_admin_client(client_for, super_admin):
    return client_for(super_admin)


@pytest.fixture
def owner(make_user):
    """Academy operator with an approved business verification."""
    user = make_user(role=UserRole.ROLE_ADMIN, user_name='원장')
    BusinessVerification.objects.create(
        user=user,
        document_url='https://files.example.com/doc.pdf',
        business_name='수학의정석학원',
        business_number='220-81-62517',
        status=BusinessVerification.STATUS_APPROVED,
    )
    return user


@pytest.fixture
def owner_client(client_for, owner):
    return client_for(owner)


@pytest.fixture
def academy(owner):
    return academy_service.create_academy(owner.id, {
        'name': '수학의정석학원',
        'subject': '수학',
        'address': '화성시 동탄대로 1',
        'tags': ACADEMY_TAGS,
        'target_regions': ['dongtan4'],
    })
