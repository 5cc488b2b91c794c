"""
Children of a parent and parent/student account links via one-off codes.
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from apps.authentication.models import UserRole
from apps.core.utils.codes import CODE_ALPHABET, CODE_LENGTH
from apps.families.models import ChildConnection
from apps.families.tasks import expire_connection_codes

pytestmark = pytest.mark.django_db


@pytest.fixture
def student(make_user):
    return make_user(role=UserRole.ROLE_STUDENT, user_name='홍학생')


@pytest.fixture
def student_client(client_for, student):
    return client_for(student)


@pytest.fixture
def child(parent_client):
    return parent_client.post('/api/families/children', {'name': '홍학생', 'grade': '중2'}, format='json').json()['child']


def issue_code(client, child=None):
    payload = {'child_id': child['id']} if child else {}
    response = client.post('/api/families/connections', payload, format='json')
    assert response.status_code == 201
    return response.json()['connection']


class TestChildren:

    def test_add_update_delete(self, parent_client, child):
        assert child['grade'] == '중2'

        updated = parent_client.patch(f'/api/families/children/{child["id"]}', {'grade': '중3'}, format='json')
        assert updated.json()['child']['grade'] == '중3'

        assert parent_client.delete(f'/api/families/children/{child["id"]}').status_code == 204
        assert parent_client.get('/api/families/children').json()['children'] == []

    def test_children_are_private(self, make_user, client_for, child):
        other = client_for(make_user())

        assert other.get('/api/families/children').json()['children'] == []
        assert other.delete(f'/api/families/children/{child["id"]}').status_code == 404


class TestConnectionCodes:

    def test_issued_code_shape(self, parent_client, child):
        connection = issue_code(parent_client, child)

        assert len(connection['connection_code']) == CODE_LENGTH
        assert set(connection['connection_code']) <= set(CODE_ALPHABET)
        assert connection['status'] == 'pending'
        assert connection['child']['id'] == child['id']
        assert connection['is_expired'] is False

    def test_student_redeems(self, parent, parent_client, student, student_client, child):
        code = issue_code(parent_client, child)['connection_code']
        response = student_client.post('/api/families/connect', {'code': code.lower()}, format='json')

        assert response.status_code == 200
        connection = response.json()['connection']
        assert connection['status'] == 'connected'
        assert connection['student_user_id'] == str(student.id)
        assert connection['connected_at']

        [linked] = student_client.get('/api/families/parents').json()['connections']
        assert linked['parent_id'] == str(parent.id)

    def test_code_is_single_use(self, make_user, client_for, parent_client, student_client):
        code = issue_code(parent_client)['connection_code']
        student_client.post('/api/families/connect', {'code': code}, format='json')

        second = client_for(make_user(role=UserRole.ROLE_STUDENT))
        response = second.post('/api/families/connect', {'code': code}, format='json')
        assert response.status_code == 409
        assert response.json()['error']['code'] == 'CODE_USED'

    def test_expired_code(self, parent_client, student_client):
        connection = issue_code(parent_client)
        ChildConnection.objects.filter(id=connection['id']).update(expires_at=timezone.now() - timedelta(minutes=1))

        response = student_client.post('/api/families/connect', {'code': connection['connection_code']}, format='json')
        assert response.status_code == 409
        assert response.json()['error']['code'] == 'CODE_EXPIRED'

    def test_unknown_code(self, student_client):
        response = student_client.post('/api/families/connect', {'code': 'ZZZZZZ'}, format='json')
        assert response.status_code == 404

    def test_parent_cannot_redeem(self, make_user, client_for, parent_client):
        code = issue_code(parent_client)['connection_code']
        response = client_for(make_user()).post('/api/families/connect', {'code': code}, format='json')
        assert response.status_code == 403

    def test_revoke(self, parent_client):
        connection = issue_code(parent_client)

        assert parent_client.delete(f'/api/families/connections/{connection["id"]}').status_code == 204
        assert parent_client.get('/api/families/connections').json()['connections'] == []


class TestExpiryTask:

    def test_deletes_only_stale_pending_codes(self, parent_client, student_client):
        stale = issue_code(parent_client)
        fresh = issue_code(parent_client)
        used = issue_code(parent_client)
        student_client.post('/api/families/connect', {'code': used['connection_code']}, format='json')

        past = timezone.now() - timedelta(hours=1)
        ChildConnection.objects.filter(id__in=[stale['id'], used['id']]).update(expires_at=past)

        assert expire_connection_codes() == 1
        remaining = set(str(pk) for pk in ChildConnection.objects.values_list('id', flat=True))
        assert remaining == {fresh['id'], used['id']}
