"""
Seminar endpoints: listing, seat-limited applications and staff management.
"""

from datetime import timedelta

import pytest
from django.utils import timezone

pytestmark = pytest.mark.django_db


@pytest.fixture
def create_seminar(owner_client, academy):
    def _create(**fields):
        payload = {
            'title': '2학기 내신 설명회',
            'date': (timezone.now() + timedelta(days=7)).isoformat(),
            **fields,
        }
        response = owner_client.post(f'/api/seminars/academy/{academy.id}', payload, format='json')
        assert response.status_code == 201
        return response.json()['seminar']
    return _create


def apply(client, seminar, **fields):
    payload = {'student_name': '홍길동', **fields}
    return client.post(f'/api/seminars/{seminar["id"]}/apply', payload, format='json')


class TestListing:

    def test_list_filters_by_region_and_status(self, api_client, create_seminar):
        create_seminar()
        create_seminar(title='마감된 설명회', status='closed')

        served = api_client.get('/api/seminars/', {'region': 'dongtan4', 'status': 'recruiting'}).json()
        assert [s['title'] for s in served['seminars']] == ['2학기 내신 설명회']
        assert api_client.get('/api/seminars/', {'region': 'dongtan1'}).json()['count'] == 0

    def test_default_capacity(self, create_seminar):
        seminar = create_seminar()
        assert seminar['capacity'] is None
        assert seminar['remaining_spots'] == 30

    def test_outsider_cannot_create(self, parent_client, academy):
        response = parent_client.post(
            f'/api/seminars/academy/{academy.id}',
            {'title': 'x', 'date': timezone.now().isoformat()},
            format='json'
        )
        assert response.status_code == 403


class TestApplications:

    def test_apply_counts_attendees(self, parent_client, create_seminar):
        seminar = create_seminar(capacity=5)
        response = apply(parent_client, seminar, attendee_count=2)

        assert response.status_code == 201
        assert response.json()['application']['attendee_count'] == 2

        detail = parent_client.get(f'/api/seminars/{seminar["id"]}').json()
        assert detail['seminar']['application_count'] == 1
        assert detail['seminar']['reserved_seats'] == 2
        assert detail['seminar']['remaining_spots'] == 3
        assert detail['my_application']['student_name'] == '홍길동'

    def test_full_seminar(self, make_user, client_for, parent_client, create_seminar):
        seminar = create_seminar(capacity=3)
        apply(parent_client, seminar, attendee_count=2)

        response = apply(client_for(make_user()), seminar, attendee_count=2)
        assert response.status_code == 409
        assert response.json()['error']['code'] == 'SEMINAR_FULL'
        assert response.json()['error']['details'] == {'remaining': 1}

    def test_closed_seminar(self, parent_client, create_seminar):
        seminar = create_seminar(status='closed')

        response = apply(parent_client, seminar)
        assert response.status_code == 409
        assert response.json()['error']['code'] == 'SEMINAR_CLOSED'

    def test_duplicate_application(self, parent_client, create_seminar):
        seminar = create_seminar()
        apply(parent_client, seminar)

        response = apply(parent_client, seminar)
        assert response.status_code == 409
        assert response.json()['error']['code'] == 'ALREADY_APPLIED'

    def test_cancel_frees_seats(self, parent_client, create_seminar):
        seminar = create_seminar(capacity=2)
        apply(parent_client, seminar, attendee_count=2)

        assert parent_client.delete(f'/api/seminars/{seminar["id"]}/apply').status_code == 204
        assert parent_client.get(f'/api/seminars/{seminar["id"]}').json()['seminar']['remaining_spots'] == 2
        assert parent_client.delete(f'/api/seminars/{seminar["id"]}/apply').status_code == 404

    def test_my_applications(self, parent_client, create_seminar):
        seminar = create_seminar()
        apply(parent_client, seminar)

        [mine] = parent_client.get('/api/seminars/applications/mine').json()['applications']
        assert mine['seminar']['id'] == seminar['id']


class TestStaffManagement:

    def test_close_then_applications_rejected(self, owner_client, parent_client, create_seminar):
        seminar = create_seminar()
        response = owner_client.put(f'/api/seminars/{seminar["id"]}/status', {'status': 'closed'}, format='json')

        assert response.json()['seminar']['status'] == 'closed'
        assert apply(parent_client, seminar).status_code == 409

    def test_staff_sees_applications(self, owner_client, parent_client, create_seminar):
        seminar = create_seminar()
        apply(parent_client, seminar, message='주차 가능한가요?')

        body = owner_client.get(f'/api/seminars/{seminar["id"]}/applications').json()
        assert [a['message'] for a in body['applications']] == ['주차 가능한가요?']

    def test_parent_cannot_see_applications(self, parent_client, create_seminar):
        seminar = create_seminar()
        assert parent_client.get(f'/api/seminars/{seminar["id"]}/applications').status_code == 403
