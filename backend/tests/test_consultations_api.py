"""
Consultation requests and dated reservations.
"""

from datetime import timedelta

import pytest
from django.utils import timezone

pytestmark = pytest.mark.django_db


def book(client, academy, days_ahead=3, **fields):
    payload = {
        'student_name': '홍길동',
        'student_grade': '중2',
        'reservation_date': (timezone.localdate() + timedelta(days=days_ahead)).isoformat(),
        'reservation_time': '15:30',
        **fields,
    }
    return client.post(f'/api/consultations/academy/{academy.id}/reservations', payload, format='json')


class TestConsultations:

    def test_parent_requests_and_staff_completes(self, owner_client, parent_client, academy):
        response = parent_client.post(
            f'/api/consultations/academy/{academy.id}',
            {'student_name': '홍길동', 'message': '수학 진도 상담'},
            format='json'
        )
        assert response.status_code == 201
        consultation = response.json()['consultation']
        assert consultation['status'] == 'pending'

        listed = owner_client.get(f'/api/consultations/academy/{academy.id}', {'status': 'pending'}).json()
        assert [c['id'] for c in listed['consultations']] == [consultation['id']]

        completed = owner_client.post(f'/api/consultations/{consultation["id"]}/complete').json()
        assert completed['consultation']['status'] == 'completed'

    def test_parent_cannot_list(self, parent_client, academy):
        assert parent_client.get(f'/api/consultations/academy/{academy.id}').status_code == 403


class TestReservations:

    def test_book(self, parent_client, academy):
        response = book(parent_client, academy)

        assert response.status_code == 201
        reservation = response.json()['reservation']
        assert reservation['status'] == 'pending'
        assert reservation['academy']['name'] == '수학의정석학원'

        mine = parent_client.get('/api/consultations/reservations/mine').json()['reservations']
        assert [r['id'] for r in mine] == [reservation['id']]

    def test_past_date_rejected(self, parent_client, academy):
        response = book(parent_client, academy, days_ahead=-1)
        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'

    def test_malformed_time_rejected(self, parent_client, academy):
        assert book(parent_client, academy, reservation_time='3pm').status_code == 400

    def test_parent_cancels_pending(self, parent_client, academy):
        reservation = book(parent_client, academy).json()['reservation']
        response = parent_client.post(f'/api/consultations/reservations/{reservation["id"]}/cancel')

        assert response.status_code == 200
        assert response.json()['reservation']['status'] == 'cancelled'

    def test_confirmed_reservation_cannot_be_cancelled_by_parent(self, owner_client, parent_client, academy):
        reservation = book(parent_client, academy).json()['reservation']
        owner_client.put(
            f'/api/consultations/reservations/{reservation["id"]}/status',
            {'status': 'confirmed'},
            format='json'
        )

        response = parent_client.post(f'/api/consultations/reservations/{reservation["id"]}/cancel')
        assert response.status_code == 409
        assert response.json()['error']['code'] == 'INVALID_STATUS'

    def test_other_parent_cannot_cancel(self, make_user, client_for, parent_client, academy):
        reservation = book(parent_client, academy).json()['reservation']
        other = client_for(make_user())

        response = other.post(f'/api/consultations/reservations/{reservation["id"]}/cancel')
        assert response.status_code == 403

    def test_staff_list_includes_parent(self, owner_client, parent_client, academy):
        book(parent_client, academy)

        [row] = owner_client.get(f'/api/consultations/academy/{academy.id}/reservations').json()['reservations']
        assert row['parent']['userName'] == '홍길동'

    def test_staff_status_must_be_known(self, owner_client, parent_client, academy):
        reservation = book(parent_client, academy).json()['reservation']
        response = owner_client.put(
            f'/api/consultations/reservations/{reservation["id"]}/status',
            {'status': 'pending'},
            format='json'
        )
        assert response.status_code == 400

    def test_parent_cannot_set_status(self, parent_client, academy):
        reservation = book(parent_client, academy).json()['reservation']
        response = parent_client.put(
            f'/api/consultations/reservations/{reservation["id"]}/status',
            {'status': 'confirmed'},
            format='json'
        )
        assert response.status_code == 403
