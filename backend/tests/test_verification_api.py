"""
Business verification: submission, super admin review and result emails.

The Resend HTTP call is patched at `requests.post` inside the email module.
"""

from unittest import mock

import pytest
import requests
from kombu.exceptions import OperationalError

from apps.authentication.models import UserRole
from apps.realtime.services import realtime_service
from apps.verification.email import SUBJECT_APPROVED, SUBJECT_REJECTED
from apps.verification.models import BusinessVerification

pytestmark = pytest.mark.django_db

SUBMISSION = {
    'document_url': 'https://files.example.com/registration.pdf',
    'business_name': '영어나라학원',
    'business_number': '2208162517',
}


def provider_response(status_code=200, payload=None):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = payload if payload is not None else {'id': 'email_123'}
    return response


@pytest.fixture
def applicant(make_user):
    return make_user(role=UserRole.ROLE_ADMIN, user_name='김원장')


@pytest.fixture
def applicant_client(client_for, applicant):
    return client_for(applicant)


@pytest.fixture
def submitted(applicant_client):
    response = applicant_client.post('/api/verification/', SUBMISSION, format='json')
    assert response.status_code == 201
    return response.json()['verification']


@pytest.fixture
def resend():
    with mock.patch('apps.verification.email.requests.post', return_value=provider_response()) as post:
        yield post


class TestSubmission:

    def test_submit_formats_number(self, submitted):
        assert submitted['business_number'] == '220-81-62517'
        assert submitted['status'] == 'pending'

    def test_get_mine(self, applicant_client, submitted):
        assert applicant_client.get('/api/verification/').json()['verification']['id'] == submitted['id']

    def test_nothing_submitted(self, parent_client):
        assert parent_client.get('/api/verification/').json() == {'verification': None}

    def test_invalid_checksum(self, applicant_client):
        response = applicant_client.post(
            '/api/verification/',
            {**SUBMISSION, 'business_number': '123-45-67890'},
            format='json'
        )
        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'

    def test_second_submission_conflicts(self, applicant_client, submitted):
        response = applicant_client.post('/api/verification/', SUBMISSION, format='json')
        assert response.status_code == 409
        assert response.json()['error']['code'] == 'ALREADY_SUBMITTED'

    def test_resubmit_after_rejection(self, applicant_client, super_admin_client, submitted, resend):
        super_admin_client.post(
            f'/api/verification/admin/{submitted["id"]}/reject',
            {'reason': '서류가 흐립니다'},
            format='json'
        )

        response = applicant_client.post(
            '/api/verification/',
            {**SUBMISSION, 'business_number': '124-81-00998'},
            format='json'
        )
        assert response.status_code == 201
        verification = response.json()['verification']
        assert verification['id'] == submitted['id']
        assert verification['status'] == 'pending'
        assert verification['rejection_reason'] is None


class TestReview:

    def test_approve_notifies_and_emails(self, applicant, super_admin, super_admin_client, submitted, resend):
        with mock.patch.object(realtime_service, 'emit_verification_update') as emit:
            response = super_admin_client.post(f'/api/verification/admin/{submitted["id"]}/approve')

        assert response.status_code == 200
        body = response.json()['verification']
        assert body['status'] == 'approved'
        assert body['email'] == applicant.email
        assert body['reviewed_at']

        user_id, event, _ = emit.call_args.args
        assert str(user_id) == str(applicant.id)
        assert event['status'] == 'approved'

        message = resend.call_args.kwargs['json']
        assert message['to'] == [applicant.email]
        assert message['subject'] == SUBJECT_APPROVED
        assert '영어나라학원' in message['html']
        assert resend.call_args.kwargs['headers']['Authorization'] == 'Bearer test-resend-key'

        verification = BusinessVerification.objects.get(id=submitted['id'])
        assert verification.reviewed_by_id == super_admin.id

    def test_approved_owner_can_create_academy(self, applicant_client, super_admin_client, submitted, resend):
        super_admin_client.post(f'/api/verification/admin/{submitted["id"]}/approve')

        response = applicant_client.post('/api/academies/', {'name': '영어나라학원', 'subject': '영어'}, format='json')
        assert response.status_code == 201

    def test_reject_requires_reason(self, super_admin_client, submitted, resend):
        response = super_admin_client.post(
            f'/api/verification/admin/{submitted["id"]}/reject',
            {'reason': '  '},
            format='json'
        )
        assert response.status_code == 400
        assert not resend.called

    def test_reject_emails_reason(self, super_admin_client, submitted, resend):
        response = super_admin_client.post(
            f'/api/verification/admin/{submitted["id"]}/reject',
            {'reason': '사업자등록번호가 일치하지 않습니다'},
            format='json'
        )

        assert response.json()['verification']['status'] == 'rejected'
        message = resend.call_args.kwargs['json']
        assert message['subject'] == SUBJECT_REJECTED
        assert '사업자등록번호가 일치하지 않습니다' in message['html']

    def test_only_pending_can_be_reviewed(self, super_admin_client, submitted, resend):
        super_admin_client.post(f'/api/verification/admin/{submitted["id"]}/approve')

        response = super_admin_client.post(
            f'/api/verification/admin/{submitted["id"]}/reject',
            {'reason': '번복'},
            format='json'
        )
        assert response.status_code == 409
        assert response.json()['error']['code'] == 'ALREADY_REVIEWED'

    def test_provider_failure_does_not_block_review(self, super_admin_client, submitted):
        with mock.patch(
            'apps.verification.email.requests.post',
            side_effect=requests.ConnectionError('unreachable'),
        ):
            response = super_admin_client.post(f'/api/verification/admin/{submitted["id"]}/approve')

        assert response.status_code == 200
        assert response.json()['verification']['status'] == 'approved'

    def test_unreachable_broker_does_not_block_review(self, super_admin_client, submitted):
        with mock.patch(
            'apps.verification.tasks.send_verification_email.delay',
            side_effect=OperationalError('broker down'),
        ):
            response = super_admin_client.post(f'/api/verification/admin/{submitted["id"]}/approve')

        assert response.status_code == 200
        assert BusinessVerification.objects.get(id=submitted['id']).status == 'approved'

    def test_review_requires_super_admin(self, owner_client, submitted):
        response = owner_client.post(f'/api/verification/admin/{submitted["id"]}/approve')
        assert response.status_code == 403

    def test_list_and_stats(self, super_admin_client, owner, submitted):
        pending = super_admin_client.get('/api/verification/admin', {'status': 'pending'}).json()
        assert [v['id'] for v in pending['verifications']] == [submitted['id']]

        stats = super_admin_client.get('/api/verification/admin/stats').json()
        assert stats == {'pending': 1, 'approved': 1, 'rejected': 0, 'total': 2}

    def test_unknown_status_filter(self, super_admin_client):
        assert super_admin_client.get('/api/verification/admin', {'status': 'maybe'}).status_code == 400


class TestEmailEndpoint:

    def test_missing_fields(self, super_admin_client, resend):
        response = super_admin_client.post('/api/verification/email', {'email': 'a@example.com'}, format='json')

        assert response.status_code == 400
        assert response.json()['error']['message'] == 'Missing required fields'
        assert not resend.called

    def test_sends(self, super_admin_client, resend):
        response = super_admin_client.post(
            '/api/verification/email',
            {'email': 'a@example.com', 'businessName': '영어나라학원', 'status': 'rejected'},
            format='json'
        )

        assert response.status_code == 200
        assert response.json() == {'id': 'email_123'}
        assert '제출하신 서류를 확인할 수 없습니다.' in resend.call_args.kwargs['json']['html']

    def test_provider_error(self, super_admin_client):
        refused = provider_response(422, {'message': 'Invalid `to` field'})
        with mock.patch('apps.verification.email.requests.post', return_value=refused):
            response = super_admin_client.post(
                '/api/verification/email',
                {'email': 'not-an-email', 'businessName': '영어나라학원', 'status': 'approved'},
                format='json'
            )

        assert response.status_code == 500
        error = response.json()['error']
        assert error['code'] == 'EMAIL_SEND_FAILED'
        assert error['details'] == {'provider': {'message': 'Invalid `to` field'}}

    def test_requires_super_admin(self, parent_client):
        response = parent_client.post(
            '/api/verification/email',
            {'email': 'a@example.com', 'businessName': 'x', 'status': 'approved'},
            format='json'
        )
        assert response.status_code == 403

    def test_body_must_be_object(self, super_admin_client, resend):
        response = super_admin_client.post('/api/verification/email', ['a@example.com'], format='json')

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'
        assert not resend.called
