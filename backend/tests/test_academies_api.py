"""
Academy endpoints: catalogue, staff membership, classes, bookmarks,
enrolments, recommendations and the dashboard.
"""

import pytest

from apps.academies.models import AcademyMember
from apps.authentication.models import Profile, UserRole

pytestmark = pytest.mark.django_db


@pytest.fixture
def staff(make_user, client_for, owner_client, academy):
    """Approved member who joined with the academy join code."""
    user = make_user(role=UserRole.ROLE_ADMIN, user_name='김강사')
    client = client_for(user)
    membership = client.post('/api/academies/join', {'code': academy.join_code}, format='json').json()['membership']
    owner_client.post(f'/api/academies/{academy.id}/members/{membership["id"]}/approve')
    return user, client, membership['id']


class TestCatalogue:

    def test_list_is_public_and_filters_by_region(self, api_client, academy):
        served = api_client.get('/api/academies/', {'region': 'dongtan4'}).json()
        assert served['total'] == 1
        assert served['academies'][0]['name'] == '수학의정석학원'

        elsewhere = api_client.get('/api/academies/', {'region': 'dongtan1'}).json()
        assert elsewhere['total'] == 0

    def test_detail(self, parent_client, academy):
        body = parent_client.get(f'/api/academies/{academy.id}').json()

        assert body['academy']['id'] == str(academy.id)
        assert body['classes'] == []
        assert body['is_bookmarked'] is False

    def test_unknown_academy(self, api_client):
        response = api_client.get('/api/academies/00000000-0000-0000-0000-000000000000')
        assert response.status_code == 404
        assert response.json()['error']['code'] == 'NOT_FOUND'


class TestCreateAcademy:

    def test_requires_approved_verification(self, make_user, client_for):
        client = client_for(make_user(role=UserRole.ROLE_ADMIN))
        response = client.post('/api/academies/', {'name': '새학원', 'subject': '영어'}, format='json')

        assert response.status_code == 403
        assert response.json()['error']['code'] == 'FORBIDDEN'

    def test_verified_owner_gets_join_code_and_owner_membership(self, owner, owner_client):
        response = owner_client.post(
            '/api/academies/',
            {'name': '새학원', 'subject': '영어', 'target_regions': ['dongtan2']},
            format='json'
        )

        assert response.status_code == 201
        academy = response.json()['academy']
        assert len(academy['join_code']) == 6
        assert academy['target_regions'] == ['dongtan2']

        member = AcademyMember.objects.get(academy_id=academy['id'], user_id=owner.id)
        assert member.is_owner and member.is_approved

    def test_super_admin_needs_no_verification(self, super_admin_client):
        response = super_admin_client.post('/api/academies/', {'name': '본사', 'subject': '수학'}, format='json')
        assert response.status_code == 201

    def test_unknown_tag_rejected(self, owner_client):
        response = owner_client.post(
            '/api/academies/',
            {'name': '새학원', 'subject': '영어', 'tags': ['subject:alchemy']},
            format='json'
        )
        assert response.status_code == 400

    def test_anonymous_write_rejected(self, api_client):
        response = api_client.post('/api/academies/', {'name': 'x', 'subject': 'y'}, format='json')
        assert response.status_code == 401


class TestTargeting:

    def test_set_target_tags(self, owner_client, academy):
        response = owner_client.put(
            f'/api/academies/{academy.id}/target-tags',
            {'tags': ['grade:high_1', 'subject:english']},
            format='json'
        )
        assert response.status_code == 200
        assert response.json()['target_tags'] == ['grade:high_1', 'subject:english']

    def test_unknown_region_rejected(self, owner_client, academy):
        response = owner_client.put(
            f'/api/academies/{academy.id}/target-regions',
            {'regions': ['atlantis']},
            format='json'
        )
        assert response.status_code == 400

    def test_outsider_cannot_edit(self, parent_client, academy):
        response = parent_client.put(
            f'/api/academies/{academy.id}/target-regions',
            {'regions': ['dongtan1']},
            format='json'
        )
        assert response.status_code == 403


class TestMembership:

    def test_join_creates_pending_request(self, make_user, client_for, academy):
        client = client_for(make_user(role=UserRole.ROLE_ADMIN))
        response = client.post('/api/academies/join', {'code': academy.join_code.lower()}, format='json')

        assert response.status_code == 201
        assert response.json()['membership']['status'] == 'pending'

        again = client.post('/api/academies/join', {'code': academy.join_code}, format='json')
        assert again.status_code == 409
        assert again.json()['error']['code'] == 'ALREADY_MEMBER'

    def test_invalid_code(self, parent_client, academy):
        response = parent_client.post('/api/academies/join', {'code': 'NOPE00'}, format='json')
        assert response.status_code == 404

    def test_regenerated_code_replaces_old_one(self, owner_client, parent_client, academy):
        old_code = academy.join_code
        new_code = owner_client.post(f'/api/academies/{academy.id}/join-code').json()['join_code']

        assert new_code != old_code
        assert parent_client.post('/api/academies/join', {'code': old_code}, format='json').status_code == 404

    def test_approved_member_is_listed_with_profile(self, owner_client, academy, staff):
        body = owner_client.get(f'/api/academies/{academy.id}/members').json()

        by_name = {m['profile']['userName']: m for m in body['members'] if m['profile']}
        assert by_name['김강사']['status'] == 'approved'
        assert body['academy']['join_code'] == academy.join_code

    def test_member_without_permission_cannot_manage_members(self, academy, staff):
        _, client, _ = staff
        assert client.get(f'/api/academies/{academy.id}/members').status_code == 403

    def test_granted_permission_applies(self, owner_client, academy, staff):
        _, client, member_id = staff
        response = owner_client.put(
            f'/api/academies/{academy.id}/members/{member_id}/permissions',
            {'permissions': {'manage_classes': True}},
            format='json'
        )
        assert response.status_code == 200
        permissions = response.json()['member']['permissions']
        assert permissions['manage_classes'] is True
        assert permissions['manage_members'] is False

        created = client.post(f'/api/academies/{academy.id}/classes', {'name': '중2 심화'}, format='json')
        assert created.status_code == 201

    def test_unknown_permission_rejected(self, owner_client, academy, staff):
        _, _, member_id = staff
        response = owner_client.put(
            f'/api/academies/{academy.id}/members/{member_id}/permissions',
            {'permissions': {'launch_rockets': True}},
            format='json'
        )
        assert response.status_code == 400

    def test_change_grade(self, owner_client, academy, staff):
        _, _, member_id = staff
        url = f'/api/academies/{academy.id}/members/{member_id}/grade'

        assert owner_client.put(url, {'grade': 'teacher'}, format='json').json()['member']['grade'] == 'teacher'
        assert owner_client.put(url, {'grade': 'owner'}, format='json').status_code == 400

    def test_owner_cannot_be_removed(self, owner, owner_client, academy):
        owner_member = AcademyMember.objects.get(academy=academy, user_id=owner.id)
        response = owner_client.delete(f'/api/academies/{academy.id}/members/{owner_member.id}')
        assert response.status_code == 403

    def test_remove_member(self, owner_client, academy, staff):
        _, _, member_id = staff
        response = owner_client.delete(f'/api/academies/{academy.id}/members/{member_id}')

        assert response.status_code == 204
        assert not AcademyMember.objects.filter(id=member_id).exists()


class TestClasses:

    def test_schedule_is_normalised(self, owner_client, academy):
        response = owner_client.post(
            f'/api/academies/{academy.id}/classes',
            {'name': '중2 내신', 'schedule': '금 10:00~12:00, 월/수 18:00~20:00'},
            format='json'
        )

        assert response.status_code == 201
        created = response.json()['class']
        assert created['schedule'] == '월 18:00~20:00, 수 18:00~20:00, 금 10:00~12:00'
        assert [e['day'] for e in created['schedule_entries']] == ['월', '수', '금']

    def test_unrecognised_schedule_rejected(self, owner_client, academy):
        response = owner_client.post(
            f'/api/academies/{academy.id}/classes',
            {'name': '중2 내신', 'schedule': '매주 협의'},
            format='json'
        )
        assert response.status_code == 400

    def test_curriculum_keeps_step_order(self, owner_client, academy):
        steps = [
            {'title': '1주차 방정식', 'description': '일차방정식 복습'},
            {'title': '2주차 함수'},
        ]
        created = owner_client.post(
            f'/api/academies/{academy.id}/classes',
            {'name': '중2 내신', 'curriculum': steps},
            format='json'
        ).json()['class']

        assert created['curriculum'] == [
            {'title': '1주차 방정식', 'description': '일차방정식 복습'},
            {'title': '2주차 함수', 'description': ''},
        ]

        reordered = owner_client.patch(
            f'/api/academies/classes/{created["id"]}',
            {'curriculum': [{'title': '2주차 함수'}, {'title': '1주차 방정식'}]},
            format='json'
        ).json()['class']
        assert [step['title'] for step in reordered['curriculum']] == ['2주차 함수', '1주차 방정식']

    @pytest.mark.parametrize('curriculum', [[{'description': '제목 없음'}], ['1주차'], {'title': '1주차'}])
    def test_malformed_curriculum_rejected(self, owner_client, academy, curriculum):
        response = owner_client.post(
            f'/api/academies/{academy.id}/classes',
            {'name': '중2 내신', 'curriculum': curriculum},
            format='json'
        )
        assert response.status_code == 400

    def test_curriculum_defaults_to_empty(self, owner_client, academy):
        created = owner_client.post(
            f'/api/academies/{academy.id}/classes',
            {'name': '중2 내신'},
            format='json'
        ).json()['class']
        assert created['curriculum'] == []

    def test_teacher_must_belong_to_academy(self, owner_client, academy):
        response = owner_client.post(
            f'/api/academies/{academy.id}/classes',
            {'name': '중2 내신', 'teacher_id': '00000000-0000-0000-0000-000000000000'},
            format='json'
        )
        assert response.status_code == 400


class TestBookmarks:

    def test_toggle(self, parent_client, academy):
        url = f'/api/academies/{academy.id}/bookmark'

        assert parent_client.post(url).json()['is_bookmarked'] is True
        assert parent_client.get(f'/api/academies/{academy.id}').json()['is_bookmarked'] is True
        assert len(parent_client.get('/api/academies/bookmarks').json()['bookmarks']) == 1

        assert parent_client.post(url).json()['is_bookmarked'] is False
        assert parent_client.get('/api/academies/bookmarks').json()['bookmarks'] == []


class TestEnrollment:

    def test_enrol_and_timetable(self, owner_client, parent_client, academy):
        evening = owner_client.post(
            f'/api/academies/{academy.id}/classes',
            {'name': '수학', 'schedule': '수 19:00~21:00, 월 18:00~20:00'},
            format='json'
        ).json()['class']
        morning = owner_client.post(
            f'/api/academies/{academy.id}/classes',
            {'name': '특강', 'schedule': '월 09:30~11:00'},
            format='json'
        ).json()['class']

        for academy_class in (evening, morning):
            url = f'/api/academies/classes/{academy_class["id"]}/enrollment'
            assert parent_client.post(url).status_code == 201

        slots = parent_client.get('/api/academies/timetable').json()['slots']
        assert [(s['day'], s['startTime'], s['class_name']) for s in slots] == [
            ('월', '09:30', '특강'),
            ('월', '18:00', '수학'),
            ('수', '19:00', '수학'),
        ]
        assert slots[0]['academy_name'] == '수학의정석학원'

    def test_double_enrolment_conflicts(self, owner_client, parent_client, academy):
        academy_class = owner_client.post(
            f'/api/academies/{academy.id}/classes', {'name': '수학'}, format='json'
        ).json()['class']
        url = f'/api/academies/classes/{academy_class["id"]}/enrollment'

        parent_client.post(url)
        response = parent_client.post(url)
        assert response.status_code == 409
        assert response.json()['error']['code'] == 'ALREADY_ENROLLED'

        assert parent_client.delete(url).status_code == 204
        assert parent_client.get(url).json()['is_enrolled'] is False


class TestRecommendations:

    def test_scores_against_query_tags(self, parent_client, academy):
        body = parent_client.get(
            '/api/academies/recommendations',
            {'tags': 'grade:mid_2,subject:math,goal:school_exam'}
        ).json()

        assert body['has_preferences'] is True
        [top] = body['recommendations']
        assert top['academy']['id'] == str(academy.id)
        assert top['score'] == 95
        assert top['matchedCategories'] == ['grade', 'subject', 'goal']

    def test_uses_stored_profile_tags(self, parent, parent_client, academy):
        Profile.objects.filter(user_id=parent.id).update(
            profile_tags=['grade:mid_2', 'subject:math', 'goal:school_exam']
        )
        body = parent_client.get('/api/academies/recommendations').json()
        assert len(body['recommendations']) == 1

    def test_low_scores_are_dropped(self, parent_client, academy):
        body = parent_client.get(
            '/api/academies/recommendations',
            {'tags': 'grade:high_3,subject:korean,goal:university'}
        ).json()
        assert body['recommendations'] == []

    def test_without_preferences(self, parent_client, academy):
        body = parent_client.get('/api/academies/recommendations').json()
        assert body == {'recommendations': [], 'has_preferences': False}


class TestDashboard:

    def test_owner_sees_stats(self, owner_client, parent_client, academy):
        parent_client.post(f'/api/academies/{academy.id}/bookmark')
        body = owner_client.get(f'/api/academies/{academy.id}/dashboard').json()

        assert body['stats']['bookmarks'] == 1
        assert body['stats']['members'] == 1
        assert body['can_manage_members'] is True

    def test_outsider_forbidden(self, parent_client, academy):
        assert parent_client.get(f'/api/academies/{academy.id}/dashboard').status_code == 403
