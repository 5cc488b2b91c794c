"""
Regional feed: publishing, region and type filters, bookmarks and likes.
"""

import pytest

from apps.academies.services import academy_service

pytestmark = pytest.mark.django_db


@pytest.fixture
def publish(owner_client, academy):
    def _publish(title='중간고사 대비 특강', type='notice', academy_id=None):
        response = owner_client.post(
            '/api/feed/',
            {'academy_id': str(academy_id or academy.id), 'type': type, 'title': title},
            format='json'
        )
        assert response.status_code == 201
        return response.json()['post']
    return _publish


class TestPublishing:

    def test_post_targets_academy_regions(self, publish):
        post = publish()

        assert post['target_regions'] == ['dongtan4']
        assert post['like_count'] == 0
        assert post['academy']['name'] == '수학의정석학원'

    def test_outsider_cannot_publish(self, parent_client, academy):
        response = parent_client.post(
            '/api/feed/',
            {'academy_id': str(academy.id), 'title': '광고'},
            format='json'
        )
        assert response.status_code == 403

    def test_delete(self, owner_client, api_client, publish, academy):
        post = publish()

        assert owner_client.delete(f'/api/feed/{post["id"]}').status_code == 204
        assert api_client.get(f'/api/feed/academy/{academy.id}').json()['posts'] == []


class TestListing:

    def test_region_filter_and_default_region(self, api_client, publish):
        publish()

        assert api_client.get('/api/feed/', {'region': 'dongtan4'}).json()['count'] == 1
        assert api_client.get('/api/feed/', {'region': 'dongtan1'}).json()['count'] == 0
        assert api_client.get('/api/feed/').json()['count'] == 1

    def test_newest_first(self, api_client, publish):
        publish(title='먼저')
        publish(title='나중')

        titles = [p['title'] for p in api_client.get('/api/feed/').json()['posts']]
        assert titles == ['나중', '먼저']

    def test_page_size_applies_after_region(self, api_client, publish, owner, settings):
        settings.FEED_PAGE_SIZE = 2
        elsewhere = academy_service.create_academy(owner.id, {
            'name': '영어나라',
            'subject': '영어',
            'target_regions': ['dongtan1', 'dongtan5'],
        })
        publish(title='첫째')
        publish(title='둘째')
        publish(title='셋째')
        publish(title='다른 동네', academy_id=elsewhere.id)

        titles = [p['title'] for p in api_client.get('/api/feed/', {'region': 'dongtan4'}).json()['posts']]
        assert titles == ['셋째', '둘째']

    def test_type_filter(self, api_client, publish):
        publish(title='공지', type='notice')
        publish(title='설명회', type='seminar')

        posts = api_client.get('/api/feed/', {'filter': 'seminar'}).json()['posts']
        assert [p['title'] for p in posts] == ['설명회']

    def test_unknown_filter(self, api_client):
        response = api_client.get('/api/feed/', {'filter': 'popular'})
        assert response.status_code == 400

    def test_bookmarked_filter(self, owner, parent_client, publish, academy):
        other = academy_service.create_academy(owner.id, {
            'name': '영어나라',
            'subject': '영어',
            'target_regions': ['dongtan4'],
        })
        publish(title='수학 공지')
        publish(title='영어 공지', academy_id=other.id)

        parent_client.post(f'/api/academies/{academy.id}/bookmark')
        posts = parent_client.get('/api/feed/', {'filter': 'bookmarked'}).json()['posts']
        assert [p['title'] for p in posts] == ['수학 공지']

    def test_bookmarked_filter_anonymous_is_empty(self, api_client, publish):
        publish()
        assert api_client.get('/api/feed/', {'filter': 'bookmarked'}).json()['posts'] == []


class TestLikes:

    def test_toggle(self, make_user, client_for, parent_client, publish):
        post = publish()
        url = f'/api/feed/{post["id"]}/like'

        assert parent_client.post(url).json() == {'liked': True, 'like_count': 1}
        assert client_for(make_user()).post(url).json() == {'liked': True, 'like_count': 2}

        [listed] = parent_client.get('/api/feed/').json()['posts']
        assert listed['liked'] is True
        assert listed['like_count'] == 2

        assert parent_client.post(url).json() == {'liked': False, 'like_count': 1}

    def test_like_unknown_post(self, parent_client):
        response = parent_client.post('/api/feed/00000000-0000-0000-0000-000000000000/like')
        assert response.status_code == 404
