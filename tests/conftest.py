import pytest

from newsdesk import create_app
from newsdesk.config import TestConfig
from newsdesk.data import articles, categories, tags, users


class FakeMediaClient:
    """Stands in for the hosted media API; records every upload."""

    def __init__(self):
        self.uploads = []
        self.error = None

    def upload(self, file, kind=None, folder=None):
        self.uploads.append((file.filename, kind))
        if self.error:
            return {'success': False, 'error': self.error}
        return {'success': True, 'url': f'https://cdn.example.com/{file.filename}',
                'public_id': file.filename}


@pytest.fixture()
def media():
    return FakeMediaClient()


@pytest.fixture()
def app(media):
    return create_app(TestConfig, media_client=media)


@pytest.fixture()
def ctx(app):
    with app.app_context():
        yield app


@pytest.fixture()
def client(app):
    return app.test_client()


def login(client, email='admin@example.com', password='admin123'):
    return client.post('/login', data={'email': email, 'password': password})


@pytest.fixture()
def admin_client(client):
    r = login(client)
    assert r.status_code == 302
    return client


def make_user(email, password='secret123', role='editor', status='active'):
    created = users.create_user({'firstname': 'Test', 'lastname': 'User', 'email': email,
                                 'password': password, 'role': role, 'status': status})
    assert created['error'] is None
    return created['data']


def make_category(name='News'):
    created = categories.create_category({'name': name, 'description': f'{name} stories'})
    assert created['error'] is None
    return created['data']


def make_subcategory(category_id, name='Local'):
    created = categories.create_subcategory({'name': name, 'category_id': category_id})
    assert created['error'] is None
    return created['data']


def make_tag(name, color='#ff0000'):
    created = tags.create_tag({'name': name, 'color': color})
    assert created['error'] is None
    return created['data']


def make_article(title, category_id=None, tag_ids=(), published_at=None, **extra):
    data = {'title': title, 'content': f'{title} body', 'category_id': category_id,
            'tag_ids': list(tag_ids)}
    if published_at is not None:
        data['published_at'] = published_at
    data.update(extra)
    created = articles.create_article(data)
    assert created['error'] is None
    return created['data']
