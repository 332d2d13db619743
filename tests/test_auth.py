from unittest import mock

from conftest import login, make_user

from newsdesk.auth.provider import GENERIC_FAILURE, INVALID_CREDENTIALS


def test_unauthenticated_dashboard_redirects_to_login(client):
    r = client.get('/dashboard/')
    assert r.status_code == 302
    assert '/login' in r.headers['Location']

    r = client.get('/dashboard/tags')
    assert r.status_code == 302
    assert '/login' in r.headers['Location']


def test_seeded_admin_can_sign_in(client):
    r = login(client)
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/dashboard/')

    r = client.get('/dashboard/')
    assert r.status_code == 200
    assert 'Dashboard' in r.get_data(as_text=True)


def test_wrong_password_shows_invalid_credentials(client):
    r = login(client, password='nope')
    assert r.status_code == 200
    assert INVALID_CREDENTIALS in r.get_data(as_text=True)


def test_unknown_email_shows_invalid_credentials(client):
    r = login(client, email='ghost@example.com')
    assert INVALID_CREDENTIALS in r.get_data(as_text=True)


def test_email_is_case_insensitive(client):
    r = login(client, email='ADMIN@Example.com')
    assert r.status_code == 302


def test_inactive_user_gets_generic_message(app, client):
    with app.app_context():
        make_user('sleepy@example.com', status='inactive')
    r = login(client, email='sleepy@example.com', password='secret123')
    assert r.status_code == 200
    assert GENERIC_FAILURE in r.get_data(as_text=True)


def test_lookup_failure_gets_generic_message(client):
    failing = {'data': None, 'error': 'Failed to fetch user'}
    with mock.patch('newsdesk.auth.provider.users.get_user_credentials', return_value=failing):
        r = login(client)
    assert GENERIC_FAILURE in r.get_data(as_text=True)


def test_next_redirect_is_local_only(client):
    r = client.post('/login?next=/dashboard/tags',
                    data={'email': 'admin@example.com', 'password': 'admin123'})
    assert r.headers['Location'].endswith('/dashboard/tags')

    client.get('/logout')
    r = client.post('/login?next=//evil.example.com/',
                    data={'email': 'admin@example.com', 'password': 'admin123'})
    assert 'evil.example.com' not in r.headers['Location']


def test_logout(admin_client):
    r = admin_client.get('/logout')
    assert r.status_code == 302
    r = admin_client.get('/dashboard/')
    assert r.status_code == 302


def test_editor_cannot_manage_users(app, client):
    with app.app_context():
        make_user('editor@example.com')
    login(client, email='editor@example.com', password='secret123')

    assert client.get('/dashboard/tags').status_code == 200
    assert client.get('/dashboard/users').status_code == 403
