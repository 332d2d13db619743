import hashlib
import io

import requests
from werkzeug.datastructures import FileStorage

from newsdesk.services import MediaClient, resource_type_for
from newsdesk.services.media import sign_params


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError('no json')
        return self._payload


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response or FakeResponse(200, {
            'secure_url': 'https://res.example.com/demo/image/upload/v1/newsdesk/cat.png',
            'public_id': 'newsdesk/cat',
            'resource_type': 'image',
        })
        self.exc = exc
        self.posts = []

    def post(self, url, data=None, files=None, timeout=None):
        self.posts.append({'url': url, 'data': data, 'files': files, 'timeout': timeout})
        if self.exc:
            raise self.exc
        return self.response


def _file(name='cat.png', mimetype='image/png'):
    return FileStorage(stream=io.BytesIO(b'data'), filename=name, content_type=mimetype)


def _client(session, **overrides):
    options = dict(cloud_name='demo', api_key='key', api_secret='secret', session=session)
    options.update(overrides)
    return MediaClient(**options)


def test_resource_type_for():
    assert resource_type_for('image/jpeg') == 'image'
    assert resource_type_for('video/mp4') == 'video'
    assert resource_type_for('application/pdf') == 'auto'
    assert resource_type_for(None) == 'auto'


def test_sign_params_sorted_and_skips_empty():
    expected = hashlib.sha1(b'folder=newsdesk&timestamp=100secret').hexdigest()
    assert sign_params({'timestamp': 100, 'folder': 'newsdesk', 'tags': ''}, 'secret') == expected


def test_upload_success_returns_secure_url():
    session = FakeSession()
    result = _client(session).upload(_file(), kind='image')

    assert result == {'success': True,
                      'url': 'https://res.example.com/demo/image/upload/v1/newsdesk/cat.png',
                      'public_id': 'newsdesk/cat'}
    post = session.posts[0]
    assert post['url'] == 'https://api.cloudinary.com/v1_1/demo/image/upload'
    assert post['data']['api_key'] == 'key'
    assert post['data']['folder'] == 'newsdesk'
    assert 'signature' in post['data']


def test_video_goes_to_video_endpoint():
    session = FakeSession()
    _client(session).upload(_file('clip.mp4', 'video/mp4'), kind='video')
    assert session.posts[0]['url'].endswith('/demo/video/upload')


def test_missing_configuration_is_reported_without_request():
    session = FakeSession()
    result = _client(session, api_secret='').upload(_file())
    assert result['success'] is False
    assert 'api_secret' in result['error']
    assert session.posts == []


def test_file_without_name_is_rejected():
    session = FakeSession()
    result = _client(session).upload(_file(name=''))
    assert result == {'success': False, 'error': 'Invalid file: File is missing or has no name'}
    assert session.posts == []


def test_wrong_kind_is_rejected():
    session = FakeSession()
    result = _client(session).upload(_file('notes.pdf', 'application/pdf'), kind='image')
    assert result['success'] is False
    assert result['error'].startswith('Invalid file: expected a image file')
    assert session.posts == []


def test_host_error_message_is_passed_through():
    session = FakeSession(FakeResponse(400, {'error': {'message': 'Invalid Signature'}}))
    result = _client(session).upload(_file())
    assert result == {'success': False, 'error': 'Upload failed: Invalid Signature'}


def test_non_json_failure_uses_status_code():
    session = FakeSession(FakeResponse(502))
    result = _client(session).upload(_file())
    assert result == {'success': False, 'error': 'Upload failed: HTTP 502'}


def test_network_errors_become_upload_failures():
    result = _client(FakeSession(exc=requests.exceptions.Timeout())).upload(_file())
    assert result == {'success': False, 'error': 'Upload failed: request timed out'}

    result = _client(FakeSession(exc=requests.exceptions.ConnectionError('refused'))).upload(_file())
    assert result['success'] is False
    assert 'refused' in result['error']


def test_from_config_reads_flask_settings():
    client = MediaClient.from_config({
        'CLOUDINARY_CLOUD_NAME': 'acme', 'CLOUDINARY_API_KEY': 'k',
        'CLOUDINARY_API_SECRET': 's', 'MEDIA_FOLDER': 'press', 'MEDIA_TIMEOUT': 5,
    }, session=FakeSession())
    assert client.cloud_name == 'acme'
    assert client.folder == 'press'
    assert client.timeout == 5


def test_destroy():
    session = FakeSession(FakeResponse(200, {'result': 'ok'}))
    assert _client(session).destroy('newsdesk/cat') == {'success': True}
    assert session.posts[0]['url'].endswith('/demo/image/destroy')
    assert session.posts[0]['data']['public_id'] == 'newsdesk/cat'
