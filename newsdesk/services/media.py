"""
Media Upload Service

Signed uploads to a Cloudinary-compatible media host. A MediaClient is
built explicitly from configuration and handed to the app; nothing here
reads the environment.
"""

import hashlib
import logging
import time

import requests

logger = logging.getLogger(__name__)

RESOURCE_TYPES = ('image', 'video', 'auto', 'raw')


class MediaConfigError(Exception):
    """A required media host credential is missing."""


def resource_type_for(mimetype):
    """Pick the upload resource type from a MIME type prefix."""
    mimetype = (mimetype or '').lower()
    if mimetype.startswith('image/'):
        return 'image'
    if mimetype.startswith('video/'):
        return 'video'
    return 'auto'


def sign_params(params, api_secret):
    """SHA-1 signature over the sorted, non-empty params followed by the secret."""
    payload = '&'.join(f'{key}={params[key]}' for key in sorted(params) if params[key] not in (None, ''))
    return hashlib.sha1((payload + api_secret).encode('utf-8')).hexdigest()


class MediaClient:
    """Client for the hosted media API.

    Args:
        cloud_name, api_key, api_secret: account credentials
        session: a requests.Session (or compatible object), injectable for tests
        base_url: API root, e.g. https://api.cloudinary.com/v1_1
        folder: default destination folder
        timeout: request timeout in seconds
    """

    def __init__(self, cloud_name, api_key, api_secret, session=None,
                 base_url='https://api.cloudinary.com/v1_1', folder='newsdesk', timeout=30):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip('/')
        self.folder = folder
        self.timeout = timeout

    @classmethod
    def from_config(cls, config, session=None):
        return cls(
            cloud_name=config.get('CLOUDINARY_CLOUD_NAME', ''),
            api_key=config.get('CLOUDINARY_API_KEY', ''),
            api_secret=config.get('CLOUDINARY_API_SECRET', ''),
            session=session,
            base_url=config.get('MEDIA_UPLOAD_URL', 'https://api.cloudinary.com/v1_1'),
            folder=config.get('MEDIA_FOLDER', 'newsdesk'),
            timeout=config.get('MEDIA_TIMEOUT', 30),
        )

    def _check_config(self):
        for name in ('cloud_name', 'api_key', 'api_secret'):
            if not getattr(self, name):
                logger.error('Media host configuration missing: %s', name)
                raise MediaConfigError(f'Media host {name} is not configured')

    def _endpoint(self, resource_type, action):
        return f'{self.base_url}/{self.cloud_name}/{resource_type}/{action}'

    def _signed(self, params):
        params = dict(params, timestamp=int(time.time()))
        params['signature'] = sign_params(params, self.api_secret)
        params['api_key'] = self.api_key
        return params

    def upload(self, file, kind=None, folder=None):
        """Stream ``file`` (a werkzeug FileStorage or similar) to the host.

        ``kind`` ('image' or 'video') is what the form expects; a file whose
        MIME type says otherwise is rejected before anything is sent.

        Returns ``{'success': True, 'url', 'public_id'}`` or
        ``{'success': False, 'error'}``.
        """
        try:
            self._check_config()
        except MediaConfigError as e:
            return {'success': False, 'error': str(e)}

        if file is None or not getattr(file, 'filename', None):
            return {'success': False, 'error': 'Invalid file: File is missing or has no name'}

        mimetype = getattr(file, 'mimetype', None) or getattr(file, 'content_type', None)
        resource_type = resource_type_for(mimetype)
        if kind and resource_type != kind:
            return {'success': False,
                    'error': f'Invalid file: expected a {kind} file, got {mimetype or "unknown type"}'}

        folder = folder or self.folder
        logger.info('Uploading %s (%s) to media folder %s as %s',
                    file.filename, mimetype, folder, resource_type)

        stream = getattr(file, 'stream', file)
        try:
            resp = self.session.post(
                self._endpoint(resource_type, 'upload'),
                data=self._signed({'folder': folder}),
                files={'file': (file.filename, stream, mimetype)},
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            logger.exception('Media upload timed out for %s', file.filename)
            return {'success': False, 'error': 'Upload failed: request timed out'}
        except requests.exceptions.RequestException as e:
            logger.exception('Media upload failed for %s', file.filename)
            return {'success': False, 'error': f'Upload failed: {e}'}

        return self._upload_result(resp)

    def _upload_result(self, resp):
        try:
            payload = resp.json()
        except ValueError:
            payload = {}

        if resp.status_code != 200 or 'error' in payload:
            error = payload.get('error')
            message = error.get('message') if isinstance(error, dict) else error
            message = message or f'HTTP {resp.status_code}'
            logger.error('Media host rejected upload: %s', message)
            return {'success': False, 'error': f'Upload failed: {message}'}

        logger.debug('Upload stored as %s (%s)', payload.get('public_id'), payload.get('resource_type'))
        return {
            'success': True,
            'url': payload.get('secure_url'),
            'public_id': payload.get('public_id'),
        }

    def destroy(self, public_id, resource_type='image'):
        """Delete an uploaded asset by public id."""
        try:
            self._check_config()
        except MediaConfigError as e:
            return {'success': False, 'error': str(e)}

        try:
            resp = self.session.post(
                self._endpoint(resource_type, 'destroy'),
                data=self._signed({'public_id': public_id}),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.exception('Media delete failed for %s', public_id)
            return {'success': False, 'error': f'Delete failed: {e}'}

        if resp.status_code != 200:
            return {'success': False, 'error': f'Delete failed: HTTP {resp.status_code}'}
        return {'success': True}
