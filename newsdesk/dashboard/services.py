"""
Dashboard Services

Overview counts and the upload step that runs before a record is saved.
"""

import logging

from flask import current_app

from newsdesk.data import executor

logger = logging.getLogger(__name__)

OVERVIEW_SQL = """
    SELECT
        (SELECT COUNT(*) FROM Articles) AS articles,
        (SELECT COUNT(*) FROM Articles WHERE is_trending = 1) AS trending,
        (SELECT COUNT(*) FROM Tags) AS tags,
        (SELECT COUNT(*) FROM Categories) AS categories,
        (SELECT COUNT(*) FROM SubCategories) AS subcategories,
        (SELECT COUNT(*) FROM Authors) AS authors,
        (SELECT COUNT(*) FROM Videos) AS videos,
        (SELECT COUNT(*) FROM Advertisements) AS advertisements,
        (SELECT COUNT(*) FROM Users) AS users
"""


def get_overview():
    """Row counts for the dashboard home cards."""
    result = executor.query(OVERVIEW_SQL)
    if result['error']:
        return {'data': None, 'error': 'Failed to load dashboard overview'}
    row = result['data'][0] if result['data'] else {}
    return {'data': {key: int(value or 0) for key, value in row.items()}, 'error': None}


def media_client():
    return current_app.extensions['media_client']


def apply_uploads(fields, files, data):
    """Upload every submitted file field and store its URL in ``data``.

    Returns None when all uploads succeeded (or none were sent), otherwise
    the first error message. The secure URL from the host replaces any URL
    typed into the target field.
    """
    for field in fields:
        if field.type != 'file':
            continue
        file = files.get(field.name)
        if file is None or not file.filename:
            continue
        result = media_client().upload(file, kind=field.upload)
        if not result['success'] or not result.get('url'):
            logger.warning('Upload for %s failed: %s', field.name, result.get('error'))
            return result.get('error') or f'Failed to upload {field.upload}'
        data[field.target] = result['url']
    return None
