"""
Query Executor

Runs parameterized SQL on the shared Flask-SQLAlchemy engine. Every call
returns a dict with an ``error`` key; database errors are logged and
converted, never raised past this module.
"""

import logging
from datetime import date, datetime

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from newsdesk.extensions import db

logger = logging.getLogger(__name__)


def query(sql, params=None):
    """Run a SELECT and return ``{'data': [row dicts], 'error': None}``."""
    try:
        result = db.session.execute(text(sql), params or {})
        rows = [dict(row) for row in result.mappings().all()]
        db.session.commit()
        return {'data': rows, 'error': None}
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception('Query failed: %s', e)
        return {'data': None, 'error': str(e)}


def execute(sql, params=None):
    """Run a single INSERT/UPDATE/DELETE and commit.

    Returns ``{'data': {'insert_id', 'rowcount'}, 'error': None}``.
    """
    try:
        result = db.session.execute(text(sql), params or {})
        data = {'insert_id': result.lastrowid, 'rowcount': result.rowcount}
        db.session.commit()
        return {'data': data, 'error': None}
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception('Statement failed: %s', e)
        return {'data': None, 'error': str(e)}


def run_statements(statements):
    """Run ``[(sql, params), ...]`` with one commit at the end.

    A statement's params may be a callable taking the list of insert ids
    produced so far, so a follow-up statement can reference a new row.
    """
    insert_ids = []
    try:
        for sql, params in statements:
            if callable(params):
                params = params(insert_ids)
            if isinstance(params, list):
                for item in params:
                    db.session.execute(text(sql), item)
                continue
            result = db.session.execute(text(sql), params or {})
            insert_ids.append(result.lastrowid)
        db.session.commit()
        return {'data': {'insert_ids': insert_ids}, 'error': None}
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception('Statement batch failed: %s', e)
        return {'data': None, 'error': str(e)}


def to_db_datetime(value):
    """Format a datetime for binding; strings pass through unchanged."""
    if isinstance(value, datetime):
        return value.strftime('%Y-%m-%d %H:%M:%S')
    if isinstance(value, date):
        return value.isoformat()
    return value


def parse_datetime(value):
    """SQLite hands back timestamps as text; MySQL as datetime."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        logger.debug('Unparseable timestamp %r', value)
        return None


def parse_date(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        logger.debug('Unparseable date %r', value)
        return None


def split_aggregate(value):
    """Split a GROUP_CONCAT value; NULL or empty gives []."""
    if not value:
        return []
    return str(value).split(',')
