"""
Entity Repository

Shared raw-SQL CRUD for one table. Entity modules build one of these and
expose plain module-level functions on top of it.
"""

import logging

from newsdesk.data import executor
from newsdesk.data.listing import fetch_listing

logger = logging.getLogger(__name__)


class Repository:
    """CRUD over ``table`` writing ``fields`` and reading through ``listing``.

    ``label`` names the entity in error messages ("Failed to create tag").
    ``cascade`` lists statements for dependent rows, each bound
    with ``:id``, run before the row itself in the same commit.
    """

    def __init__(self, table, label, fields, listing, mapper=None, cascade=(),
                 timestamps=True):
        self.table = table
        self.label = label
        self.fields = tuple(fields)
        self.listing = listing
        self.mapper = mapper
        self.cascade = tuple(cascade)
        self.timestamps = timestamps

    def _map(self, row):
        return self.mapper(row) if self.mapper else row

    def _values(self, data):
        """Bind values for the writable fields present in ``data``."""
        return {field: executor.to_db_datetime(data[field])
                for field in self.fields if field in data}

    def list(self, page=1, limit=10, sort_field=None, sort_direction=None,
             search=None, filters=None):
        return fetch_listing(
            self.listing, page=page, limit=limit, sort_field=sort_field,
            sort_direction=sort_direction, search=search, filters=filters,
            mapper=self._map, error_message=f'Failed to fetch {self.label}s')

    def all(self, sort_field=None, sort_direction='asc'):
        """Every row, unpaginated, for select boxes."""
        result = executor.query(
            f'SELECT {", ".join(self.listing.columns)} '
            f'FROM {self.listing.table} {self.listing.alias} {" ".join(self.listing.joins)} '
            f'{"GROUP BY " + self.listing.alias + ".id" if self.listing.aggregate else ""} '
            f'{self.listing.order_by(sort_field, sort_direction)}')
        if result['error']:
            return {'data': None, 'error': f'Failed to fetch {self.label}s'}
        return {'data': [self._map(row) for row in result['data']], 'error': None}

    def get_by_id(self, id):
        result = executor.query(self.listing.build_by_id(), {'id': id})
        if result['error']:
            return {'data': None, 'error': f'Failed to fetch {self.label}'}
        rows = result['data']
        return {'data': self._map(rows[0]) if rows else None, 'error': None}

    def create(self, data):
        values = self._values(data)
        columns = ', '.join(values)
        placeholders = ', '.join(f':{field}' for field in values)
        result = executor.execute(
            f'INSERT INTO {self.table} ({columns}) VALUES ({placeholders})', values)
        if result['error'] or not result['data']['insert_id']:
            return {'data': None, 'error': f'Failed to create {self.label}'}
        logger.debug('Created %s %s', self.label, result['data']['insert_id'])
        return self.fetch_after_write(result['data']['insert_id'], 'create')

    def update(self, id, data):
        params = self._values(data)
        assignments = [f'{field} = :{field}' for field in params]
        if self.timestamps:
            assignments.append('updated_at = CURRENT_TIMESTAMP')
        assignments = ', '.join(assignments)
        params['id'] = id
        result = executor.execute(
            f'UPDATE {self.table} SET {assignments} WHERE id = :id', params)
        if result['error']:
            return {'data': None, 'error': f'Failed to update {self.label}'}
        return self.fetch_after_write(id, 'update')

    def delete(self, id):
        statements = [(sql, {'id': id}) for sql in self.cascade]
        statements.append((f'DELETE FROM {self.table} WHERE id = :id', {'id': id}))
        result = executor.run_statements(statements)
        if result['error']:
            return {'data': None, 'error': f'Failed to delete {self.label}'}
        logger.debug('Deleted %s %s', self.label, id)
        return {'data': True, 'error': None}

    def fetch_after_write(self, id, action):
        fetched = self.get_by_id(id)
        if fetched['error'] or fetched['data'] is None:
            return {'data': None, 'error': f'Failed to {action} {self.label}'}
        return fetched

    def exists(self, column, value, exclude_id=None):
        """``{'data': True}`` when another row already holds ``value`` in ``column``."""
        sql = f'SELECT id FROM {self.table} WHERE {column} = :value'
        params = {'value': value}
        if exclude_id is not None:
            sql += ' AND id <> :exclude_id'
            params['exclude_id'] = exclude_id
        result = executor.query(sql, params)
        if result['error']:
            logger.error('Could not check %s.%s: %s', self.table, column, result['error'])
            return {'data': None, 'error': f'Failed to check {self.label} {column}'}
        return {'data': bool(result['data']), 'error': None}
