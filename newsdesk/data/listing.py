"""
Listing Query Builder

Composes the paginated, filtered, sorted SELECT for an entity and derives
the matching COUNT query from the same joins and WHERE clause, so the
total always agrees with the rows a caller can page through.
"""

import logging
import math

from newsdesk.data import executor

logger = logging.getLogger(__name__)

SORT_DIRECTIONS = ('asc', 'desc')
LIKE_ESCAPE = '!'


class Filter:
    """An optional predicate.

    ``sql`` references the bind parameter ``:<name>``. With ``flag=True`` the
    predicate has no parameter and is included whenever the value is truthy.
    ``transform`` maps the raw value before binding.
    """

    def __init__(self, sql, flag=False, transform=None):
        self.sql = sql
        self.flag = flag
        self.transform = transform

    def apply(self, name, value):
        """Return ``(sql, params)`` or None when the filter is absent."""
        if value is None or value == '' or value is False:
            return None
        if self.flag:
            return self.sql, {}
        if self.transform is not None:
            value = self.transform(value)
        return self.sql, {name: value}


class Listing:
    """Describes one entity listing: what to select, join, sort and filter."""

    def __init__(self, table, alias, columns, joins=(), aggregate=False,
                 sortable=None, default_sort=('created_at', 'desc'),
                 searchable=(), filters=None):
        self.table = table
        self.alias = alias
        self.columns = list(columns)
        self.joins = list(joins)
        self.aggregate = aggregate
        self.sortable = dict(sortable or {})
        self.default_sort = default_sort
        self.searchable = list(searchable)
        self.filters = dict(filters or {})

        if default_sort[0] not in self.sortable:
            raise ValueError(f'Default sort field {default_sort[0]!r} is not sortable')

    def order_by(self, sort_field=None, sort_direction=None):
        """Resolve the ORDER BY clause against the allow-list."""
        default_field, default_direction = self.default_sort
        if sort_field not in self.sortable:
            if sort_field:
                logger.debug('Ignoring unknown sort field %r for %s', sort_field, self.table)
            sort_field = default_field
        direction = (sort_direction or '').lower()
        if direction not in SORT_DIRECTIONS:
            direction = default_direction
        direction = direction.upper()
        return f'ORDER BY {self.sortable[sort_field]} {direction}, {self.alias}.id {direction}'

    def where(self, search=None, filters=None):
        """Build the shared WHERE clause and its bind parameters."""
        clauses = []
        params = {}

        if search and self.searchable:
            likes = ' OR '.join(f"{column} LIKE :search ESCAPE '{LIKE_ESCAPE}'"
                                for column in self.searchable)
            clauses.append(f'({likes})')
            params['search'] = f'%{escape_like(search)}%'

        for name, value in (filters or {}).items():
            definition = self.filters.get(name)
            if definition is None:
                logger.debug('Ignoring unknown filter %r for %s', name, self.table)
                continue
            applied = definition.apply(name, value)
            if applied is None:
                continue
            sql, filter_params = applied
            clauses.append(sql)
            params.update(filter_params)

        if not clauses:
            return '', params
        return 'WHERE ' + ' AND '.join(clauses), params

    def build(self, page=1, limit=10, sort_field=None, sort_direction=None,
              search=None, filters=None):
        """Return ``(rows_sql, count_sql, params)``.

        ``page`` is 1-based and not validated here.
        """
        where, params = self.where(search, filters)
        source = f'FROM {self.table} {self.alias} ' + ' '.join(self.joins)
        group_by = f'GROUP BY {self.alias}.id' if self.aggregate else ''

        rows_sql = (
            f'SELECT {", ".join(self.columns)} {source} {where} {group_by} '
            f'{self.order_by(sort_field, sort_direction)} LIMIT :limit OFFSET :offset'
        )
        count_sql = (
            f'SELECT COUNT(*) AS total FROM '
            f'(SELECT {self.alias}.id {source} {where} GROUP BY {self.alias}.id) matched'
        )
        params = dict(params, limit=int(limit), offset=offset_for(page, limit))
        return rows_sql, count_sql, params

    def build_by_id(self):
        """SELECT one row by primary key with the listing's joins and aggregates."""
        source = f'FROM {self.table} {self.alias} ' + ' '.join(self.joins)
        group_by = f'GROUP BY {self.alias}.id' if self.aggregate else ''
        return f'SELECT {", ".join(self.columns)} {source} WHERE {self.alias}.id = :id {group_by}'


def escape_like(term):
    """Make % and _ in a search term match literally."""
    for char in (LIKE_ESCAPE, '%', '_'):
        term = term.replace(char, LIKE_ESCAPE + char)
    return term


def offset_for(page, limit):
    return (int(page) - 1) * int(limit)


def page_info(total_count, page, limit):
    """Pagination metadata shown under listings."""
    offset = offset_for(page, limit)
    return {
        'current_page': page,
        'total_pages': math.ceil(total_count / limit) if limit else 0,
        'start': offset + 1 if total_count else 0,
        'end': min(offset + limit, total_count),
    }


def fetch_listing(listing, page=1, limit=10, sort_field=None, sort_direction=None,
                  search=None, filters=None, mapper=None, error_message='Failed to fetch rows'):
    """Run a listing and its count.

    Returns ``{'data': rows, 'total_count': n, 'error': None, ...page info}``
    or ``{'data': None, 'total_count': 0, 'error': message}``.
    """
    rows_sql, count_sql, params = listing.build(
        page, limit, sort_field, sort_direction, search, filters)

    count_params = {k: v for k, v in params.items() if k not in ('limit', 'offset')}
    counted = executor.query(count_sql, count_params)
    if counted['error']:
        return {'data': None, 'total_count': 0, 'error': error_message}

    result = executor.query(rows_sql, params)
    if result['error']:
        return {'data': None, 'total_count': 0, 'error': error_message}

    total_count = int(counted['data'][0]['total']) if counted['data'] else 0
    rows = result['data']
    if mapper is not None:
        rows = [mapper(row) for row in rows]

    response = {'data': rows, 'total_count': total_count, 'error': None}
    response.update(page_info(total_count, int(page), int(limit)))
    return response
