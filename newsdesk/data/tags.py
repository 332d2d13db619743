"""
Tags Data Access
"""

from newsdesk.data.executor import parse_datetime
from newsdesk.data.listing import Listing
from newsdesk.data.repository import Repository

TAG_LISTING = Listing(
    'Tags', 't',
    columns=['t.id', 't.name', 't.description', 't.color', 't.created_at', 't.updated_at',
             '(SELECT COUNT(*) FROM Article_Tags at WHERE at.tag_id = t.id) AS articles_count'],
    sortable={
        'id': 't.id',
        'name': 't.name',
        'description': 't.description',
        'color': 't.color',
        'created_at': 't.created_at',
        'updated_at': 't.updated_at',
        'articles_count': 'articles_count',
    },
    default_sort=('created_at', 'desc'),
    searchable=['t.name', 't.description'],
)


def map_tag(row):
    tag = dict(row)
    tag['created_at'] = parse_datetime(tag.get('created_at'))
    tag['updated_at'] = parse_datetime(tag.get('updated_at'))
    tag['articles_count'] = int(tag.get('articles_count') or 0)
    return tag


repository = Repository(
    'Tags', 'tag', ('name', 'description', 'color'), TAG_LISTING, map_tag,
    cascade=('DELETE FROM Article_Tags WHERE tag_id = :id',))


def get_tags(page=1, limit=10, sort_field='created_at', sort_direction='desc'):
    return repository.list(page, limit, sort_field, sort_direction)


def search_tags(query, page=1, limit=10, sort_field='name', sort_direction='asc'):
    """Tags whose name or description contains ``query``; no match is an empty page."""
    return repository.list(page, limit, sort_field, sort_direction, search=query)


def get_all_tags():
    return repository.all('name', 'asc')


def get_tag_by_id(id):
    return repository.get_by_id(id)


def create_tag(data):
    return repository.create(data)


def update_tag(id, data):
    return repository.update(id, data)


def delete_tag(id):
    return repository.delete(id)


def tag_name_taken(name, exclude_id=None):
    return repository.exists('name', name, exclude_id)
