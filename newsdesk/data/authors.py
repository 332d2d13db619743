"""
Authors Data Access
"""

from newsdesk.data.executor import parse_datetime
from newsdesk.data.listing import Listing
from newsdesk.data.repository import Repository

AUTHOR_LISTING = Listing(
    'Authors', 'au',
    columns=['au.id', 'au.name', 'au.email', 'au.bio', 'au.avatar', 'au.created_at',
             'au.updated_at',
             '(SELECT COUNT(*) FROM Articles a WHERE a.author_id = au.id) AS articles_count'],
    sortable={
        'id': 'au.id',
        'name': 'au.name',
        'email': 'au.email',
        'created_at': 'au.created_at',
        'updated_at': 'au.updated_at',
        'articles_count': 'articles_count',
    },
    default_sort=('name', 'asc'),
    searchable=['au.name', 'au.email', 'au.bio'],
)


def map_author(row):
    author = dict(row)
    author['created_at'] = parse_datetime(author.get('created_at'))
    author['updated_at'] = parse_datetime(author.get('updated_at'))
    author['articles_count'] = int(author.get('articles_count') or 0)
    return author


repository = Repository(
    'Authors', 'author', ('name', 'email', 'bio', 'avatar'), AUTHOR_LISTING, map_author,
    cascade=('UPDATE Articles SET author_id = NULL WHERE author_id = :id',))


def get_authors(page=1, limit=10, sort_field='name', sort_direction='asc', search=None):
    return repository.list(page, limit, sort_field, sort_direction, search=search)


def get_all_authors():
    return repository.all('name', 'asc')


def get_author_by_id(id):
    return repository.get_by_id(id)


def create_author(data):
    return repository.create(data)


def update_author(id, data):
    return repository.update(id, data)


def delete_author(id):
    """Delete an author; their articles are kept without a byline."""
    return repository.delete(id)
