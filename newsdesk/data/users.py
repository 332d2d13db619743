"""
Users Data Access

Password hashes are written here but never selected by the listing; the
sign-in path reads them through get_user_credentials().
"""

from werkzeug.security import generate_password_hash

from newsdesk.data import executor
from newsdesk.data.executor import parse_datetime
from newsdesk.data.listing import Filter, Listing
from newsdesk.data.repository import Repository

ROLES = ('admin', 'editor', 'author')
STATUSES = ('active', 'inactive')

USER_LISTING = Listing(
    'Users', 'u',
    columns=['u.id', 'u.firstname', 'u.lastname', 'u.email', 'u.role', 'u.status',
             'u.created_at', 'u.updated_at'],
    sortable={
        'id': 'u.id',
        'firstname': 'u.firstname',
        'lastname': 'u.lastname',
        'email': 'u.email',
        'role': 'u.role',
        'status': 'u.status',
        'created_at': 'u.created_at',
        'updated_at': 'u.updated_at',
    },
    default_sort=('created_at', 'desc'),
    searchable=['u.firstname', 'u.lastname', 'u.email'],
    filters={
        'role': Filter('u.role = :role'),
        'status': Filter('u.status = :status'),
    },
)


def map_user(row):
    user = dict(row)
    user['created_at'] = parse_datetime(user.get('created_at'))
    user['updated_at'] = parse_datetime(user.get('updated_at'))
    return user


repository = Repository(
    'Users', 'user',
    ('firstname', 'lastname', 'email', 'password_hash', 'role', 'status'),
    USER_LISTING, map_user)


def _with_hash(data):
    values = dict(data)
    password = values.pop('password', None)
    if password:
        values['password_hash'] = generate_password_hash(password, method='pbkdf2:sha256')
    return values


def get_users(page=1, limit=10, sort_field='created_at', sort_direction='desc', filters=None):
    return repository.list(page, limit, sort_field, sort_direction, filters=filters)


def search_users(query, page=1, limit=10, sort_field='created_at', sort_direction='desc'):
    return repository.list(page, limit, sort_field, sort_direction, search=query)


def get_user_by_id(id):
    return repository.get_by_id(id)


def create_user(data):
    return repository.create(_with_hash(data))


def update_user(id, data):
    """Update a user; the password changes only when a new one is given."""
    return repository.update(id, _with_hash(data))


def delete_user(id):
    return repository.delete(id)


def email_taken(email, exclude_id=None):
    return repository.exists('email', email, exclude_id)


def get_user_credentials(email):
    """Row with ``password_hash`` for sign-in, or ``{'data': None}`` when unknown."""
    result = executor.query(
        'SELECT id, email, password_hash, role, status FROM Users WHERE email = :email',
        {'email': email})
    if result['error']:
        return {'data': None, 'error': 'Failed to fetch user'}
    rows = result['data']
    return {'data': rows[0] if rows else None, 'error': None}


def count_users():
    result = executor.query('SELECT COUNT(*) AS total FROM Users')
    if result['error']:
        return {'data': None, 'error': result['error']}
    return {'data': int(result['data'][0]['total']), 'error': None}
