"""
Categories and Subcategories Data Access
"""

from newsdesk.data.executor import parse_datetime
from newsdesk.data.listing import Filter, Listing
from newsdesk.data.repository import Repository

CATEGORY_LISTING = Listing(
    'Categories', 'c',
    columns=['c.id', 'c.name', 'c.description', 'c.created_at', 'c.updated_at',
             '(SELECT COUNT(*) FROM SubCategories sc WHERE sc.category_id = c.id) AS subcategories_count',
             '(SELECT COUNT(*) FROM Articles a WHERE a.category_id = c.id) AS articles_count'],
    sortable={
        'id': 'c.id',
        'name': 'c.name',
        'description': 'c.description',
        'created_at': 'c.created_at',
        'updated_at': 'c.updated_at',
        'subcategories_count': 'subcategories_count',
        'articles_count': 'articles_count',
    },
    default_sort=('name', 'asc'),
    searchable=['c.name', 'c.description'],
)

SUBCATEGORY_LISTING = Listing(
    'SubCategories', 'sc',
    columns=['sc.id', 'sc.name', 'sc.description', 'sc.category_id', 'sc.created_at',
             'sc.updated_at', 'c.name AS category_name',
             '(SELECT COUNT(*) FROM Articles a WHERE a.sub_category_id = sc.id) AS articles_count'],
    joins=['LEFT JOIN Categories c ON sc.category_id = c.id'],
    sortable={
        'id': 'sc.id',
        'name': 'sc.name',
        'description': 'sc.description',
        'category_name': 'c.name',
        'created_at': 'sc.created_at',
        'updated_at': 'sc.updated_at',
        'articles_count': 'articles_count',
    },
    default_sort=('name', 'asc'),
    searchable=['sc.name', 'sc.description', 'c.name'],
    filters={'category_id': Filter('sc.category_id = :category_id', transform=int)},
)


def _map_timestamps(row):
    item = dict(row)
    item['created_at'] = parse_datetime(item.get('created_at'))
    item['updated_at'] = parse_datetime(item.get('updated_at'))
    for key in ('articles_count', 'subcategories_count'):
        if key in item:
            item[key] = int(item[key] or 0)
    return item


category_repository = Repository(
    'Categories', 'category', ('name', 'description'), CATEGORY_LISTING, _map_timestamps)

subcategory_repository = Repository(
    'SubCategories', 'subcategory', ('name', 'description', 'category_id'),
    SUBCATEGORY_LISTING, _map_timestamps)


def get_categories(page=1, limit=10, sort_field='name', sort_direction='asc', search=None):
    return category_repository.list(page, limit, sort_field, sort_direction, search=search)


def get_all_categories():
    return category_repository.all('name', 'asc')


def get_category_by_id(id):
    return category_repository.get_by_id(id)


def create_category(data):
    return category_repository.create(data)


def update_category(id, data):
    return category_repository.update(id, data)


def delete_category(id):
    """Delete a category; refused while subcategories or articles still use it."""
    category = category_repository.get_by_id(id)
    if category['error']:
        return {'data': None, 'error': 'Failed to delete category'}
    if category['data'] and (category['data']['subcategories_count']
                             or category['data']['articles_count']):
        return {'data': None, 'error': 'Category is still in use'}
    return category_repository.delete(id)


def get_subcategories(page=1, limit=10, sort_field='name', sort_direction='asc',
                      search=None, category_id=None):
    return subcategory_repository.list(page, limit, sort_field, sort_direction, search=search,
                                       filters={'category_id': category_id})


def get_all_subcategories():
    return subcategory_repository.all('name', 'asc')


def get_subcategory_by_id(id):
    return subcategory_repository.get_by_id(id)


def create_subcategory(data):
    return subcategory_repository.create(data)


def update_subcategory(id, data):
    return subcategory_repository.update(id, data)


def delete_subcategory(id):
    subcategory = subcategory_repository.get_by_id(id)
    if subcategory['error']:
        return {'data': None, 'error': 'Failed to delete subcategory'}
    if subcategory['data'] and subcategory['data']['articles_count']:
        return {'data': None, 'error': 'Subcategory is still in use'}
    return subcategory_repository.delete(id)
