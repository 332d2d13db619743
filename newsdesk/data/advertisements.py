"""
Advertisements Data Access
"""

from newsdesk.data.executor import parse_date, parse_datetime
from newsdesk.data.listing import Filter, Listing
from newsdesk.data.repository import Repository

AD_TYPES = ('banner', 'sidebar', 'inline', 'popup')

ADVERTISEMENT_LISTING = Listing(
    'Advertisements', 'ad',
    columns=['ad.id', 'ad.sponsor_id', 'ad.article_id', 'ad.category_id', 'ad.ad_type',
             'ad.start_date', 'ad.end_date', 'ad.created_at', 'ad.updated_at',
             's.name AS sponsor_name', 'a.title AS article_title', 'c.name AS category_name'],
    joins=['LEFT JOIN Sponsors s ON ad.sponsor_id = s.id',
           'LEFT JOIN Articles a ON ad.article_id = a.id',
           'LEFT JOIN Categories c ON ad.category_id = c.id'],
    sortable={
        'id': 'ad.id',
        'sponsor_name': 's.name',
        'article_title': 'a.title',
        'category_name': 'c.name',
        'ad_type': 'ad.ad_type',
        'start_date': 'ad.start_date',
        'end_date': 'ad.end_date',
        'created_at': 'ad.created_at',
    },
    default_sort=('start_date', 'desc'),
    searchable=['s.name', 'a.title', 'c.name', 'ad.ad_type'],
    filters={
        'ad_type': Filter('ad.ad_type = :ad_type'),
        'category_id': Filter('ad.category_id = :category_id', transform=int),
        'active_on': Filter('ad.start_date <= :active_on AND ad.end_date >= :active_on',
                            transform=str),
    },
)


def map_advertisement(row):
    ad = dict(row)
    ad['start_date'] = parse_date(ad.get('start_date'))
    ad['end_date'] = parse_date(ad.get('end_date'))
    ad['created_at'] = parse_datetime(ad.get('created_at'))
    ad['updated_at'] = parse_datetime(ad.get('updated_at'))
    return ad


repository = Repository(
    'Advertisements', 'advertisement',
    ('sponsor_id', 'article_id', 'category_id', 'ad_type', 'start_date', 'end_date'),
    ADVERTISEMENT_LISTING, map_advertisement)


def get_advertisements(page=1, limit=10, sort_field='start_date', sort_direction='desc',
                       search=None, filters=None):
    return repository.list(page, limit, sort_field, sort_direction, search=search,
                           filters=filters)


def get_active_advertisements(on_date, category_id=None, limit=5):
    """Ads running on ``on_date`` (a date), optionally for one category."""
    return repository.list(1, limit, 'start_date', 'desc', filters={
        'active_on': on_date.isoformat(), 'category_id': category_id})


def get_advertisement_by_id(id):
    return repository.get_by_id(id)


def create_advertisement(data):
    return repository.create(data)


def update_advertisement(id, data):
    return repository.update(id, data)


def delete_advertisement(id):
    return repository.delete(id)
