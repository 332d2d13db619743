"""
Sponsors Data Access

Lookup rows for the advertisement forms.
"""

from newsdesk.data.listing import Listing
from newsdesk.data.repository import Repository

SPONSOR_LISTING = Listing(
    'Sponsors', 's',
    columns=['s.id', 's.name'],
    sortable={'id': 's.id', 'name': 's.name'},
    default_sort=('name', 'asc'),
    searchable=['s.name'],
)

repository = Repository('Sponsors', 'sponsor', ('name',), SPONSOR_LISTING, timestamps=False)


def get_all_sponsors():
    return repository.all('name', 'asc')


def get_sponsor_by_id(id):
    return repository.get_by_id(id)


def create_sponsor(data):
    return repository.create(data)
