"""
Videos Data Access
"""

from newsdesk.data.executor import parse_datetime
from newsdesk.data.listing import Filter, Listing
from newsdesk.data.repository import Repository

VIDEO_LISTING = Listing(
    'Videos', 'v',
    columns=['v.id', 'v.article_id', 'v.video_url', 'v.description', 'v.created_at',
             'v.updated_at', 'a.title AS article_title'],
    joins=['LEFT JOIN Articles a ON v.article_id = a.id'],
    sortable={
        'id': 'v.id',
        'article_title': 'a.title',
        'description': 'v.description',
        'created_at': 'v.created_at',
        'updated_at': 'v.updated_at',
    },
    default_sort=('created_at', 'desc'),
    searchable=['v.description', 'a.title'],
    filters={'article_id': Filter('v.article_id = :article_id', transform=int)},
)


def map_video(row):
    video = dict(row)
    video['created_at'] = parse_datetime(video.get('created_at'))
    video['updated_at'] = parse_datetime(video.get('updated_at'))
    return video


repository = Repository(
    'Videos', 'video', ('article_id', 'video_url', 'description'), VIDEO_LISTING, map_video)


def get_videos(page=1, limit=10, sort_field='created_at', sort_direction='desc', search=None):
    return repository.list(page, limit, sort_field, sort_direction, search=search)


def get_videos_for_article(article_id):
    return repository.list(1, 100, 'created_at', 'asc', filters={'article_id': article_id})


def get_video_by_id(id):
    return repository.get_by_id(id)


def create_video(data):
    return repository.create(data)


def update_video(id, data):
    return repository.update(id, data)


def delete_video(id):
    return repository.delete(id)
