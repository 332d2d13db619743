"""
Public Site Article Feeds

Read-only listings for the public pages. All of them share the article
listing from newsdesk.data.articles; they differ only in which filters and
sort they pass, so each feed's total count uses the same predicate as its
rows.
"""

import logging

from newsdesk.data.articles import ARTICLE_LISTING, map_article
from newsdesk.data.listing import fetch_listing

logger = logging.getLogger(__name__)

FEED_TYPES = ('latest', 'trending', 'featured')


def _feed(page, items_per_page, filters, sort_field='published_at', sort_direction='desc',
          error_message='Failed to fetch articles'):
    result = fetch_listing(
        ARTICLE_LISTING, page=page, limit=items_per_page, sort_field=sort_field,
        sort_direction=sort_direction, filters=filters, mapper=map_article,
        error_message=error_message)
    if result['error']:
        return result
    if not result['data']:
        logger.debug('No articles found for filters %s page %s', filters, page)
    return result


def _type_filters(type):
    return {'trending': type == 'trending', 'featured': type == 'featured'}


def get_front_end_articles(type=None, page=1, items_per_page=10, subcategory_id=None):
    """General listing: optional ``type`` ('trending', 'featured') and subcategory."""
    filters = _type_filters(type)
    filters['subcategory_id'] = subcategory_id
    return _feed(page, items_per_page, filters)


def get_explore_articles(type=None, page=1, items_per_page=10, subcategory_id=None, tag=None):
    """Explore page listing; adds filtering by tag name."""
    filters = _type_filters(type)
    filters.update(subcategory_id=subcategory_id, tag=tag)
    return _feed(page, items_per_page, filters)


def get_explore_articles_by_category(type=None, page=1, items_per_page=10, subcategory_id=None,
                                     tag=None, sort_field='published_at', sort_direction='desc'):
    """Explore listing with caller-chosen sort (allow-listed by the article listing)."""
    filters = _type_filters(type)
    filters.update(subcategory_id=subcategory_id, tag=tag)
    return _feed(page, items_per_page, filters, sort_field, sort_direction)


def get_subcategory_articles(subcategory_id, page=1, items_per_page=10):
    return _feed(page, items_per_page, {'subcategory_id': subcategory_id})


def get_category_articles(category_id, page=1, items_per_page=10):
    """Category feed with ``start``, ``end``, ``current_page`` and ``total_pages``."""
    return _feed(page, items_per_page, {'category_id': category_id},
                 error_message='Failed to fetch category articles')


def get_front_end_category_articles(category_id, page=1, items_per_page=25):
    return _feed(page, items_per_page, {'category_id': category_id})


def get_latest_articles(limit=5):
    return _feed(1, limit, {})


def get_trending_articles(limit=5):
    return _feed(1, limit, {'trending': True})


def get_featured_articles(limit=3):
    return _feed(1, limit, {'featured': True})
