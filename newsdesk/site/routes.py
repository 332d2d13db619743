"""
Public Site Routes

Home, explore, category, subcategory and article pages.
"""

import logging
from datetime import date

from flask import abort, current_app, jsonify, render_template, request

from newsdesk.data import advertisements, articles, categories, front_end_articles, videos
from newsdesk.services import LoadMoreFeed
from newsdesk.site import site_bp

logger = logging.getLogger(__name__)

EXPLORE_SORTS = ('published_at', 'title', 'category_name', 'articles_count')


def _int_arg(name, default=None):
    value = request.args.get(name, type=int)
    if value is None or value < 1:
        return default
    return value


@site_bp.context_processor
def inject_navigation():
    found = categories.get_all_categories()
    return dict(nav_categories=found['data'] or [])


@site_bp.route('/')
def index():
    """Front page: latest, trending and featured articles"""
    latest = front_end_articles.get_latest_articles(10)
    trending = front_end_articles.get_trending_articles(5)
    featured = front_end_articles.get_featured_articles(3)
    errors = [r['error'] for r in (latest, trending, featured) if r['error']]
    return render_template('site/index.html',
                           latest=latest['data'] or [],
                           trending=trending['data'] or [],
                           featured=featured['data'] or [],
                           errors=errors)


@site_bp.route('/explore')
def explore():
    """Browse all articles by type, subcategory or tag"""
    type = request.args.get('type')
    if type not in front_end_articles.FEED_TYPES:
        type = None
    sort_field = request.args.get('sortField')
    if sort_field not in EXPLORE_SORTS:
        sort_field = 'published_at'
    sort_direction = 'asc' if request.args.get('sortDirection') == 'asc' else 'desc'

    result = front_end_articles.get_explore_articles_by_category(
        type=type,
        page=_int_arg('page', 1),
        items_per_page=current_app.config['FRONT_END_ITEMS_PER_PAGE'],
        subcategory_id=_int_arg('subcategory'),
        tag=request.args.get('tag') or None,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )
    return render_template('site/explore.html', result=result,
                           articles=result['data'] or [],
                           type=type, tag=request.args.get('tag', ''),
                           subcategory_id=_int_arg('subcategory'),
                           sort_field=sort_field, sort_direction=sort_direction,
                           sorts=EXPLORE_SORTS)


def category_feed(category_id, pages=1):
    """Build a LoadMoreFeed for a category with ``pages`` pages loaded."""
    feed = LoadMoreFeed(
        lambda key, page, per_page: front_end_articles.get_category_articles(key, page, per_page),
        current_app.config['FRONT_END_ITEMS_PER_PAGE'])
    feed.reset(category_id)
    while feed.loaded_count and feed.current_page < pages and feed.load_more():
        pass
    return feed


@site_bp.route('/category/<int:id>')
def category(id):
    """Category page; ``pages`` is how many Load More pages are shown"""
    found = categories.get_category_by_id(id)
    if found['error'] is None and found['data'] is None:
        abort(404)
    feed = category_feed(id, _int_arg('pages', 1))
    ads = advertisements.get_active_advertisements(date.today(), category_id=id)
    return render_template('site/category.html', category=found['data'], feed=feed,
                           pages=feed.current_page, ads=ads['data'] or [])


@site_bp.route('/subcategory/<int:id>')
def subcategory(id):
    found = categories.get_subcategory_by_id(id)
    if found['error'] is None and found['data'] is None:
        abort(404)
    result = front_end_articles.get_subcategory_articles(
        id, _int_arg('page', 1), current_app.config['FRONT_END_ITEMS_PER_PAGE'])
    return render_template('site/subcategory.html', subcategory=found['data'], result=result,
                           articles=result['data'] or [])


@site_bp.route('/articles/<int:id>')
def article(id):
    """Article detail with its tags, videos and running ads"""
    found = articles.get_article_by_id(id)
    if found['error']:
        return render_template('site/article.html', article=None, error=found['error'],
                               videos=[], ads=[]), 500
    if found['data'] is None:
        abort(404)
    item = found['data']
    clips = videos.get_videos_for_article(id)
    ads = advertisements.get_active_advertisements(date.today(), category_id=item['category_id'])
    return render_template('site/article.html', article=item, error=None,
                           videos=clips['data'] or [], ads=ads['data'] or [])


@site_bp.route('/api/categories/<int:id>/articles')
def api_category_articles(id):
    """JSON page of a category feed for the Load More button"""
    limit = min(_int_arg('limit', current_app.config['FRONT_END_ITEMS_PER_PAGE']),
                max(current_app.config['ITEMS_PER_PAGE_OPTIONS']))
    result = front_end_articles.get_category_articles(id, _int_arg('page', 1), limit)
    if result['error']:
        logger.warning('Category feed %s page failed: %s', id, result['error'])
        return jsonify({'error': result['error']}), 500
    return jsonify({
        'articles': [_article_json(row) for row in result['data']],
        'total_count': result['total_count'],
        'current_page': result['current_page'],
        'total_pages': result['total_pages'],
        'start': result['start'],
        'end': result['end'],
    })


def _article_json(row):
    data = dict(row)
    for key in ('published_at', 'created_at', 'updated_at'):
        if data.get(key) is not None:
            data[key] = data[key].isoformat()
    return data
