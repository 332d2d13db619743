from datetime import datetime, timedelta

from conftest import make_article, make_category, make_subcategory, make_tag

from newsdesk.data import front_end_articles


def _seed(count, category_id, **extra):
    base = datetime(2024, 1, 1, 12, 0)
    return [make_article(f'Story {i:02d}', category_id=category_id,
                         published_at=base + timedelta(hours=i), **extra)
            for i in range(count)]


def test_category_articles_page_info(ctx):
    news = make_category('News')
    sport = make_category('Sport')
    _seed(23, news['id'])
    _seed(3, sport['id'])

    result = front_end_articles.get_category_articles(news['id'], page=3, items_per_page=10)
    assert result['error'] is None
    assert result['total_count'] == 23
    assert result['total_pages'] == 3
    assert result['current_page'] == 3
    assert (result['start'], result['end']) == (21, 23)
    assert len(result['data']) == 3


def test_category_articles_newest_first(ctx):
    news = make_category('News')
    _seed(3, news['id'])
    result = front_end_articles.get_category_articles(news['id'])
    assert [a['title'] for a in result['data']] == ['Story 02', 'Story 01', 'Story 00']


def test_trending_and_featured_filters(ctx):
    news = make_category('News')
    make_article('Trending one', category_id=news['id'], is_trending=True)
    make_article('Featured one', category_id=news['id'], is_featured=True)
    make_article('Ordinary', category_id=news['id'])

    trending = front_end_articles.get_front_end_articles(type='trending')
    featured = front_end_articles.get_front_end_articles(type='featured')
    everything = front_end_articles.get_front_end_articles()

    assert [a['title'] for a in trending['data']] == ['Trending one']
    assert [a['title'] for a in featured['data']] == ['Featured one']
    assert everything['total_count'] == 3


def test_explore_by_tag_and_subcategory(ctx):
    news = make_category('News')
    local = make_subcategory(news['id'], 'Local')
    tag = make_tag('Elections')
    make_article('Tagged local', category_id=news['id'], sub_category_id=local['id'],
                 tag_ids=[tag['id']])
    make_article('Tagged elsewhere', category_id=news['id'], tag_ids=[tag['id']])
    make_article('Untagged local', category_id=news['id'], sub_category_id=local['id'])

    result = front_end_articles.get_explore_articles(subcategory_id=local['id'], tag='Elections')
    assert [a['title'] for a in result['data']] == ['Tagged local']
    assert result['total_count'] == 1


def test_explore_sort_by_title(ctx):
    news = make_category('News')
    for title in ('Charlie', 'Alpha', 'Bravo'):
        make_article(title, category_id=news['id'])

    result = front_end_articles.get_explore_articles_by_category(sort_field='title',
                                                                 sort_direction='asc')
    assert [a['title'] for a in result['data']] == ['Alpha', 'Bravo', 'Charlie']


def test_explore_ignores_unknown_sort(ctx):
    make_article('Only')
    result = front_end_articles.get_explore_articles_by_category(sort_field='content; --')
    assert result['error'] is None
    assert result['total_count'] == 1


def test_empty_category_is_not_an_error(ctx):
    empty = make_category('Empty')
    result = front_end_articles.get_category_articles(empty['id'])
    assert result['error'] is None
    assert result['data'] == []
    assert result['total_pages'] == 0
