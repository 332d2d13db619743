from unittest import mock

from conftest import make_article, make_tag

from newsdesk.data import articles, tags


def test_create_returns_timestamps(ctx):
    tag = make_tag('Politics', '#112233')
    assert tag['id']
    assert tag['color'] == '#112233'
    assert tag['created_at'] is not None
    assert tag['updated_at'] is not None
    assert tag['articles_count'] == 0


def test_pages_are_disjoint_and_counted(ctx):
    for i in range(12):
        make_tag(f'tag-{i:02d}')

    first = tags.get_tags(page=1, limit=5)
    second = tags.get_tags(page=2, limit=5)
    third = tags.get_tags(page=3, limit=5)

    assert first['total_count'] == 12
    assert first['total_pages'] == 3
    assert (first['start'], first['end']) == (1, 5)
    assert (third['start'], third['end']) == (11, 12)

    ids = [t['id'] for page in (first, second, third) for t in page['data']]
    assert len(ids) == 12
    assert len(set(ids)) == 12


def test_same_timestamp_order_is_stable(ctx):
    for i in range(4):
        make_tag(f'same-{i}')
    result = tags.get_tags(page=1, limit=10, sort_field='created_at', sort_direction='desc')
    ids = [t['id'] for t in result['data']]
    assert ids == sorted(ids, reverse=True)


def test_search_matches_name_and_description(ctx):
    make_tag('Science')
    tags.create_tag({'name': 'Space', 'description': 'science of the stars', 'color': '#000000'})
    make_tag('Sports')

    result = tags.search_tags('scien')
    assert result['total_count'] == 2
    assert [t['name'] for t in result['data']] == ['Science', 'Space']


def test_search_without_match_is_empty_page(ctx):
    make_tag('Science')
    result = tags.search_tags('zzz')
    assert result['error'] is None
    assert result['data'] == []
    assert result['total_count'] == 0
    assert result['total_pages'] == 0


def test_update_sets_updated_at_and_keeps_other_fields(ctx):
    tag = make_tag('Old', '#abcdef')
    updated = tags.update_tag(tag['id'], {'name': 'New'})
    assert updated['error'] is None
    assert updated['data']['name'] == 'New'
    assert updated['data']['color'] == '#abcdef'
    assert updated['data']['updated_at'] >= tag['updated_at']


def test_delete_removes_article_links(ctx):
    tag = make_tag('Gone')
    keep = make_tag('Kept')
    article = make_article('Story', tag_ids=[tag['id'], keep['id']])

    assert tags.delete_tag(tag['id'])['error'] is None
    assert tags.get_tag_by_id(tag['id'])['data'] is None

    reloaded = articles.get_article_by_id(article['id'])['data']
    assert reloaded['tag_names'] == ['Kept']


def test_articles_count_sort(ctx):
    busy = make_tag('Busy')
    make_tag('Quiet')
    make_article('One', tag_ids=[busy['id']])
    make_article('Two', tag_ids=[busy['id']])

    result = tags.get_tags(sort_field='articles_count', sort_direction='desc')
    assert result['data'][0]['name'] == 'Busy'
    assert result['data'][0]['articles_count'] == 2


def test_name_taken(ctx):
    tag = make_tag('Unique')
    assert tags.tag_name_taken('Unique') == {'data': True, 'error': None}
    assert tags.tag_name_taken('Unique', exclude_id=tag['id']) == {'data': False, 'error': None}


def test_name_check_reports_database_errors(ctx):
    failing = {'data': None, 'error': 'no such table: Tags'}
    with mock.patch('newsdesk.data.repository.executor.query', return_value=failing):
        result = tags.tag_name_taken('Anything')
    assert result == {'data': None, 'error': 'Failed to check tag name'}


def test_get_by_id_after_create(ctx):
    created = make_tag('Tech', '#ff0000')
    fetched = tags.get_tag_by_id(created['id'])
    assert fetched['error'] is None
    assert fetched['data']['name'] == 'Tech'
    assert fetched['data']['color'] == '#ff0000'
    assert fetched['data']['created_at'] is not None


def test_search_treats_percent_and_underscore_literally(ctx):
    make_tag('Economy')
    tags.create_tag({'name': 'Rates', 'description': 'up 100% this year', 'color': '#000000'})
    tags.create_tag({'name': 'snake_case', 'color': '#000000'})

    assert tags.search_tags('_')['total_count'] == 1
    assert [t['name'] for t in tags.search_tags('_')['data']] == ['snake_case']
    assert [t['name'] for t in tags.search_tags('100%')['data']] == ['Rates']
    assert tags.search_tags('%%')['data'] == []
