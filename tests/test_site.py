from datetime import date, datetime, timedelta

from conftest import make_article, make_category, make_subcategory, make_tag

from newsdesk.data import advertisements, sponsors, videos


def _seed_category(app, count):
    with app.app_context():
        category = make_category('News')
        base = datetime(2024, 1, 1)
        for i in range(count):
            make_article(f'Story {i:02d}', category_id=category['id'],
                         published_at=base + timedelta(days=i))
    return category


def test_home_page(app, client):
    with app.app_context():
        make_article('Big news', is_featured=True)
        make_article('Hot take', is_trending=True)
    r = client.get('/')
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert 'Big news' in body
    assert 'Hot take' in body


def test_category_page_load_more(app, client):
    category = _seed_category(app, 23)

    body = client.get(f'/category/{category["id"]}').get_data(as_text=True)
    assert 'Showing 10 of 23 articles' in body
    assert 'Load More' in body

    body = client.get(f'/category/{category["id"]}?pages=3').get_data(as_text=True)
    assert 'Showing 23 of 23 articles' in body
    assert 'Load More' not in body


def test_unknown_category_is_404(client):
    assert client.get('/category/999').status_code == 404


def test_category_api(app, client):
    category = _seed_category(app, 23)
    r = client.get(f'/api/categories/{category["id"]}/articles?page=3&limit=10')
    assert r.status_code == 200
    payload = r.get_json()
    assert payload['total_count'] == 23
    assert payload['total_pages'] == 3
    assert payload['current_page'] == 3
    assert (payload['start'], payload['end']) == (21, 23)
    assert [a['title'] for a in payload['articles']] == ['Story 02', 'Story 01', 'Story 00']
    assert payload['articles'][0]['published_at'] == '2024-01-03T00:00:00'


def test_explore_by_tag(app, client):
    with app.app_context():
        tag = make_tag('Climate')
        make_article('Warming', tag_ids=[tag['id']])
        make_article('Unrelated')
    body = client.get('/explore?tag=Climate').get_data(as_text=True)
    assert 'Warming' in body
    assert 'Unrelated' not in body


def test_subcategory_page(app, client):
    with app.app_context():
        category = make_category('News')
        local = make_subcategory(category['id'], 'Local')
        make_article('Town hall', category_id=category['id'], sub_category_id=local['id'])
        make_article('Abroad', category_id=category['id'])
    body = client.get(f'/subcategory/{local["id"]}').get_data(as_text=True)
    assert 'Town hall' in body
    assert 'Abroad' not in body


def test_article_page_with_videos_and_ads(app, client):
    with app.app_context():
        category = make_category('News')
        tag = make_tag('Space', '#123456')
        article = make_article('Moon landing', category_id=category['id'], tag_ids=[tag['id']])
        videos.create_video({'article_id': article['id'],
                             'video_url': 'https://v.example.com/moon.mp4',
                             'description': 'Footage'})
        sponsor = sponsors.create_sponsor({'name': 'Rocket Co'})['data']
        advertisements.create_advertisement({
            'sponsor_id': sponsor['id'], 'category_id': category['id'], 'ad_type': 'sidebar',
            'start_date': date.today() - timedelta(days=1),
            'end_date': date.today() + timedelta(days=1),
        })

    body = client.get(f'/articles/{article["id"]}').get_data(as_text=True)
    assert 'Moon landing' in body
    assert 'Space' in body
    assert 'https://v.example.com/moon.mp4' in body
    assert 'Sponsored by Rocket Co' in body


def test_missing_article_is_404(client):
    assert client.get('/articles/12345').status_code == 404


def test_category_api_caps_limit(app, client):
    category = _seed_category(app, 60)
    payload = client.get(f'/api/categories/{category["id"]}/articles?limit=1000000').get_json()
    assert len(payload['articles']) == 50
    assert payload['total_count'] == 60
    assert payload['total_pages'] == 2
