"""
Articles Data Access

One row per article after GROUP BY a.id. Tags arrive as GROUP_CONCAT
aggregates over the same joined rows, so ``tag_names``, ``tag_colors`` and
``tag_ids`` always line up; likes and comments are correlated subqueries so
the tag join cannot inflate them.
"""

from newsdesk.data import executor
from newsdesk.data.executor import parse_datetime, split_aggregate
from newsdesk.data.listing import Filter, Listing
from newsdesk.data.repository import Repository

ARTICLE_FIELDS = ('title', 'content', 'category_id', 'sub_category_id', 'author_id',
                  'published_at', 'is_featured', 'is_trending', 'image')

ARTICLE_COLUMNS = [
    'a.id', 'a.title', 'a.content', 'a.category_id', 'a.sub_category_id', 'a.author_id',
    'a.published_at', 'a.is_featured', 'a.is_trending', 'a.image', 'a.created_at',
    'a.updated_at',
    'c.name AS category_name',
    'sc.name AS subcategory_name',
    'au.name AS author_name',
    'GROUP_CONCAT(t.name) AS tag_names',
    'GROUP_CONCAT(t.color) AS tag_colors',
    'GROUP_CONCAT(t.id) AS tag_ids',
    '(SELECT COUNT(*) FROM Likes l WHERE l.article_id = a.id) AS likes_count',
    '(SELECT COUNT(*) FROM Comments cm WHERE cm.article_id = a.id) AS comments_count',
]

ARTICLE_JOINS = [
    'LEFT JOIN Categories c ON a.category_id = c.id',
    'LEFT JOIN SubCategories sc ON a.sub_category_id = sc.id',
    'LEFT JOIN Authors au ON a.author_id = au.id',
    'LEFT JOIN Article_Tags at ON a.id = at.article_id',
    'LEFT JOIN Tags t ON at.tag_id = t.id',
]

ARTICLE_SORTABLE = {
    'id': 'a.id',
    'title': 'a.title',
    'published_at': 'a.published_at',
    'created_at': 'a.created_at',
    'updated_at': 'a.updated_at',
    'is_featured': 'a.is_featured',
    'is_trending': 'a.is_trending',
    'category_name': 'c.name',
    'subcategory_name': 'sc.name',
    'author_name': 'au.name',
    'likes_count': 'likes_count',
    'comments_count': 'comments_count',
    'articles_count': '(SELECT COUNT(*) FROM Articles a2 WHERE a2.sub_category_id = a.sub_category_id)',
}

ARTICLE_FILTERS = {
    'category_id': Filter('a.category_id = :category_id', transform=int),
    'subcategory_id': Filter('a.sub_category_id = :subcategory_id', transform=int),
    'author_id': Filter('a.author_id = :author_id', transform=int),
    'trending': Filter('a.is_trending = 1', flag=True),
    'featured': Filter('a.is_featured = 1', flag=True),
    # EXISTS keeps every tag of a matching article in the aggregates
    'tag': Filter('EXISTS (SELECT 1 FROM Article_Tags at2 JOIN Tags t2 ON at2.tag_id = t2.id '
                  'WHERE at2.article_id = a.id AND t2.name = :tag)'),
}

ARTICLE_LISTING = Listing(
    'Articles', 'a',
    columns=ARTICLE_COLUMNS,
    joins=ARTICLE_JOINS,
    aggregate=True,
    sortable=ARTICLE_SORTABLE,
    default_sort=('published_at', 'desc'),
    searchable=['a.title', 'a.content', 'au.name'],
    filters=ARTICLE_FILTERS,
)


def map_article(row):
    article = dict(row)
    tagged = sorted(zip(split_aggregate(article.get('tag_names')),
                        split_aggregate(article.get('tag_colors')),
                        [int(value) for value in split_aggregate(article.get('tag_ids'))]))
    article['tag_names'] = [name for name, _, _ in tagged]
    article['tag_colors'] = [color for _, color, _ in tagged]
    article['tag_ids'] = [tag_id for _, _, tag_id in tagged]
    article['likes_count'] = int(article.get('likes_count') or 0)
    article['comments_count'] = int(article.get('comments_count') or 0)
    article['is_featured'] = bool(article.get('is_featured'))
    article['is_trending'] = bool(article.get('is_trending'))
    for key in ('published_at', 'created_at', 'updated_at'):
        article[key] = parse_datetime(article.get(key))
    return article


repository = Repository(
    'Articles', 'article', ARTICLE_FIELDS, ARTICLE_LISTING, map_article,
    cascade=(
        'DELETE FROM Article_Tags WHERE article_id = :id',
        'DELETE FROM Likes WHERE article_id = :id',
        'DELETE FROM Comments WHERE article_id = :id',
        'DELETE FROM Videos WHERE article_id = :id',
        'DELETE FROM Advertisements WHERE article_id = :id',
    ))


def get_articles(page=1, limit=10, sort_field='published_at', sort_direction='desc',
                 search=None, filters=None):
    return repository.list(page, limit, sort_field, sort_direction, search=search,
                           filters=filters)


def search_articles(query, page=1, limit=10, sort_field='published_at', sort_direction='desc'):
    return repository.list(page, limit, sort_field, sort_direction, search=query)


def get_all_articles():
    return repository.all('title', 'asc')


def get_article_by_id(id):
    return repository.get_by_id(id)


def _article_values(data):
    """Bind the article fields present in ``data``; flags are stored as 0/1."""
    values = {field: executor.to_db_datetime(data[field])
              for field in ARTICLE_FIELDS if field in data}
    for flag in ('is_featured', 'is_trending'):
        if flag in values:
            values[flag] = 1 if values[flag] else 0
    if 'published_at' in values and values['published_at'] is None:
        values.pop('published_at')
    return values


def _tag_links(article_id, tag_ids):
    return [{'article_id': article_id, 'tag_id': int(tag_id)} for tag_id in tag_ids]


def create_article(data):
    """Insert an article and its tag links in one commit, then fetch it."""
    values = _article_values(data)
    tag_ids = list(data.get('tag_ids') or [])
    columns = ', '.join(values)
    placeholders = ', '.join(f':{field}' for field in values)

    statements = [(f'INSERT INTO Articles ({columns}) VALUES ({placeholders})', values)]
    if tag_ids:
        statements.append((
            'INSERT INTO Article_Tags (article_id, tag_id) VALUES (:article_id, :tag_id)',
            lambda ids: _tag_links(ids[0], tag_ids)))

    result = executor.run_statements(statements)
    if result['error'] or not result['data']['insert_ids'][0]:
        return {'data': None, 'error': 'Failed to create article'}
    return repository.fetch_after_write(result['data']['insert_ids'][0], 'create')


def update_article(id, data):
    """Update an article and replace its tag links in one commit."""
    values = _article_values(data)
    assignments = [f'{field} = :{field}' for field in values]
    assignments.append('updated_at = CURRENT_TIMESTAMP')
    values['id'] = id

    statements = [
        (f'UPDATE Articles SET {", ".join(assignments)} WHERE id = :id',
         values),
    ]
    if 'tag_ids' in data:
        statements.append(('DELETE FROM Article_Tags WHERE article_id = :id', {'id': id}))
        tag_links = _tag_links(id, data.get('tag_ids') or [])
        if tag_links:
            statements.append((
                'INSERT INTO Article_Tags (article_id, tag_id) VALUES (:article_id, :tag_id)',
                tag_links))

    result = executor.run_statements(statements)
    if result['error']:
        return {'data': None, 'error': 'Failed to update article'}
    return repository.fetch_after_write(id, 'update')


def delete_article(id):
    """Delete an article with its tag links, likes, comments, videos and ads."""
    return repository.delete(id)
