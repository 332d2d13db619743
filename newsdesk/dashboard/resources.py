"""
Dashboard Resources

One Resource per entity screen: table columns, form fields, the data-access
calls behind list/create/edit/delete and any entity-specific checks.
"""

from flask_login import current_user

from newsdesk.dashboard.forms import Field
from newsdesk.data import (
    advertisements, articles, authors, categories, sponsors, tags, users, videos,
)


class Column:
    """A table column; ``kind`` picks the cell template (text, datetime, date,
    color, tags, bool, link)."""

    def __init__(self, field, label, sortable=True, kind='text'):
        self.field = field
        self.label = label
        self.sortable = sortable
        self.kind = kind


class Resource:
    def __init__(self, name, label, columns, fields, fetch, get, create, update, delete,
                 default_sort=('created_at', 'desc'), check=None, before_delete=None,
                 admin_only=False, title_field='name', plural=None):
        self.name = name
        self.label = label
        self.columns = columns
        self.fields = fields
        self.fetch = fetch
        self.get = get
        self.create = create
        self.update = update
        self.delete = delete
        self.default_sort = default_sort
        self.check = check
        self.before_delete = before_delete
        self.admin_only = admin_only
        self.title_field = title_field
        self.plural = plural or label + 's'

    def sortable_fields(self):
        return {column.field for column in self.columns if column.sortable}


def _choices(loader, label='name'):
    def load():
        result = loader()
        return [(row['id'], row[label]) for row in (result['data'] or [])]
    return load


# Tags

def _fetch_tags(state):
    if state.query:
        return tags.search_tags(state.query, state.page, state.limit,
                                state.sort_field, state.sort_direction)
    return tags.get_tags(state.page, state.limit, state.sort_field, state.sort_direction)


def _check_tag(data, errors, item_id=None):
    name = data.get('name')
    if name and ',' in name:
        errors['name'] = 'Tag names cannot contain commas.'
    elif name:
        taken = tags.tag_name_taken(name, item_id)
        if taken['error']:
            errors['name'] = taken['error']
        elif taken['data']:
            errors['name'] = 'A tag with this name already exists.'


TAGS = Resource(
    'tags', 'Tag',
    columns=[
        Column('name', 'Name'),
        Column('description', 'Description'),
        Column('color', 'Color', kind='color'),
        Column('articles_count', 'Articles'),
        Column('created_at', 'Created At', kind='datetime'),
        Column('updated_at', 'Updated At', kind='datetime'),
    ],
    fields=[
        Field('name', 'Name', required=True, placeholder='Enter tag name'),
        Field('description', 'Description', type='textarea'),
        Field('color', 'Color', type='color', required=True, default='#6b7280'),
    ],
    fetch=_fetch_tags,
    get=tags.get_tag_by_id,
    create=tags.create_tag,
    update=tags.update_tag,
    delete=tags.delete_tag,
    check=_check_tag,
)


# Users

def _fetch_users(state):
    if state.query:
        return users.search_users(state.query, state.page, state.limit,
                                  state.sort_field, state.sort_direction)
    return users.get_users(state.page, state.limit, state.sort_field, state.sort_direction)


def _check_user(data, errors, item_id=None):
    email = data.get('email')
    if email and 'email' not in errors:
        taken = users.email_taken(email, item_id)
        if taken['error']:
            errors['email'] = taken['error']
        elif taken['data']:
            errors['email'] = 'Email already registered.'
    password = data.get('password')
    if item_id is None and not password:
        errors['password'] = 'Password is required.'
    elif password and len(password) < 6:
        errors['password'] = 'Password must be at least 6 characters long.'


def _before_user_delete(item):
    if current_user.is_authenticated and item['id'] == current_user.id:
        return 'You cannot delete your own account.'
    return None


USERS = Resource(
    'users', 'User',
    columns=[
        Column('firstname', 'First Name'),
        Column('lastname', 'Last Name'),
        Column('email', 'Email'),
        Column('role', 'Role'),
        Column('status', 'Status'),
        Column('created_at', 'Created At', kind='datetime'),
        Column('updated_at', 'Updated At', kind='datetime'),
    ],
    fields=[
        Field('firstname', 'First Name', required=True, placeholder='Enter first name'),
        Field('lastname', 'Last Name', required=True, placeholder='Enter last name'),
        Field('email', 'Email', type='email', required=True),
        Field('password', 'Password', type='password'),
        Field('role', 'Role', type='select', required=True, default='editor',
              choices=lambda: [(role, role.title()) for role in users.ROLES]),
        Field('status', 'Status', type='select', required=True, default='active',
              choices=lambda: [(status, status.title()) for status in users.STATUSES]),
    ],
    fetch=_fetch_users,
    get=users.get_user_by_id,
    create=users.create_user,
    update=users.update_user,
    delete=users.delete_user,
    check=_check_user,
    before_delete=_before_user_delete,
    admin_only=True,
    title_field='email',
)


# Articles

def _fetch_articles(state):
    return articles.get_articles(state.page, state.limit, state.sort_field,
                                 state.sort_direction, search=state.query or None)


def _check_article(data, errors, item_id=None):
    sub_category_id = data.get('sub_category_id')
    if sub_category_id and 'sub_category_id' not in errors:
        found = categories.get_subcategory_by_id(sub_category_id)
        subcategory = found['data']
        if subcategory and subcategory['category_id'] != data.get('category_id'):
            errors['sub_category_id'] = 'Subcategory does not belong to the selected category.'


ARTICLES = Resource(
    'articles', 'Article',
    columns=[
        Column('title', 'Title'),
        Column('category_name', 'Category'),
        Column('author_name', 'Author'),
        Column('tag_names', 'Tags', sortable=False, kind='tags'),
        Column('likes_count', 'Likes'),
        Column('is_trending', 'Trending', kind='bool'),
        Column('published_at', 'Published', kind='datetime'),
    ],
    fields=[
        Field('title', 'Title', required=True),
        Field('content', 'Content', type='textarea', required=True),
        Field('category_id', 'Category', type='select', required=True,
              choices=_choices(categories.get_all_categories)),
        Field('sub_category_id', 'Subcategory', type='select',
              choices=_choices(categories.get_all_subcategories)),
        Field('author_id', 'Author', type='select', choices=_choices(authors.get_all_authors)),
        Field('tag_ids', 'Tags', type='multiselect', choices=_choices(tags.get_all_tags)),
        Field('published_at', 'Published At', type='datetime'),
        Field('is_featured', 'Featured', type='checkbox'),
        Field('is_trending', 'Trending', type='checkbox'),
        Field('image', 'Image URL', type='url'),
        Field('image_file', 'Upload Image', type='file', upload='image', target='image'),
    ],
    fetch=_fetch_articles,
    get=articles.get_article_by_id,
    create=articles.create_article,
    update=articles.update_article,
    delete=articles.delete_article,
    default_sort=('published_at', 'desc'),
    check=_check_article,
    title_field='title',
)


# Advertisements

def _fetch_advertisements(state):
    return advertisements.get_advertisements(state.page, state.limit, state.sort_field,
                                             state.sort_direction, search=state.query or None)


def _check_advertisement(data, errors, item_id=None):
    start, end = data.get('start_date'), data.get('end_date')
    if start and end and end < start:
        errors['end_date'] = 'End date cannot be before the start date.'


ADVERTISEMENTS = Resource(
    'advertisements', 'Advertisement',
    columns=[
        Column('sponsor_name', 'Sponsor'),
        Column('article_title', 'Article'),
        Column('category_name', 'Category'),
        Column('ad_type', 'Type'),
        Column('start_date', 'Start Date', kind='date'),
        Column('end_date', 'End Date', kind='date'),
    ],
    fields=[
        Field('sponsor_id', 'Sponsor', type='select', required=True,
              choices=_choices(sponsors.get_all_sponsors)),
        Field('article_id', 'Article', type='select',
              choices=_choices(articles.get_all_articles, 'title')),
        Field('category_id', 'Category', type='select',
              choices=_choices(categories.get_all_categories)),
        Field('ad_type', 'Type', type='select', required=True,
              choices=lambda: [(ad_type, ad_type.title()) for ad_type in advertisements.AD_TYPES]),
        Field('start_date', 'Start Date', type='date', required=True),
        Field('end_date', 'End Date', type='date', required=True),
    ],
    fetch=_fetch_advertisements,
    get=advertisements.get_advertisement_by_id,
    create=advertisements.create_advertisement,
    update=advertisements.update_advertisement,
    delete=advertisements.delete_advertisement,
    default_sort=('start_date', 'desc'),
    check=_check_advertisement,
    title_field='ad_type',
)


# Videos

def _fetch_videos(state):
    return videos.get_videos(state.page, state.limit, state.sort_field,
                             state.sort_direction, search=state.query or None)


VIDEOS = Resource(
    'videos', 'Video',
    columns=[
        Column('article_title', 'Article'),
        Column('description', 'Description'),
        Column('video_url', 'Video', sortable=False, kind='link'),
        Column('created_at', 'Created At', kind='datetime'),
    ],
    fields=[
        Field('article_id', 'Article', type='select', required=True,
              choices=_choices(articles.get_all_articles, 'title')),
        Field('video_url', 'Video URL', type='url', required=True),
        Field('video_file', 'Upload Video', type='file', upload='video', target='video_url'),
        Field('description', 'Description', type='textarea'),
    ],
    fetch=_fetch_videos,
    get=videos.get_video_by_id,
    create=videos.create_video,
    update=videos.update_video,
    delete=videos.delete_video,
    title_field='video_url',
)


# Authors

def _fetch_authors(state):
    return authors.get_authors(state.page, state.limit, state.sort_field,
                               state.sort_direction, search=state.query or None)


AUTHORS = Resource(
    'authors', 'Author',
    columns=[
        Column('name', 'Name'),
        Column('email', 'Email'),
        Column('articles_count', 'Articles'),
        Column('created_at', 'Created At', kind='datetime'),
    ],
    fields=[
        Field('name', 'Name', required=True),
        Field('email', 'Email', type='email'),
        Field('bio', 'Bio', type='textarea'),
        Field('avatar', 'Avatar URL', type='url'),
        Field('avatar_file', 'Upload Avatar', type='file', upload='image', target='avatar'),
    ],
    fetch=_fetch_authors,
    get=authors.get_author_by_id,
    create=authors.create_author,
    update=authors.update_author,
    delete=authors.delete_author,
    default_sort=('name', 'asc'),
)


# Categories and subcategories

def _fetch_categories(state):
    return categories.get_categories(state.page, state.limit, state.sort_field,
                                     state.sort_direction, search=state.query or None)


def _fetch_subcategories(state):
    return categories.get_subcategories(state.page, state.limit, state.sort_field,
                                        state.sort_direction, search=state.query or None)


CATEGORIES = Resource(
    'categories', 'Category',
    columns=[
        Column('name', 'Name'),
        Column('description', 'Description'),
        Column('subcategories_count', 'Subcategories'),
        Column('articles_count', 'Articles'),
        Column('created_at', 'Created At', kind='datetime'),
    ],
    fields=[
        Field('name', 'Name', required=True),
        Field('description', 'Description', type='textarea'),
    ],
    fetch=_fetch_categories,
    get=categories.get_category_by_id,
    create=categories.create_category,
    update=categories.update_category,
    delete=categories.delete_category,
    default_sort=('name', 'asc'),
    plural='Categories',
)

SUBCATEGORIES = Resource(
    'subcategories', 'Subcategory',
    columns=[
        Column('name', 'Name'),
        Column('category_name', 'Category'),
        Column('articles_count', 'Articles'),
        Column('created_at', 'Created At', kind='datetime'),
    ],
    fields=[
        Field('name', 'Name', required=True),
        Field('category_id', 'Category', type='select', required=True,
              choices=_choices(categories.get_all_categories)),
        Field('description', 'Description', type='textarea'),
    ],
    fetch=_fetch_subcategories,
    get=categories.get_subcategory_by_id,
    create=categories.create_subcategory,
    update=categories.update_subcategory,
    delete=categories.delete_subcategory,
    default_sort=('name', 'asc'),
    plural='Subcategories',
)

RESOURCES = [ARTICLES, TAGS, CATEGORIES, SUBCATEGORIES, AUTHORS, VIDEOS, ADVERTISEMENTS, USERS]
