"""
Models Package

Table declarations used by db.create_all(). Reads and writes go through
the raw SQL modules in newsdesk.data.
"""

from newsdesk.models.user import User
from newsdesk.models.content import (
    Article, Author, Category, SubCategory, Tag, Video, article_tags,
)
from newsdesk.models.engagement import Advertisement, Comment, Like, Sponsor

__all__ = [
    'User', 'Article', 'Author', 'Category', 'SubCategory', 'Tag', 'Video',
    'article_tags', 'Advertisement', 'Comment', 'Like', 'Sponsor',
]
