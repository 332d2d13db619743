"""
Content Models

Articles and the taxonomy around them: categories, subcategories, tags,
authors and the videos attached to an article.
"""

from newsdesk.extensions import db


article_tags = db.Table(
    'Article_Tags',
    db.Column('article_id', db.Integer, db.ForeignKey('Articles.id'), primary_key=True),
    db.Column('tag_id', db.Integer, db.ForeignKey('Tags.id'), primary_key=True),
)


class Category(db.Model):
    __tablename__ = 'Categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    def __repr__(self):
        return f'<Category {self.name}>'


class SubCategory(db.Model):
    __tablename__ = 'SubCategories'

    id = db.Column(db.Integer, primary_key=True)
    category_id = db.Column(db.Integer, db.ForeignKey('Categories.id'), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    def __repr__(self):
        return f'<SubCategory {self.name}>'


class Author(db.Model):
    __tablename__ = 'Authors'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(255))
    bio = db.Column(db.Text)
    avatar = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    def __repr__(self):
        return f'<Author {self.name}>'


class Tag(db.Model):
    """Tag; name and color are NOT NULL so the two aggregates stay aligned"""
    __tablename__ = 'Tags'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), unique=True, nullable=False)
    description = db.Column(db.Text)
    color = db.Column(db.String(7), nullable=False, default='#6b7280', server_default='#6b7280')
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    def __repr__(self):
        return f'<Tag {self.name}>'


class Article(db.Model):
    __tablename__ = 'Articles'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=False)
    category_id = db.Column(db.Integer, db.ForeignKey('Categories.id'), index=True)
    sub_category_id = db.Column(db.Integer, db.ForeignKey('SubCategories.id'), index=True)
    author_id = db.Column(db.Integer, db.ForeignKey('Authors.id'), index=True)
    published_at = db.Column(db.DateTime, server_default=db.func.current_timestamp(), index=True)
    is_featured = db.Column(db.Boolean, nullable=False, default=False, server_default='0')
    is_trending = db.Column(db.Boolean, nullable=False, default=False, server_default='0')
    image = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    tags = db.relationship('Tag', secondary=article_tags, lazy=True)

    def __repr__(self):
        return f'<Article {self.title}>'


class Video(db.Model):
    __tablename__ = 'Videos'

    id = db.Column(db.Integer, primary_key=True)
    article_id = db.Column(db.Integer, db.ForeignKey('Articles.id'), nullable=False, index=True)
    video_url = db.Column(db.String(500), nullable=False)
    description = db.Column(db.Text)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    def __repr__(self):
        return f'<Video Article:{self.article_id}>'
