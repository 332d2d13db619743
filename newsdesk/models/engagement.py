"""
Engagement and Advertising Models
"""

from newsdesk.extensions import db


class Like(db.Model):
    __tablename__ = 'Likes'

    id = db.Column(db.Integer, primary_key=True)
    article_id = db.Column(db.Integer, db.ForeignKey('Articles.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())


class Comment(db.Model):
    __tablename__ = 'Comments'

    id = db.Column(db.Integer, primary_key=True)
    article_id = db.Column(db.Integer, db.ForeignKey('Articles.id'), nullable=False, index=True)
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())


class Sponsor(db.Model):
    __tablename__ = 'Sponsors'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(150), nullable=False)

    def __repr__(self):
        return f'<Sponsor {self.name}>'


class Advertisement(db.Model):
    __tablename__ = 'Advertisements'

    id = db.Column(db.Integer, primary_key=True)
    sponsor_id = db.Column(db.Integer, db.ForeignKey('Sponsors.id'), nullable=False)
    article_id = db.Column(db.Integer, db.ForeignKey('Articles.id'))
    category_id = db.Column(db.Integer, db.ForeignKey('Categories.id'))
    ad_type = db.Column(db.String(20), nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    def __repr__(self):
        return f'<Advertisement {self.ad_type} Sponsor:{self.sponsor_id}>'
