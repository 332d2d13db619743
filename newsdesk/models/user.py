"""
User Model
"""

from flask_login import UserMixin
from newsdesk.extensions import db


class User(UserMixin, db.Model):
    """Dashboard user; role gates the users screens, status gates sign-in"""
    __tablename__ = 'Users'

    id = db.Column(db.Integer, primary_key=True)
    firstname = db.Column(db.String(100), nullable=False)
    lastname = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='editor', server_default='editor')
    status = db.Column(db.String(20), nullable=False, default='active', server_default='active')
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    updated_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    @property
    def is_admin(self):
        return self.role == 'admin'

    @property
    def is_active(self):
        return self.status == 'active'

    @property
    def full_name(self):
        return f'{self.firstname} {self.lastname}'

    def __repr__(self):
        return f'<User {self.email}>'
