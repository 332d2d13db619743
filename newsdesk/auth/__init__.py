"""
Auth Blueprint

Dashboard sign-in and sign-out through Flask-Login.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from newsdesk.auth import routes  # noqa: E402, F401
