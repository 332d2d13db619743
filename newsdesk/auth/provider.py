"""
Credentials Provider

Checks an email/password pair against the Users table and signs the user
in. Failures are raised as AuthError with a type code; authenticate()
turns those codes into the messages shown on the login form.
"""

import logging

from flask_login import login_user
from werkzeug.security import check_password_hash

from newsdesk.data import users
from newsdesk.extensions import db
from newsdesk.models import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = 'Invalid credentials.'
GENERIC_FAILURE = 'Something went wrong.'


class AuthError(Exception):
    """Sign-in failure; ``type`` is the provider error code."""

    def __init__(self, type, message=None):
        super().__init__(message or type)
        self.type = type


def sign_in(email, password, remember=False):
    """Sign in with credentials or raise AuthError.

    Codes: ``CredentialsSignin`` (unknown email or wrong password),
    ``AccessDenied`` (inactive account), ``CallbackRouteError`` (lookup
    failed).
    """
    if not email or not password:
        raise AuthError('CredentialsSignin')

    found = users.get_user_credentials(email.strip().lower())
    if found['error']:
        raise AuthError('CallbackRouteError', found['error'])

    row = found['data']
    if row is None or not check_password_hash(row['password_hash'], password):
        raise AuthError('CredentialsSignin')
    if row['status'] != 'active':
        raise AuthError('AccessDenied')

    user = db.session.get(User, row['id'])
    if user is None:
        raise AuthError('CallbackRouteError', 'User vanished during sign-in')

    login_user(user, remember=remember)
    logger.info('User %s signed in', user.email)
    return user


def authenticate(form):
    """Sign in from a submitted form; returns None on success or an error message."""
    try:
        sign_in(form.get('email', ''), form.get('password', ''),
                remember=bool(form.get('remember')))
    except AuthError as e:
        logger.debug('Sign-in failed: %s', e.type)
        if e.type == 'CredentialsSignin':
            return INVALID_CREDENTIALS
        return GENERIC_FAILURE
    return None
