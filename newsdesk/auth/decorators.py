"""
Access Decorators
"""

from functools import wraps
from flask import abort
from flask_login import current_user

from newsdesk.extensions import login_manager


def admin_required(f):
    """Decorator to ensure the request is from a signed-in admin.

    Anonymous requests go to the login page; signed-in users without the
    admin role get a 403.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            return login_manager.unauthorized()
        if not current_user.is_admin:
            abort(403)
        return f(*args, **kwargs)
    return wrapper
