"""
Dashboard Blueprint

Every route under /dashboard requires a signed-in user.
"""

from flask import Blueprint
from flask_login import current_user

from newsdesk.extensions import login_manager

dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.before_request
def require_login():
    if not current_user.is_authenticated:
        return login_manager.unauthorized()


from newsdesk.dashboard import routes  # noqa: E402, F401
