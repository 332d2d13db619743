"""
Public Site Blueprint

Read-only article pages and the JSON feed behind "Load More".
"""

from flask import Blueprint

site_bp = Blueprint('site', __name__)

from newsdesk.site import routes  # noqa: E402, F401
