"""
Newsdesk - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask

from newsdesk.config import Config
from newsdesk.extensions import db, login_manager

logger = logging.getLogger(__name__)


def create_app(config_class=Config, media_client=None):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)
        media_client: MediaClient used for uploads; built from config when omitted

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message_category = 'info'

    from newsdesk.services import MediaClient
    app.extensions['media_client'] = media_client or MediaClient.from_config(app.config)

    # Register blueprints
    from newsdesk.auth import auth_bp
    from newsdesk.dashboard import dashboard_bp
    from newsdesk.site import site_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp, url_prefix='/dashboard')
    app.register_blueprint(site_bp)

    @app.context_processor
    def inject_settings():
        return dict(search_debounce_ms=app.config['SEARCH_DEBOUNCE_MS'])

    @app.template_filter('datetime')
    def format_datetime(value, fmt='%b %d, %Y %H:%M'):
        return value.strftime(fmt) if value else ''

    # User loader for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        from newsdesk.models import User
        return db.session.get(User, int(user_id))

    # Create database tables
    with app.app_context():
        os.makedirs(app.instance_path, exist_ok=True)
        db.create_all()
        _ensure_default_data(app)

    return app


def _ensure_default_data(app):
    """Create the first admin account when the Users table is empty."""
    from newsdesk.data import users

    counted = users.count_users()
    if counted['error'] or counted['data']:
        return

    created = users.create_user({
        'firstname': 'Admin',
        'lastname': 'User',
        'email': app.config['ADMIN_EMAIL'].lower(),
        'password': app.config['ADMIN_PASSWORD'],
        'role': 'admin',
        'status': 'active',
    })
    if created['error']:
        logger.error('Could not create default admin: %s', created['error'])
    else:
        logger.info('Created default admin %s', app.config['ADMIN_EMAIL'])
