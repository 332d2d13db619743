"""
Configuration settings for the Newsdesk dashboard and public site
"""
import os


class Config:
    """Flask application configuration"""

    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'newsdesk.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True}

    # Media host (Cloudinary-compatible upload API)
    CLOUDINARY_CLOUD_NAME = os.environ.get('CLOUDINARY_CLOUD_NAME', '')
    CLOUDINARY_API_KEY = os.environ.get('CLOUDINARY_API_KEY', '')
    CLOUDINARY_API_SECRET = os.environ.get('CLOUDINARY_API_SECRET', '')
    MEDIA_UPLOAD_URL = os.environ.get('MEDIA_UPLOAD_URL') or 'https://api.cloudinary.com/v1_1'
    MEDIA_FOLDER = os.environ.get('MEDIA_FOLDER') or 'newsdesk'
    MEDIA_TIMEOUT = 30

    # Listing settings
    DEFAULT_ITEMS_PER_PAGE = 10
    ITEMS_PER_PAGE_OPTIONS = (5, 10, 25, 50)
    FRONT_END_ITEMS_PER_PAGE = 10
    SEARCH_DEBOUNCE_MS = 300

    # Seed admin, created on first start when the Users table is empty
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL') or 'admin@example.com'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'admin123'

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    CLOUDINARY_CLOUD_NAME = 'demo'
    CLOUDINARY_API_KEY = 'key'
    CLOUDINARY_API_SECRET = 'secret'
    SEARCH_DEBOUNCE_MS = 0
    LOG_LEVEL = 'DEBUG'
