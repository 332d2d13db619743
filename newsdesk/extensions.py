"""
Flask Extensions

Dashboard access is session-based through Flask-Login. The media client is
not an extension object: it is built per app in the factory.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance (engine, pool and schema only; queries are raw SQL)
db = SQLAlchemy()

# Login manager for dashboard authentication
login_manager = LoginManager()
