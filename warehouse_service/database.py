"""
Database configuration and instance
"""

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

# Initialize database instance
db = SQLAlchemy()
migrate = Migrate()


def init_db(app):
    """Initialize database with Flask app"""
    db.init_app(app)
    migrate.init_app(app, db, directory=app.config.get('MIGRATIONS_DIRECTORY', 'migrations'))
    return db


def ping_database():
    """Run a trivial query against the configured database"""
    from sqlalchemy import text
    db.session.execute(text('SELECT 1'))
    return True
