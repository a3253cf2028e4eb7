import os


def _env_bool(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def get_database_uri():
    """
    Database URI from DATABASE_URL, or assembled from the MySQL variables
    """
    url = os.environ.get('DATABASE_URL')
    if url:
        return url

    user = os.environ.get('MYSQL_USER', 'admin')
    password = os.environ.get('MYSQL_PASSWORD', 'admin123')
    host = os.environ.get('DATABASE_HOST', 'localhost')
    port = os.environ.get('DATABASE_PORT', '3306')
    database = os.environ.get('MYSQL_DATABASE', 'warehouse_inventory_db')
    return f"mysql+pymysql://{user}:{password}@{host}:{port}/{database}"


class Config:
    """Base configuration"""

    ENV_NAME = 'base'

    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database
    SQLALCHEMY_DATABASE_URI = get_database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }
    MIGRATIONS_DIRECTORY = os.environ.get('MIGRATIONS_DIRECTORY', 'migrations')

    # CORS
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

    # Authentication (JWT issued by the identity provider)
    AUTH_ENABLED = _env_bool('AUTH_ENABLED', True)
    JWT_SECRET = os.environ.get('JWT_SECRET', 'dev-jwt-secret-change-in-production')
    JWT_ALGORITHM = os.environ.get('JWT_ALGORITHM', 'HS256')
    JWT_ISSUER = os.environ.get('JWT_ISSUER')
    JWT_AUDIENCE = os.environ.get('JWT_AUDIENCE')

    # Movement posting
    FOLIO_ISOLATED_ALLOCATION = _env_bool('FOLIO_ISOLATED_ALLOCATION', True)
    REQUIRE_ADJUSTMENT_REASON = _env_bool('REQUIRE_ADJUSTMENT_REASON', False)
    POSTING_MAX_RETRIES = int(os.environ.get('POSTING_MAX_RETRIES', 3))
    POSTING_RETRY_BACKOFF_SECONDS = float(os.environ.get('POSTING_RETRY_BACKOFF_SECONDS', 0.05))

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration"""
    ENV_NAME = 'development'
    DEBUG = True
    LOG_LEVEL = 'DEBUG'
    AUTH_ENABLED = _env_bool('AUTH_ENABLED', False)


class TestingConfig(Config):
    """Testing configuration"""
    ENV_NAME = 'testing'
    TESTING = True
    # Use in-memory SQLite for testing
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    AUTH_ENABLED = False
    JWT_SECRET = 'test-jwt-secret'
    POSTING_RETRY_BACKOFF_SECONDS = 0


class ProductionConfig(Config):
    """Production configuration"""
    ENV_NAME = 'production'
    DEBUG = False


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
