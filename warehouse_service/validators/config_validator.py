"""
Configuration Validator
Validates environment variables at application startup
Fails fast if any configuration is missing or invalid

NOTE: This module does not use the logger; logging is configured by
create_app, which runs only after the configuration is known to be valid.
"""

import os
import sys
from urllib.parse import urlparse


def is_valid_url(url: str) -> bool:
    """Validates a URL format"""
    try:
        result = urlparse(url)
        return all([result.scheme, result.netloc])
    except ValueError:
        return False


def is_valid_database_url(url: str) -> bool:
    """Validates a SQLAlchemy database URL (sqlite URLs carry no host)"""
    if url.startswith('sqlite:'):
        return True
    return is_valid_url(url)


def is_valid_port(port: str) -> bool:
    """Validates a port number"""
    try:
        port_num = int(port)
        return 0 < port_num <= 65535
    except (ValueError, TypeError):
        return False


def is_valid_log_level(level: str) -> bool:
    """Validates log level"""
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    return level.upper() in valid_levels


def is_valid_environment(env: str) -> bool:
    """Validates FLASK_ENV"""
    valid_envs = ['development', 'production', 'testing']
    return env.lower() in valid_envs


def is_valid_boolean(value: str) -> bool:
    """Validates boolean string"""
    return value.lower() in ['true', 'false', '1', '0', 'yes', 'no', 'on', 'off']


def is_positive_int(value: str) -> bool:
    return value.isdigit() and int(value) > 0


def is_non_negative_float(value: str) -> bool:
    try:
        return float(value) >= 0
    except ValueError:
        return False


# Configuration validation rules
VALIDATION_RULES = {
    # Service Configuration
    'FLASK_ENV': {
        'required': False,
        'validator': is_valid_environment,
        'error_message': 'FLASK_ENV must be one of: development, production, testing',
        'default': 'production',
    },
    'PORT': {
        'required': False,
        'validator': is_valid_port,
        'error_message': 'PORT must be a valid port number',
        'default': '5000',
    },

    # Database Configuration
    'DATABASE_URL': {
        'required': False,
        'validator': is_valid_database_url,
        'error_message': 'DATABASE_URL must be a valid SQLAlchemy URL',
    },
    'DATABASE_PORT': {
        'required': False,
        'validator': is_valid_port,
        'error_message': 'DATABASE_PORT must be a valid port number if provided',
        'default': '3306',
    },

    # Security Configuration
    'AUTH_ENABLED': {
        'required': False,
        'validator': is_valid_boolean,
        'error_message': 'AUTH_ENABLED must be a boolean',
    },
    'JWT_SECRET': {
        'required': False,
        'validator': lambda v: len(v) >= 32,
        'error_message': 'JWT_SECRET must be at least 32 characters long',
    },
    'SECRET_KEY': {
        'required': False,
        'validator': lambda v: len(v) >= 32,
        'error_message': 'SECRET_KEY must be at least 32 characters long',
    },

    # CORS Configuration
    'CORS_ORIGINS': {
        'required': False,
        'validator': lambda v: all(
            origin.strip() == '*' or is_valid_url(origin.strip())
            for origin in v.split(',')
        ),
        'error_message': 'CORS_ORIGINS must be a comma-separated list of valid URLs or *',
        'default': '*',
    },

    # Logging Configuration
    'LOG_LEVEL': {
        'required': False,
        'validator': is_valid_log_level,
        'error_message': 'LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL',
        'default': 'INFO',
    },

    # Movement posting
    'FOLIO_ISOLATED_ALLOCATION': {
        'required': False,
        'validator': is_valid_boolean,
        'error_message': 'FOLIO_ISOLATED_ALLOCATION must be a boolean',
    },
    'REQUIRE_ADJUSTMENT_REASON': {
        'required': False,
        'validator': is_valid_boolean,
        'error_message': 'REQUIRE_ADJUSTMENT_REASON must be a boolean',
    },
    'POSTING_MAX_RETRIES': {
        'required': False,
        'validator': is_positive_int,
        'error_message': 'POSTING_MAX_RETRIES must be a positive integer',
    },
    'POSTING_RETRY_BACKOFF_SECONDS': {
        'required': False,
        'validator': is_non_negative_float,
        'error_message': 'POSTING_RETRY_BACKOFF_SECONDS must be a non-negative number',
    },
}

# Production needs either DATABASE_URL or the full set of MySQL variables
MYSQL_VARIABLES = ('DATABASE_HOST', 'MYSQL_USER', 'MYSQL_PASSWORD', 'MYSQL_DATABASE')


def collect_errors(environ=None):
    """Returns (errors, warnings) for the given environment mapping"""
    environ = os.environ if environ is None else environ
    errors = []
    warnings = []

    for key, rule in VALIDATION_RULES.items():
        value = environ.get(key)

        # Check if required variable is missing
        if rule['required'] and not value:
            errors.append(f"{key} is required but not set")
            continue

        if not value:
            if 'default' in rule:
                warnings.append(f"{key} not set, using default: {rule['default']}")
            continue

        if not rule['validator'](value):
            errors.append(f"{key}: {rule['error_message']}")
            # Don't expose sensitive values
            if 'PASSWORD' in key or 'SECRET' in key or 'KEY' in key:
                errors.append("   Current value: ***")
            elif len(value) > 100:
                errors.append(f"   Current value: {value[:100]}...")
            else:
                errors.append(f"   Current value: {value}")

    env = (environ.get('FLASK_ENV') or 'production').lower()
    if env == 'production' and not environ.get('DATABASE_URL'):
        missing = [key for key in MYSQL_VARIABLES if not environ.get(key)]
        if missing:
            errors.append(
                f"DATABASE_URL or {', '.join(MYSQL_VARIABLES)} must be set in production "
                f"(missing: {', '.join(missing)})"
            )

    return errors, warnings


def validate_config(environ=None) -> bool:
    """
    Validates all environment variables according to the rules
    Returns False if any variable is missing or invalid
    """
    print('[CONFIG] Validating environment configuration...')
    errors, warnings = collect_errors(environ)

    for warning in warnings:
        print(f"[CONFIG] {warning}")

    if errors:
        print('[CONFIG] Configuration validation failed:', file=sys.stderr)
        for error in errors:
            print(f"  {error}", file=sys.stderr)
        print('Please check your .env file and ensure all required variables are set correctly.',
              file=sys.stderr)
        return False

    print('[CONFIG] All environment variables are valid')
    return True
