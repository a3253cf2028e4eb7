"""
JWT Authentication and Authorization Middleware
Resolves the acting user for write endpoints; the posting engine only ever
sees the resulting opaque user id.
"""

import jwt
from functools import wraps
from flask import request, g, current_app
import logging

logger = logging.getLogger(__name__)

ROLE_ADMIN = 'Administrador'
ROLE_SUPERVISOR = 'Supervisor'
ROLE_OPERATOR = 'Operador'
ROLE_VIEWER = 'Consulta'

SYSTEM_USER_ID = 'system'


class AuthError(Exception):
    """Custom authentication error"""
    def __init__(self, message, status_code=401):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


def get_token_from_request():
    """Extract JWT token from Authorization header"""
    auth_header = request.headers.get('Authorization', '')

    if not auth_header:
        return None

    if not auth_header.startswith('Bearer '):
        raise AuthError('Authorization header must start with Bearer', 401)

    parts = auth_header.split(' ')
    if len(parts) != 2:
        raise AuthError('Invalid Authorization header format', 401)

    return parts[1]


def decode_jwt(token):
    """Decode and validate JWT token"""
    config = current_app.config
    options = {}
    kwargs = {}
    if config.get('JWT_ISSUER'):
        kwargs['issuer'] = config['JWT_ISSUER']
    if config.get('JWT_AUDIENCE'):
        kwargs['audience'] = config['JWT_AUDIENCE']
    else:
        options['verify_aud'] = False

    try:
        return jwt.decode(
            token,
            config['JWT_SECRET'],
            algorithms=[config.get('JWT_ALGORITHM', 'HS256')],
            options=options,
            **kwargs
        )
    except jwt.ExpiredSignatureError:
        raise AuthError('Token has expired', 401)
    except jwt.InvalidTokenError as e:
        logger.warning(f'Invalid token: {str(e)}')
        raise AuthError('Invalid token', 401)


def _user_from_payload(payload):
    user_id = payload.get('sub') or payload.get('user_id') or payload.get('id')
    if not user_id:
        raise AuthError('Token missing user identifier', 401)

    roles = list(payload.get('roles', []))
    # Keycloak-style tokens keep realm roles under realm_access
    roles.extend(payload.get('realm_access', {}).get('roles', []))
    return {
        'id': user_id,
        'email': payload.get('email'),
        'roles': roles
    }


def _resolve_current_user():
    if not current_app.config.get('AUTH_ENABLED', True):
        return {
            'id': request.headers.get('X-User-Id') or SYSTEM_USER_ID,
            'email': None,
            'roles': [ROLE_ADMIN, ROLE_SUPERVISOR, ROLE_OPERATOR, ROLE_VIEWER],
        }

    token = get_token_from_request()
    if not token:
        raise AuthError('No authentication token provided', 401)
    return _user_from_payload(decode_jwt(token))


def require_roles(*required_roles):
    """
    Decorator to require any of the given roles
    Usage: @require_roles(ROLE_ADMIN, ROLE_SUPERVISOR)
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                user = _resolve_current_user()
            except AuthError as e:
                logger.warning(f'Authentication failed: {e.message}')
                return {
                    'success': False,
                    'error': 'Authentication failed',
                    'message': e.message
                }, e.status_code

            if not any(role in user['roles'] for role in required_roles):
                logger.warning(
                    f'Authorization failed: User {user["id"]} lacks required roles. '
                    f'Required: {required_roles}, Has: {user["roles"]}'
                )
                return {
                    'success': False,
                    'error': 'Forbidden',
                    'message': f'Required roles: {", ".join(required_roles)}'
                }, 403

            g.current_user = user
            return f(*args, **kwargs)

        return decorated_function
    return decorator


def get_current_user_id():
    """
    Id of the authenticated user, ``system`` outside an authenticated request
    """
    user = getattr(g, 'current_user', None)
    return user['id'] if user else SYSTEM_USER_ID
