"""
Admin Authorization Gate
========================

Single source of truth for "who is the admin" and "is the current caller the
admin".

The site has exactly one administrator, bound once by email:

    Unconfigured --setup_admin(email)--> Configured

Configured is terminal. There is no update, delete or re-binding path. The
singleton is enforced by the admin_settings table itself (its primary key is
pinned to 1), so of two concurrent first-time setups only one insert can land.

get_admin_email() is deliberately public: the sign-in page shows it so the
owner knows which account to sign in with.
"""

import sqlite3
from functools import wraps

from ...core.config import Config
from ...core.database import Database
from ...core.exceptions import AlreadyConfigured, PermissionDenied, Unauthenticated, ValidationError
from ...core.logging_service import LoggingService
from ..auth.utils import resolve_caller_identity

SETTINGS_TABLE = Config.ADMIN_SETTINGS_TABLE
_SETTINGS_ID = 1


def get_admin_settings():
    """Return the admin settings record as a dict, or None if unset"""
    record = Database.get(SETTINGS_TABLE, _SETTINGS_ID)
    if record is None:
        return None
    return {
        'is_setup': bool(record['is_setup']),
        'admin_email': record['admin_email'],
    }


def is_setup():
    """True once an admin has been bound. Never raises for an empty store."""
    settings = get_admin_settings()
    return bool(settings and settings['is_setup'])


def get_admin_email():
    """The bound admin email, or None when no admin is configured"""
    settings = get_admin_settings()
    return settings['admin_email'] if settings else None


def setup_admin(email):
    """Bind `email` as the permanent admin identity.

    Raises:
        ValidationError: the email is empty or malformed.
        AlreadyConfigured: an admin is already bound (nothing is changed).
    """
    email = email.strip() if isinstance(email, str) else ''
    if not email or '@' not in email:
        raise ValidationError('A valid email address is required')

    try:
        Database.insert(SETTINGS_TABLE, {
            'id': _SETTINGS_ID,
            'is_setup': True,
            'admin_email': email,
        })
    except sqlite3.IntegrityError:
        LoggingService.log_security_event('Admin setup attempted after binding', {'email': email})
        raise AlreadyConfigured()

    LoggingService.log_user_action('admin_auth', 'admin bound', user_id=email)
    return {'is_setup': True, 'admin_email': email}


def validate_admin_access(identity):
    """True iff the caller is signed in, an admin exists, and the emails match exactly.

    Args:
        identity: the caller's Identity, or None when unauthenticated.
    """
    if identity is None or not identity.email:
        return False

    settings = get_admin_settings()
    if settings is None:
        return False

    return identity.email == settings['admin_email']


def require_admin():
    """Resolve the caller and insist they are the admin.

    Returns the caller's Identity.

    Raises:
        Unauthenticated: nobody is signed in.
        PermissionDenied: someone is signed in but is not the admin.
    """
    identity = resolve_caller_identity()
    if identity is None:
        LoggingService.log_security_event('Unauthenticated mutation rejected')
        raise Unauthenticated()

    if not validate_admin_access(identity):
        LoggingService.log_security_event('Non-admin mutation rejected', {'email': identity.email})
        raise PermissionDenied()

    return identity


def admin_required(f):
    """Decorator for content-mutating API routes"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        require_admin()
        return f(*args, **kwargs)
    return decorated_function
