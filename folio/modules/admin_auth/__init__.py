"""
Admin Auth Module
=================

Admin authorization gate and admin panel for the portfolio.

Provides:
- First-run admin binding (one email, set once)
- Admin status queries used by the sign-in page
- The admin panel page
- `admin_required` decorator for content mutations
"""

from flask import Blueprint

admin_auth_bp = Blueprint(
    'admin_auth',
    __name__,
    url_prefix='/admin',
    template_folder='templates'
)

from . import routes
from .gate import (
    admin_required, get_admin_email, is_setup, require_admin, setup_admin, validate_admin_access
)

__all__ = ['admin_auth_bp', 'admin_required', 'get_admin_email', 'is_setup', 'require_admin',
           'setup_admin', 'validate_admin_access']
