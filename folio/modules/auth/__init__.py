"""
Folio Auth Module

Delegates sign-in to an external OAuth provider (Google) and resolves the
signed-in caller from the session:
- OAuth redirect and callback
- Sign-out
- Caller identity lookup used by the admin gate
"""

from flask import Blueprint

auth_bp = Blueprint(
    'auth',
    __name__,
    url_prefix='/auth',
    template_folder='templates'
)

from . import routes
from .utils import Identity, configure_oauth, oauth_client, resolve_caller_identity, sign_in_session, sign_out_session

__all__ = ['auth_bp', 'Identity', 'configure_oauth', 'oauth_client', 'resolve_caller_identity',
           'sign_in_session', 'sign_out_session']
