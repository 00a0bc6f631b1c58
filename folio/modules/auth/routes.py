from flask import flash, render_template, redirect, url_for

from ...core.logging_service import LoggingService
from ..admin_auth.gate import get_admin_email, is_setup, validate_admin_access
from . import auth_bp
from .utils import oauth_client, resolve_caller_identity, sign_in_session, sign_out_session


@auth_bp.route('/sign-in')
def signin():
    """Sign-in page route"""
    return render_template(
        'auth/sign-in.html',
        is_admin_setup=is_setup(),
        admin_email=get_admin_email(),
        oauth_enabled=oauth_client() is not None,
    )


@auth_bp.route('/google')
def oauth_login():
    """Redirect to the Google consent screen"""
    client = oauth_client()
    if client is None:
        flash('OAuth not configured', 'error')
        return redirect(url_for('auth.signin'))

    redirect_uri = url_for('auth.oauth_callback', _external=True)
    return client.authorize_redirect(redirect_uri)


@auth_bp.route('/google/callback')
def oauth_callback():
    """Handle the provider callback and bind the verified email to the session"""
    client = oauth_client()
    if client is None:
        flash('OAuth not configured', 'error')
        return redirect(url_for('auth.signin'))

    token = client.authorize_access_token()
    user_info = token.get('userinfo') or client.userinfo(token=token)

    email = user_info.get('email') if user_info else None
    if not email or not user_info.get('email_verified', False):
        flash('Unable to retrieve a verified email from your account. Please try again.', 'error')
        return redirect(url_for('auth.signin'))

    sign_in_session(email, user_info.get('name'))
    LoggingService.log_user_action('auth', 'sign-in', user_id=email)

    if not is_setup():
        # First sign-in on a fresh site goes to the one-time admin setup
        return redirect(url_for('admin_auth.setup_page'))

    if not validate_admin_access(resolve_caller_identity()):
        LoggingService.log_security_event('Non-admin sign-in rejected', {'email': email})
        sign_out_session()
        flash('Access denied. This account is not authorized as admin.', 'error')
        return redirect(url_for('auth.signin'))

    return redirect(url_for('admin_auth.admin_panel'))


@auth_bp.route('/sign-out')
def signout():
    identity = resolve_caller_identity()
    sign_out_session()
    if identity:
        LoggingService.log_user_action('auth', 'sign-out', user_id=identity.email)
    flash('You have been signed out', 'info')
    return redirect(url_for('portfolio_public.home'))
