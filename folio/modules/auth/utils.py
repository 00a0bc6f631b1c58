from collections import namedtuple

from authlib.integrations.flask_client import OAuth
from flask import current_app, session

# The authenticated principal behind a request
Identity = namedtuple('Identity', ['email', 'name'])


def configure_oauth(app):
    """Configure the Google OAuth provider on a registry owned by this app.

    Returns the registered client, or None when no client id is configured
    (the sign-in page then explains that OAuth is unavailable).
    """
    oauth = OAuth(app)

    client_id = app.config.get('GOOGLE_CLIENT_ID')
    if not client_id:
        return None

    return oauth.register(
        name='google',
        client_id=client_id,
        client_secret=app.config.get('GOOGLE_CLIENT_SECRET'),
        server_metadata_url='https://accounts.google.com/.well-known/openid-configuration',
        client_kwargs={
            'scope': 'openid email profile'
        },
        overwrite=True,
    )


def oauth_client():
    """The current app's Google client, or None when OAuth is not configured"""
    oauth = current_app.extensions.get('authlib.integrations.flask_client')
    if oauth is None:
        return None
    return oauth.create_client('google')


def resolve_caller_identity():
    """Return the caller's Identity, or None when nobody is signed in"""
    email = session.get('user_email')
    if not email:
        return None
    return Identity(email=email, name=session.get('user_name'))


def sign_in_session(email, name=None):
    session.clear()
    session['user_email'] = email
    if name:
        session['user_name'] = name


def sign_out_session():
    session.pop('user_email', None)
    session.pop('user_name', None)
