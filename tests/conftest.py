"""
Shared fixtures for the Folio test suite.

Every test gets its own temporary directory holding the portfolio database,
the logs database and the local upload folder.

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import os
import shutil
import tempfile

import pytest
from flask import Flask

from folio import Folio

ADMIN_EMAIL = "owner@example.com"


def make_app(tmp_db_dir, **overrides):
    """Build a Flask app with Folio initialised against tmp_db_dir."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir
    app.config["PORTFOLIO_DB"] = os.path.join(tmp_db_dir, "portfolio.db")
    app.config["LOGS_DB"] = os.path.join(tmp_db_dir, "app_logs.db")
    app.config["UPLOAD_FOLDER"] = os.path.join(tmp_db_dir, "uploads")
    app.config["STORAGE_TYPE"] = "local"
    # Prevent real OAuth registration -- no credentials set
    app.config["GOOGLE_CLIENT_ID"] = ""
    app.config.update(overrides)
    Folio(app)
    return app


def sign_in(client, email, name=None):
    """Put an identity on the test client's session, as the OAuth callback does."""
    with client.session_transaction() as sess:
        sess["user_email"] = email
        if name:
            sess["user_name"] = name


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="folio-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_db_dir):
    """Fully initialised Flask app with all Folio modules registered."""
    return make_app(tmp_db_dir)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def bound_admin(app):
    """An app whose admin has been bound to ADMIN_EMAIL."""
    from folio.modules.admin_auth.gate import setup_admin

    with app.app_context():
        setup_admin(ADMIN_EMAIL)
    return ADMIN_EMAIL


@pytest.fixture
def admin_client(client, bound_admin):
    """Test client signed in as the bound admin."""
    sign_in(client, bound_admin, "Owner")
    return client
