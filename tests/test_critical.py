"""
Critical Integration Tests for Folio
====================================

Focused tests covering the integration points most likely to break.
Run with: pytest tests/test_critical.py -v
"""

import os
import shutil
import tempfile

from flask import Flask

from folio import UPLOAD_BODY_OVERHEAD, Folio

from conftest import make_app


# ---------------------------------------------------------------------------
# 1. Framework initialisation -- Folio(app) does not raise
# ---------------------------------------------------------------------------

def test_framework_initialisation(tmp_db_dir):
    """Folio(app) boots without errors and stores itself on the app."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir
    app.config["PORTFOLIO_DB"] = os.path.join(tmp_db_dir, "portfolio.db")
    app.config["LOGS_DB"] = os.path.join(tmp_db_dir, "app_logs.db")

    folio = Folio(app)

    assert "folio" in app.extensions
    assert app.extensions["folio"] is folio


# ---------------------------------------------------------------------------
# 2. Config resolution -- host values win, gaps are filled
# ---------------------------------------------------------------------------

def test_config_db_paths(app, tmp_db_dir):
    """DB paths resolve to the host's values; unset keys come from Config."""
    assert app.config["PORTFOLIO_DB"] == os.path.join(tmp_db_dir, "portfolio.db")
    assert "app_logs.db" in app.config["LOGS_DB"]
    assert app.config["UPLOAD_URL_MAX_AGE"] > 0
    assert "pdf" in app.config["ALLOWED_UPLOAD_EXTENSIONS"]


def test_db_paths_derived_from_db_dir(tmp_db_dir):
    """Setting only DB_DIR places both databases inside it."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir

    Folio(app)

    assert app.config["PORTFOLIO_DB"] == os.path.join(tmp_db_dir, "portfolio.db")
    assert app.config["LOGS_DB"] == os.path.join(tmp_db_dir, "app_logs.db")
    assert os.path.exists(app.config["PORTFOLIO_DB"])


def test_request_body_cap_follows_upload_limit(tmp_db_dir):
    """Without a host value, MAX_CONTENT_LENGTH sits just above MAX_UPLOAD_SIZE."""
    app = make_app(tmp_db_dir, MAX_UPLOAD_SIZE=1000)

    assert app.config["MAX_CONTENT_LENGTH"] == 1000 + UPLOAD_BODY_OVERHEAD


def test_request_body_cap_host_value_wins(tmp_db_dir):
    app = make_app(tmp_db_dir, MAX_CONTENT_LENGTH=4096)

    assert app.config["MAX_CONTENT_LENGTH"] == 4096


def test_oversized_request_body_is_refused(tmp_db_dir):
    import io

    app = make_app(tmp_db_dir, MAX_UPLOAD_SIZE=10, MAX_CONTENT_LENGTH=100)
    client = app.test_client()

    response = client.post(
        "/storage/upload/any-token",
        data={"file": (io.BytesIO(b"x" * 200), "big.pdf")},
        content_type="multipart/form-data",
    )

    assert response.status_code == 413


# ---------------------------------------------------------------------------
# 3. Blueprint registration -- all expected modules are registered
# ---------------------------------------------------------------------------

EXPECTED_MODULES = [
    "portfolio_public",
    "auth",
    "admin_auth",
    "profile",
    "education",
    "certificates",
    "achievements",
    "storage",
]


def test_all_blueprints_registered(app):
    """All feature modules should be registered as blueprints."""
    registered = app.extensions["folio"].get_registered_modules()

    for mod in EXPECTED_MODULES:
        assert mod in registered, (
            f"Module '{mod}' was not registered. Registered: {registered}"
        )

    assert len(registered) == len(EXPECTED_MODULES)


def test_feature_can_be_disabled(tmp_db_dir):
    """A module switched off in the features map is not registered."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir

    folio = Folio(app, {'features': {'achievements': False}})

    assert "achievements" not in folio.get_registered_modules()
    rules = [rule.rule for rule in app.url_map.iter_rules()]
    assert "/api/achievements" not in rules
    assert "/api/education" in rules


# ---------------------------------------------------------------------------
# 4. Template context -- folio_config and brand_name are injected
# ---------------------------------------------------------------------------

def test_template_context_injection(app):
    """Context processor injects folio_config and brand_name."""
    with app.test_request_context("/"):
        ctx = {}
        for func in app.template_context_processors[None]:
            ctx.update(func())

        assert "folio_config" in ctx, "folio_config missing from template context"
        assert "brand_name" in ctx, "brand_name missing from template context"
        assert isinstance(ctx["folio_config"], dict)
        assert isinstance(ctx["brand_name"], str)
        assert len(ctx["brand_name"]) > 0


def test_brand_name_from_extension_config(tmp_db_dir):
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir

    Folio(app, {'brand_name': 'Jane Doe'})

    assert app.config["BRAND_NAME"] == "Jane Doe"


# ---------------------------------------------------------------------------
# 5. Database directory creation -- _setup_database_dir creates the dir
# ---------------------------------------------------------------------------

def test_database_dir_creation():
    """_setup_database_dir creates the configured DB_DIR on disk."""
    d = tempfile.mkdtemp(prefix="folio-dbtest-")
    target = os.path.join(d, "sub", "databases")

    try:
        app = Flask(__name__)
        app.config["TESTING"] = True
        app.config["SECRET_KEY"] = "test-secret"
        app.config["DB_DIR"] = target

        Folio(app)

        assert os.path.isdir(target), f"DB_DIR was not created at {target}"
    finally:
        shutil.rmtree(d, ignore_errors=True)


# ---------------------------------------------------------------------------
# 6. Admin panel guard -- unauthenticated request redirects to sign in
# ---------------------------------------------------------------------------

def test_admin_panel_redirects_when_signed_out(client):
    """Unauthenticated GET to /admin/ should redirect to the sign-in page."""
    response = client.get("/admin/", follow_redirects=False)
    assert response.status_code == 302, (
        f"Expected 302 redirect, got {response.status_code}"
    )
    assert "/auth/sign-in" in response.headers.get("Location", "")


# ---------------------------------------------------------------------------
# 7. Template filters -- custom Jinja filters are registered
# ---------------------------------------------------------------------------

EXPECTED_TEMPLATE_FILTERS = [
    "format_bio",
    "date_range",
]


def test_template_filters_registered(app):
    """Filters defined in blueprints must be available on the app."""
    registered_filters = app.jinja_env.filters

    for name in EXPECTED_TEMPLATE_FILTERS:
        assert name in registered_filters, (
            f"Template filter '{name}' is not registered. "
            f"Check that the blueprint defining it is imported and registered."
        )
        assert callable(registered_filters[name])


# ---------------------------------------------------------------------------
# 8. Error shape -- every domain error is the same JSON envelope
# ---------------------------------------------------------------------------

def test_error_envelope(client):
    response = client.post("/api/achievements", json={"title": "x"})

    assert response.status_code == 401
    assert response.get_json() == {"success": False, "error": "Not authenticated"}


# ---------------------------------------------------------------------------
# 9. Pages render -- public page, sign-in page, admin panel
# ---------------------------------------------------------------------------

def test_public_page_without_profile(client):
    response = client.get("/")
    assert response.status_code == 200
    assert b"No profile data available yet" in response.data


def test_sign_in_page_first_time_setup_hint(client):
    response = client.get("/auth/sign-in")
    assert response.status_code == 200
    assert b"First time setup" in response.data


def test_sign_in_page_shows_admin_email(client, bound_admin):
    response = client.get("/auth/sign-in")
    assert response.status_code == 200
    assert b"Sign in with admin email: <strong>owner@example.com</strong>" in response.data


def test_admin_panel_renders_for_admin(admin_client):
    response = admin_client.get("/admin/")
    assert response.status_code == 200
    assert b"Save profile" in response.data


def test_cors_on_public_api(client):
    response = client.get("/api/portfolio", headers={"Origin": "https://elsewhere.example"})
    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == "*"


def test_cors_origins_restricted(tmp_db_dir):
    app = make_app(tmp_db_dir, CORS_ORIGINS="https://allowed.example")
    client = app.test_client()

    allowed = client.get("/api/portfolio", headers={"Origin": "https://allowed.example"})
    other = client.get("/api/portfolio", headers={"Origin": "https://other.example"})

    assert allowed.headers.get("Access-Control-Allow-Origin") == "https://allowed.example"
    assert "Access-Control-Allow-Origin" not in other.headers
