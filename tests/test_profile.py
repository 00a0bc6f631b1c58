"""
Profile singleton tests.
"""

import uuid
from unittest.mock import patch

import pytest

PROFILE = {
    "name": "Jane Doe",
    "title": "Software Engineer",
    "bio": "Builds things.\n\nLikes tea.",
    "email": "jane@example.com",
    "location": "Springfield",
    "links": [
        {"platform": "GitHub", "url": "https://github.com/janedoe"},
        {"platform": "LinkedIn", "url": "https://linkedin.com/in/janedoe"},
    ],
}


def test_profile_empty_by_default(client):
    response = client.get("/api/profile")

    assert response.status_code == 200
    assert response.get_json() is None


def test_save_requires_admin(client, bound_admin):
    assert client.put("/api/profile", json=PROFILE).status_code == 401
    assert client.get("/api/profile").get_json() is None


def test_save_and_read_profile(admin_client):
    response = admin_client.put("/api/profile", json=PROFILE)

    assert response.status_code == 200
    profile = response.get_json()["profile"]
    assert profile["name"] == "Jane Doe"
    assert profile["phone"] is None
    assert profile["links"] == PROFILE["links"]
    assert profile["profile_image_url"] is None

    assert admin_client.get("/api/profile").get_json()["email"] == "jane@example.com"


def test_save_replaces_whole_profile(admin_client):
    admin_client.put("/api/profile", json=dict(PROFILE, phone="555-0100"))
    admin_client.put("/api/profile", json=dict(PROFILE, title="Staff Engineer", links=[]))

    profile = admin_client.get("/api/profile").get_json()
    assert profile["title"] == "Staff Engineer"
    assert profile["phone"] is None
    assert profile["links"] == []
    assert profile["id"] == 1


def test_save_validates_fields(admin_client):
    response = admin_client.put("/api/profile", json=dict(PROFILE, bio=""))
    assert response.status_code == 400
    assert "bio" in response.get_json()["error"]

    response = admin_client.put("/api/profile", json=dict(PROFILE, links=[{"platform": "GitHub"}]))
    assert response.status_code == 400

    response = admin_client.put("/api/profile", json=dict(PROFILE, profile_image_id="not-an-id"))
    assert response.status_code == 400


@pytest.mark.parametrize("changes", [
    {"website": "javascript:alert(1)"},
    {"links": [{"platform": "GitHub", "url": "javascript:alert(1)"}]},
    {"links": [{"platform": "Mail", "url": "data:text/html,hi"}]},
])
def test_save_rejects_non_http_links(admin_client, changes):
    response = admin_client.put("/api/profile", json=dict(PROFILE, **changes))

    assert response.status_code == 400
    assert "http" in response.get_json()["error"]
    assert admin_client.get("/api/profile").get_json() is None


def test_save_accepts_http_links(admin_client):
    response = admin_client.put("/api/profile", json=dict(PROFILE, website="HTTPS://jane.example"))

    assert response.status_code == 200
    assert response.get_json()["profile"]["website"] == "HTTPS://jane.example"


def test_replacing_image_releases_old_one(admin_client):
    old_image = uuid.uuid4().hex
    new_image = uuid.uuid4().hex
    banner = uuid.uuid4().hex
    admin_client.put("/api/profile", json=dict(PROFILE, profile_image_id=old_image, banner_image_id=banner))

    with patch("folio.modules.profile.routes.release_attachment") as release:
        admin_client.put("/api/profile", json=dict(PROFILE, profile_image_id=new_image, banner_image_id=banner))

    release.assert_called_once_with(old_image, source="profile")


def test_clearing_image_releases_it(admin_client):
    banner = uuid.uuid4().hex
    admin_client.put("/api/profile", json=dict(PROFILE, banner_image_id=banner))

    with patch("folio.modules.profile.routes.release_attachment") as release:
        admin_client.put("/api/profile", json=PROFILE)

    release.assert_called_once_with(banner, source="profile")


def test_public_page_shows_profile(admin_client):
    admin_client.put("/api/profile", json=PROFILE)

    page = admin_client.get("/").data

    assert b"Jane Doe" in page
    assert b"<p>Builds things.</p><p>Likes tea.</p>" in page
    assert b"https://github.com/janedoe" in page
    assert b"No profile data available yet" not in page


def test_bio_is_escaped_on_public_page(admin_client):
    admin_client.put("/api/profile", json=dict(PROFILE, bio="<script>alert(1)</script>"))

    page = admin_client.get("/").data

    assert b"<script>alert(1)</script>" not in page
    assert b"&lt;script&gt;" in page
