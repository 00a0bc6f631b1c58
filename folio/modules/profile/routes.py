"""
Profile Routes
==============

The profile is a singleton: saving inserts it the first time and replaces it
afterwards. Image fields hold attachment ids; replacing or clearing one
releases the old attachment.
"""

import sqlite3

from flask import jsonify, request

from ...core import storage
from ...core.config import Config
from ...core.content import check_http_url, clean_attachment_id, clean_fields, release_attachment
from ...core.database import Database
from ...core.exceptions import ValidationError
from ...core.logging_service import LoggingService
from ..admin_auth.gate import admin_required
from . import profile_bp

PROFILE_TABLE = Config.PROFILE_TABLE
_PROFILE_ID = 1

REQUIRED_FIELDS = ('name', 'title', 'bio', 'email')
OPTIONAL_FIELDS = ('phone', 'location', 'website')
IMAGE_FIELDS = ('profile_image_id', 'banner_image_id')


def _clean_links(links):
    """Validate the list of {platform, url} social links"""
    if links is None:
        return []
    if not isinstance(links, list):
        raise ValidationError("Field 'links' must be a list")

    cleaned = []
    for link in links:
        if not isinstance(link, dict):
            raise ValidationError('Each link must be an object with platform and url')
        platform = link.get('platform')
        url = link.get('url')
        if not isinstance(platform, str) or not platform.strip() \
                or not isinstance(url, str) or not url.strip():
            raise ValidationError('Each link needs a platform and a url')
        cleaned.append({'platform': platform.strip(), 'url': check_http_url(url.strip(), 'links.url')})
    return cleaned


def get_profile():
    """The profile with resolved image URLs, or None if not created yet"""
    profile = Database.get(PROFILE_TABLE, _PROFILE_ID)
    if profile is None:
        return None

    for field in IMAGE_FIELDS:
        url_field = field.replace('_id', '_url')
        attachment_id = profile.get(field)
        profile[url_field] = storage.get_url(attachment_id) if attachment_id else None
    return profile


def save_profile(data):
    """Insert or replace the profile. Returns the saved record."""
    fields = clean_fields(data, REQUIRED_FIELDS, OPTIONAL_FIELDS)
    check_http_url(fields['website'], 'website')
    for field in IMAGE_FIELDS:
        fields[field] = clean_attachment_id(data.get(field), field)
    fields['links'] = _clean_links(data.get('links'))

    existing = Database.get(PROFILE_TABLE, _PROFILE_ID)
    if existing is None:
        try:
            Database.insert(PROFILE_TABLE, {'id': _PROFILE_ID, **fields})
        except sqlite3.IntegrityError:
            # Another save created it first
            existing = Database.get(PROFILE_TABLE, _PROFILE_ID)
            Database.patch(PROFILE_TABLE, _PROFILE_ID, fields, touch=True)
    else:
        Database.patch(PROFILE_TABLE, _PROFILE_ID, fields, touch=True)

    if existing:
        for field in IMAGE_FIELDS:
            old_id = existing.get(field)
            if old_id and old_id != fields[field]:
                release_attachment(old_id, source='profile')

    LoggingService.info('content', 'profile saved', {'created': existing is None})
    return get_profile()


# ===== Routes =====

@profile_bp.route('', methods=['GET'])
def get_profile_api():
    """The public profile, or null when the admin has not created one"""
    return jsonify(get_profile())


@profile_bp.route('', methods=['PUT', 'POST'])
@admin_required
def save_profile_api():
    profile = save_profile(request.get_json(silent=True))
    return jsonify({'success': True, 'profile': profile})


@profile_bp.route('/upload-url', methods=['POST'])
@admin_required
def generate_upload_url():
    return jsonify(storage.generate_upload_url_for_request())
