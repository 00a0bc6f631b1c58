"""
Education Routes
================

Public listing ordered by start date, admin-only add/remove/upload.
"""

from flask import jsonify, request

from ...core import storage
from ...core.config import Config
from ...core.content import ContentCollection
from ..admin_auth.gate import admin_required
from . import education_bp

education_collection = ContentCollection(
    'education',
    Config.EDUCATION_TABLE,
    required=('school', 'degree', 'field', 'start_date', 'description', 'location'),
    optional=('end_date',),
    order_field='start_date',
)


@education_bp.route('', methods=['GET'])
def list_education():
    """Education entries, most recent first - public"""
    return jsonify(education_collection.list())


@education_bp.route('', methods=['POST'])
@admin_required
def add_education():
    item_id = education_collection.add(request.get_json(silent=True))
    return jsonify({'success': True, 'id': item_id}), 201


@education_bp.route('/<int:item_id>', methods=['DELETE'])
@admin_required
def remove_education(item_id):
    attachment_released = education_collection.remove(item_id)
    return jsonify({'success': True, 'attachment_released': attachment_released})


@education_bp.route('/upload-url', methods=['POST'])
@admin_required
def generate_upload_url():
    return jsonify(storage.generate_upload_url_for_request())
