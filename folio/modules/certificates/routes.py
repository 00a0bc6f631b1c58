"""
Certificates Routes
===================
"""

from flask import jsonify, request

from ...core import storage
from ...core.config import Config
from ...core.content import ContentCollection
from ..admin_auth.gate import admin_required
from . import certificates_bp

certificates_collection = ContentCollection(
    'certificates',
    Config.CERTIFICATES_TABLE,
    required=('name', 'issuer', 'date', 'description'),
    optional=('url',),
    order_field='date',
    url_fields=('url',),
)


@certificates_bp.route('', methods=['GET'])
def list_certificates():
    return jsonify(certificates_collection.list())


@certificates_bp.route('', methods=['POST'])
@admin_required
def add_certificate():
    item_id = certificates_collection.add(request.get_json(silent=True))
    return jsonify({'success': True, 'id': item_id}), 201


@certificates_bp.route('/<int:item_id>', methods=['DELETE'])
@admin_required
def remove_certificate(item_id):
    attachment_released = certificates_collection.remove(item_id)
    return jsonify({'success': True, 'attachment_released': attachment_released})


@certificates_bp.route('/upload-url', methods=['POST'])
@admin_required
def generate_upload_url():
    return jsonify(storage.generate_upload_url_for_request())
