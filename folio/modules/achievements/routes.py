from flask import jsonify, request

from ...core import storage
from ...core.config import Config
from ...core.content import ContentCollection
from ..admin_auth.gate import admin_required
from . import achievements_bp

achievements_collection = ContentCollection(
    'achievements',
    Config.ACHIEVEMENTS_TABLE,
    required=('title', 'date', 'description'),
    order_field='date',
)


@achievements_bp.route('', methods=['GET'])
def list_achievements():
    return jsonify(achievements_collection.list())


@achievements_bp.route('', methods=['POST'])
@admin_required
def add_achievement():
    item_id = achievements_collection.add(request.get_json(silent=True))
    return jsonify({'success': True, 'id': item_id}), 201


@achievements_bp.route('/<int:item_id>', methods=['DELETE'])
@admin_required
def remove_achievement(item_id):
    attachment_released = achievements_collection.remove(item_id)
    return jsonify({'success': True, 'attachment_released': attachment_released})


@achievements_bp.route('/upload-url', methods=['POST'])
@admin_required
def generate_upload_url():
    return jsonify(storage.generate_upload_url_for_request())
