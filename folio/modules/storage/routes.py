import io
import mimetypes

from flask import abort, jsonify, request, send_file
from werkzeug.datastructures import FileStorage

from ...core import storage
from . import storage_bp


def _incoming_file():
    """The uploaded file, from a multipart 'file' field or a raw request body"""
    uploaded = request.files.get('file')
    if uploaded is not None:
        return uploaded

    body = request.get_data()
    if not body:
        return None

    content_type = (request.content_type or '').split(';')[0].strip()
    filename = request.headers.get('X-Filename')
    if not filename:
        ext = mimetypes.guess_extension(content_type) if content_type else None
        filename = f"upload{ext}" if ext else 'upload'

    return FileStorage(stream=io.BytesIO(body), filename=filename, content_type=content_type)


@storage_bp.route('/upload/<token>', methods=['POST', 'PUT'])
def upload(token):
    """Receive one file for an issued upload URL"""
    storage_id = storage.save_upload(token, _incoming_file())
    return jsonify({'storage_id': storage_id}), 201


@storage_bp.route('/<storage_id>', methods=['GET'])
def serve(storage_id):
    """Download a stored attachment"""
    filepath = storage.local_file_path(storage_id)
    if filepath is None:
        abort(404)
    return send_file(filepath)
