"""
Storage Utility
===============

Attachment object store with cloud (DigitalOcean Spaces) / local branching.

Attachments are addressed by an opaque storage id. Clients never send file
bytes through the content APIs: they ask for a short-lived upload URL, upload
the file there, and then reference the returned storage id on the record.
"""

import mimetypes
import os
import re
import uuid

from flask import request, url_for
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from .config import get_config_value
from .exceptions import UpstreamFailure, ValidationError
from .logging_service import LoggingService

_STORAGE_ID_RE = re.compile(r'^[0-9a-f]{32}$')
_UPLOAD_SALT = 'folio-attachment-upload'
# Markers for storage ids whose upload URL has been used
_CLAIMS_DIR = '.claims'


def is_cloud_storage():
    """Check if using cloud storage"""
    return get_config_value('STORAGE_TYPE', 'local') == 'cloud'


def get_do_spaces_config():
    """Get DigitalOcean Spaces configuration"""
    return {
        'region': get_config_value('DO_SPACES_REGION'),
        'space_name': get_config_value('DO_SPACES_NAME'),
        'access_key': get_config_value('DO_SPACES_KEY'),
        'secret_key': get_config_value('DO_SPACES_SECRET'),
    }


def is_valid_storage_id(storage_id):
    return isinstance(storage_id, str) and bool(_STORAGE_ID_RE.match(storage_id))


def check_upload_filename(filename):
    """Return the lowercased extension of an acceptable upload filename"""
    if not isinstance(filename, str) or not filename.strip():
        raise ValidationError('No file provided')

    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
    allowed = get_config_value('ALLOWED_UPLOAD_EXTENSIONS', set())
    if ext not in allowed:
        raise ValidationError(f'File type not allowed: .{ext}' if ext else 'File type not allowed')
    return ext


def generate_upload_url(filename=None):
    """Issue a short-lived URL the client uploads one file to.

    Local URLs are single-use and checked on arrival. Spaces URLs are
    presigned POST policies that carry the size limit and the content type,
    so cloud mode needs the name of the file up front.

    Returns:
        {'upload_url': str, 'storage_id': str}, plus 'upload_fields' (form
        fields to send with the file) in cloud mode.
    """
    storage_id = uuid.uuid4().hex
    result = {'storage_id': storage_id}

    if is_cloud_storage():
        post = _presigned_spaces_post(storage_id, check_upload_filename(filename))
        result['upload_url'] = post['url']
        result['upload_fields'] = post['fields']
    else:
        if filename is not None:
            check_upload_filename(filename)
        token = _serializer().dumps({'sid': storage_id})
        result['upload_url'] = url_for('storage.upload', token=token, _external=True)

    LoggingService.debug('storage', 'Upload URL issued', {'storage_id': storage_id})
    return result


def generate_upload_url_for_request():
    """generate_upload_url for the file named in the request body, if any"""
    data = request.get_json(silent=True)
    filename = data.get('filename') if isinstance(data, dict) else None
    if filename is not None and not isinstance(filename, str):
        raise ValidationError("Field 'filename' must be a string")
    return generate_upload_url(filename)


def get_url(storage_id):
    """Return a download URL for an attachment, or None if it does not exist"""
    if not is_valid_storage_id(storage_id):
        return None
    if is_cloud_storage():
        if not _spaces_object_exists(storage_id):
            return None
        return _presigned_spaces_url('get_object', storage_id)
    if _find_local_file(storage_id) is None:
        return None
    return url_for('storage.serve', storage_id=storage_id)


def delete_file(storage_id):
    """Delete an attachment.

    Returns True when something was deleted, False when the attachment was
    already absent. Raises UpstreamFailure when the store call itself fails.
    """
    if not is_valid_storage_id(storage_id):
        return False
    if is_cloud_storage():
        return _delete_spaces_object(storage_id)
    return _delete_local_file(storage_id)


# ===== Local backend =====

def _serializer():
    secret = get_config_value('SECRET_KEY')
    if not secret:
        raise UpstreamFailure('SECRET_KEY is required to sign upload URLs')
    return URLSafeTimedSerializer(secret, salt=_UPLOAD_SALT)


def _upload_folder():
    folder = get_config_value('UPLOAD_FOLDER', 'uploads')
    os.makedirs(folder, exist_ok=True)
    return folder


def _find_local_file(storage_id):
    folder = get_config_value('UPLOAD_FOLDER', 'uploads')
    if not os.path.isdir(folder):
        return None
    for filename in os.listdir(folder):
        if filename == storage_id or filename.startswith(f"{storage_id}."):
            return os.path.join(folder, filename)
    return None


def _claim_storage_id(storage_id):
    """Mark a storage id as used. Exactly one caller can claim an id."""
    claims = os.path.join(_upload_folder(), _CLAIMS_DIR)
    os.makedirs(claims, exist_ok=True)
    try:
        fd = os.open(os.path.join(claims, storage_id), os.O_CREAT | os.O_EXCL | os.O_WRONLY)
    except FileExistsError:
        raise ValidationError('Upload URL has already been used')
    except OSError as e:
        raise UpstreamFailure(f'Could not store upload: {e}')
    os.close(fd)


def resolve_upload_token(token):
    """Turn an upload token back into its storage id, enforcing expiry"""
    max_age = int(get_config_value('UPLOAD_URL_MAX_AGE', 3600))
    try:
        data = _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        raise ValidationError('Upload URL has expired')
    except BadSignature:
        raise ValidationError('Upload URL is invalid')

    storage_id = data.get('sid') if isinstance(data, dict) else None
    if not is_valid_storage_id(storage_id):
        raise ValidationError('Upload URL is invalid')
    return storage_id


def save_upload(token, file_storage):
    """Store an uploaded file under the storage id encoded in the token.

    Args:
        token: Token from the upload URL.
        file_storage: werkzeug FileStorage from request.files.

    Returns:
        The storage id.
    """
    storage_id = resolve_upload_token(token)

    if file_storage is None or not file_storage.filename:
        raise ValidationError('No file provided')

    filename = file_storage.filename
    ext = check_upload_filename(filename)

    file_bytes = file_storage.read()
    max_size = int(get_config_value('MAX_UPLOAD_SIZE', 10 * 1024 * 1024))
    if len(file_bytes) > max_size:
        raise ValidationError('File is too large')

    # One claim per storage id, whatever the extension
    _claim_storage_id(storage_id)

    filepath = os.path.join(_upload_folder(), f"{storage_id}.{ext}")
    try:
        with open(filepath, 'xb') as f:
            f.write(file_bytes)
    except FileExistsError:
        raise ValidationError('Upload URL has already been used')
    except OSError as e:
        raise UpstreamFailure(f'Could not store upload: {e}')

    LoggingService.info('storage', 'Attachment uploaded', {
        'storage_id': storage_id,
        'original_filename': filename,
        'size': len(file_bytes),
    })
    return storage_id


def local_file_path(storage_id):
    """Absolute path of a stored attachment, or None"""
    if not is_valid_storage_id(storage_id):
        return None
    return _find_local_file(storage_id)


def _delete_local_file(storage_id):
    filepath = _find_local_file(storage_id)
    if filepath is None:
        return False
    try:
        os.unlink(filepath)
    except FileNotFoundError:
        return False
    except OSError as e:
        raise UpstreamFailure(f'Could not delete attachment: {e}')
    return True


# ===== DigitalOcean Spaces backend =====

def _spaces_client():
    import boto3
    config = get_do_spaces_config()
    region = config['region']
    return boto3.client(
        's3',
        region_name=region,
        endpoint_url=f"https://{region}.digitaloceanspaces.com",
        aws_access_key_id=config['access_key'],
        aws_secret_access_key=config['secret_key'],
    )


def _object_key(storage_id):
    app_prefix = get_config_value('SPACES_FOLDER', 'portfolio')
    return f"{app_prefix}/attachments/{storage_id}"


def _presigned_spaces_url(operation, storage_id):
    from botocore.exceptions import BotoCoreError, ClientError

    max_age = int(get_config_value('UPLOAD_URL_MAX_AGE', 3600))
    try:
        return _spaces_client().generate_presigned_url(
            operation,
            Params={
                'Bucket': get_do_spaces_config()['space_name'],
                'Key': _object_key(storage_id),
            },
            ExpiresIn=max_age,
        )
    except (BotoCoreError, ClientError) as e:
        raise UpstreamFailure(f'Object store error: {e}')


def _presigned_spaces_post(storage_id, ext):
    from botocore.exceptions import BotoCoreError, ClientError

    content_type = mimetypes.guess_type(f"upload.{ext}")[0] or 'application/octet-stream'
    max_size = int(get_config_value('MAX_UPLOAD_SIZE', 10 * 1024 * 1024))
    max_age = int(get_config_value('UPLOAD_URL_MAX_AGE', 3600))
    try:
        return _spaces_client().generate_presigned_post(
            Bucket=get_do_spaces_config()['space_name'],
            Key=_object_key(storage_id),
            Fields={'Content-Type': content_type},
            Conditions=[
                {'Content-Type': content_type},
                ['content-length-range', 1, max_size],
            ],
            ExpiresIn=max_age,
        )
    except (BotoCoreError, ClientError) as e:
        raise UpstreamFailure(f'Object store error: {e}')


def _spaces_object_exists(storage_id):
    from botocore.exceptions import BotoCoreError, ClientError

    try:
        _spaces_client().head_object(
            Bucket=get_do_spaces_config()['space_name'],
            Key=_object_key(storage_id),
        )
        return True
    except ClientError as e:
        code = str(e.response.get('Error', {}).get('Code', ''))
        if code in ('404', 'NoSuchKey', 'NotFound'):
            return False
        raise UpstreamFailure(f'Object store error: {e}')
    except BotoCoreError as e:
        raise UpstreamFailure(f'Object store error: {e}')


def _delete_spaces_object(storage_id):
    from botocore.exceptions import BotoCoreError, ClientError

    if not _spaces_object_exists(storage_id):
        return False
    try:
        _spaces_client().delete_object(
            Bucket=get_do_spaces_config()['space_name'],
            Key=_object_key(storage_id),
        )
    except (BotoCoreError, ClientError) as e:
        raise UpstreamFailure(f'Object store error: {e}')
    return True
