"""
Content Collections
===================

Shared list/add/remove behaviour for the portfolio's dated collections
(education, certificates, achievements). Each module declares its table,
fields and date field; the collection handles validation, attachment URL
resolution and attachment release on delete.
"""

from . import storage
from .database import Database
from .exceptions import NotFound, UpstreamFailure, ValidationError
from .logging_service import LoggingService


def clean_fields(data, required, optional=()):
    """Pick the known fields out of request data.

    Required fields must be non-empty strings. Optional fields become None
    when blank. Unknown keys are dropped.
    """
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    fields = {}
    missing = []
    for name in required:
        value = data.get(name)
        if not isinstance(value, str) or not value.strip():
            missing.append(name)
            continue
        fields[name] = value.strip()

    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    for name in optional:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            fields[name] = None
        elif not isinstance(value, str):
            raise ValidationError(f"Field '{name}' must be a string")
        else:
            fields[name] = value.strip()

    return fields


def check_http_url(value, field):
    """Reject link values that are not http(s) URLs. They are rendered as hrefs."""
    if value and not value.lower().startswith(('http://', 'https://')):
        raise ValidationError(f"Field '{field}' must start with http:// or https://")
    return value


def clean_attachment_id(value, field='attachment_id'):
    """Validate an optional attachment reference"""
    if value in (None, ''):
        return None
    if not storage.is_valid_storage_id(value):
        raise ValidationError(f"Field '{field}' is not a valid attachment id")
    return value


class ContentCollection:
    """One dated, admin-owned collection of portfolio items"""

    def __init__(self, name, table, required, optional=(), order_field='date', url_fields=()):
        self.name = name
        self.table = table
        self.required = tuple(required)
        self.optional = tuple(optional)
        self.order_field = order_field
        self.url_fields = tuple(url_fields)

    def list(self):
        """All items newest first, each with its resolved attachment_url"""
        items = Database.list_by(self.table, self.order_field, descending=True)
        for item in items:
            attachment_id = item.get('attachment_id')
            item['attachment_url'] = storage.get_url(attachment_id) if attachment_id else None
        return items

    def get(self, item_id):
        item = Database.get(self.table, item_id)
        if item is None:
            raise NotFound(f"{self.name.capitalize()} item {item_id} not found")
        return item

    def add(self, data):
        """Validate and insert an item. Returns the new id."""
        fields = clean_fields(data, self.required, self.optional)
        for field in self.url_fields:
            check_http_url(fields.get(field), field)
        fields['attachment_id'] = clean_attachment_id(data.get('attachment_id'))

        item_id = Database.insert(self.table, fields)
        LoggingService.info('content', f"{self.name} item added", {
            'id': item_id,
            'has_attachment': fields['attachment_id'] is not None,
        })
        return item_id

    def remove(self, item_id):
        """Delete an item and release its attachment.

        The record goes first: if the attachment delete then fails, the worst
        case is an orphaned blob rather than a record pointing at nothing.

        Returns True when the attachment (if any) was released cleanly.
        """
        item = self.get(item_id)

        if not Database.delete(self.table, item_id):
            # Removed by a concurrent call between get and delete
            raise NotFound(f"{self.name.capitalize()} item {item_id} not found")

        attachment_released = True
        attachment_id = item.get('attachment_id')
        if attachment_id:
            attachment_released = release_attachment(attachment_id, source=self.name)

        LoggingService.info('content', f"{self.name} item removed", {
            'id': item_id,
            'attachment_id': attachment_id,
        })
        return attachment_released


def release_attachment(attachment_id, source='content'):
    """Delete an attachment that a record no longer references.

    An already-absent attachment counts as released. Store failures are
    logged and reported as False so the caller can surface them.
    """
    try:
        storage.delete_file(attachment_id)
        return True
    except UpstreamFailure as e:
        LoggingService.log_error_with_traceback('storage', e, {
            'attachment_id': attachment_id,
            'source': source,
        })
        return False
