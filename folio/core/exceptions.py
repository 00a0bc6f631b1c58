"""
Custom exceptions for the Folio portfolio site.

Every exception carries the HTTP status the app's error handler answers with.
"""


class FolioError(Exception):
    """Base Folio exception"""
    status_code = 500

    def __init__(self, message="An error occurred"):
        self.message = message
        super().__init__(self.message)


class ValidationError(FolioError):
    """Raised when request data fails validation"""
    status_code = 400


class Unauthenticated(FolioError):
    """Raised when the caller has no resolvable identity"""
    status_code = 401

    def __init__(self, message="Not authenticated"):
        super().__init__(message)


class PermissionDenied(FolioError):
    """Raised when an authenticated caller is not the site admin"""
    status_code = 403

    def __init__(self, message="Admin access required"):
        super().__init__(message)


class NotFound(FolioError):
    """Raised when a record id does not exist"""
    status_code = 404


class AlreadyConfigured(FolioError):
    """Raised when the admin binding already exists"""
    status_code = 409

    def __init__(self, message="Admin account already exists"):
        super().__init__(message)


class UpstreamFailure(FolioError):
    """Raised when the document store or object store call fails"""
    status_code = 502
