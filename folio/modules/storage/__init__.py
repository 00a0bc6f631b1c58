"""
Storage Module
==============

HTTP endpoints of the local attachment store: the target of issued upload
URLs and the download route for stored files. Unused when STORAGE_TYPE is
'cloud' (clients talk to Spaces directly through presigned URLs).
"""

from flask import Blueprint

storage_bp = Blueprint('storage', __name__, url_prefix='/storage')

from . import routes

__all__ = ['storage_bp']
