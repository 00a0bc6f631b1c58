"""
Education Module
================

Education history: public listing (newest first) plus admin add/remove
with an optional attached document (diploma, transcript).
"""

from flask import Blueprint

education_bp = Blueprint('education', __name__, url_prefix='/api/education')

from . import routes

__all__ = ['education_bp']
