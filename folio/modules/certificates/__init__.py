"""
Certificates Module
===================

Certificates and licences: public listing plus admin add/remove, with an
optional link to the issuer's verification page and an attached copy.
"""

from flask import Blueprint

certificates_bp = Blueprint('certificates', __name__, url_prefix='/api/certificates')

from . import routes

__all__ = ['certificates_bp']
