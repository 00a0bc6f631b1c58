"""
Achievements Module
===================

Achievements and awards: public listing plus admin add/remove with an
optional attachment.
"""

from flask import Blueprint

achievements_bp = Blueprint('achievements', __name__, url_prefix='/api/achievements')

from . import routes

__all__ = ['achievements_bp']
