"""
Profile Module
==============

The portfolio owner's profile: a single record holding name, headline, bio,
contact details, social links and optional profile/banner images.
"""

from flask import Blueprint

profile_bp = Blueprint('profile', __name__, url_prefix='/api/profile')

from . import routes

__all__ = ['profile_bp']
