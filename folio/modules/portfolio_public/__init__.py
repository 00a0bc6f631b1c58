"""
Portfolio Public Module
=======================

The public read view: profile header, education, achievements and
certificates, as an HTML page and as JSON.
"""

from .routes import portfolio_public_bp

__all__ = ['portfolio_public_bp']
