"""
Folio Modules
=============

Flask blueprint modules for the portfolio site and its admin panel.
"""

__all__ = ['achievements', 'admin_auth', 'auth', 'certificates', 'education',
           'portfolio_public', 'profile', 'storage']
