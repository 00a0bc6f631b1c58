"""
Folio Core
==========

Core utilities and shared functionality for Folio modules.
"""

from .config import Config, get_config_value
from .database import Database
from .logging_service import LoggingService

__all__ = ['Config', 'get_config_value', 'Database', 'LoggingService']
