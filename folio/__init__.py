"""
Folio - A single-admin portfolio site for Flask
===============================================

A public portfolio (profile, education, certificates, achievements) plus an
admin panel that only the one bound administrator can use:
- Admin authorization gate with one-time admin binding
- Google sign-in through Authlib
- Content CRUD with attachments in local storage or DigitalOcean Spaces
- Structured database-backed logging

Usage:
    from flask import Flask
    from folio import Folio

    app = Flask(__name__)
    Folio(app)
"""

import os
import sqlite3

from flask import jsonify
from flask_cors import CORS

from .core.config import Config
from .core.database import Database
from .core.exceptions import FolioError
from .core.logging_service import LoggingService

__version__ = '0.1.0'

# Room for multipart boundaries and headers around the largest allowed file
UPLOAD_BODY_OVERHEAD = 64 * 1024


class Folio:
    """Flask extension registering every portfolio module on an app"""

    DEFAULT_FEATURES = {
        'portfolio_public': True,
        'auth': True,
        'admin_auth': True,
        'profile': True,
        'education': True,
        'certificates': True,
        'achievements': True,
        'storage': True,
    }

    def __init__(self, app=None, config=None):
        self._config = dict(config or {})
        self._registered_modules = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self._setup_config(app)
        self._setup_database_dir(app)

        with app.app_context():
            Database.init_portfolio_db()

        from .modules.auth.utils import configure_oauth
        configure_oauth(app)

        self._register_blueprints(app)
        self._register_error_handlers(app)
        self._setup_cors(app)
        self._setup_context_processor(app)

        app.extensions['folio'] = self

    # ===== Setup =====

    def _setup_config(self, app):
        """Fill app.config gaps from Config. Values the host app set always win."""
        if app.config.get('DB_DIR') and not app.config.get('PORTFOLIO_DB'):
            app.config['PORTFOLIO_DB'] = os.path.join(app.config['DB_DIR'], 'portfolio.db')
        if app.config.get('DB_DIR') and not app.config.get('LOGS_DB'):
            app.config['LOGS_DB'] = os.path.join(app.config['DB_DIR'], 'app_logs.db')

        for key in dir(Config):
            if key.isupper() and app.config.get(key) is None:
                app.config[key] = getattr(Config, key)

        # Request body cap, a little above the largest allowed upload
        if app.config.get('MAX_CONTENT_LENGTH') is None:
            app.config['MAX_CONTENT_LENGTH'] = int(app.config['MAX_UPLOAD_SIZE']) + UPLOAD_BODY_OVERHEAD

        if self._config.get('brand_name'):
            app.config['BRAND_NAME'] = self._config['brand_name']

    def _setup_database_dir(self, app):
        db_dir = app.config.get('DB_DIR')
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    def _features(self):
        features = dict(self.DEFAULT_FEATURES)
        features.update(self._config.get('features', {}))
        return features

    def _register_blueprints(self, app):
        from .modules.achievements import achievements_bp
        from .modules.admin_auth import admin_auth_bp
        from .modules.auth import auth_bp
        from .modules.certificates import certificates_bp
        from .modules.education import education_bp
        from .modules.portfolio_public import portfolio_public_bp
        from .modules.profile import profile_bp
        from .modules.storage import storage_bp

        blueprints = {
            'portfolio_public': portfolio_public_bp,
            'auth': auth_bp,
            'admin_auth': admin_auth_bp,
            'profile': profile_bp,
            'education': education_bp,
            'certificates': certificates_bp,
            'achievements': achievements_bp,
            'storage': storage_bp,
        }

        for name, enabled in self._features().items():
            if enabled and name in blueprints:
                app.register_blueprint(blueprints[name])
                self._registered_modules.append(name)

    def _register_error_handlers(self, app):
        @app.errorhandler(FolioError)
        def handle_folio_error(error):
            return jsonify({'success': False, 'error': error.message}), error.status_code

        @app.errorhandler(sqlite3.Error)
        def handle_database_error(error):
            LoggingService.log_error_with_traceback('database', error)
            return jsonify({'success': False, 'error': 'Database error'}), 502

    def _setup_cors(self, app):
        """Let other origins read the public JSON API"""
        origins = app.config.get('CORS_ORIGINS') or '*'
        if isinstance(origins, str) and origins != '*':
            origins = [o.strip() for o in origins.split(',') if o.strip()]
        CORS(app, resources={r"/api/*": {
            "origins": origins,
            "methods": ["GET"],
            "send_wildcard": origins == '*',
        }})

    def _setup_context_processor(self, app):
        @app.context_processor
        def inject_folio_config():
            return {
                'folio_config': {
                    'features': self._features(),
                    'storage_type': app.config.get('STORAGE_TYPE'),
                },
                'brand_name': app.config.get('BRAND_NAME') or 'Portfolio',
            }

    def get_registered_modules(self):
        return list(self._registered_modules)


__all__ = ['Folio', '__version__']
