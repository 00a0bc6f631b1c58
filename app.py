"""
Folio Portfolio Site
====================

A ready-to-run Flask application serving the portfolio and its admin panel.

Run with:
    python app.py

Visit:
    http://localhost:5000               - Public portfolio
    http://localhost:5000/auth/sign-in  - Admin sign in
    http://localhost:5000/admin         - Admin panel
"""

import os

from flask import Flask

from folio import Folio
from folio.core.config import Config

# ===== App Setup =====

app = Flask(__name__)
app.config['SECRET_KEY'] = Config.SECRET_KEY or 'dev-secret-key-change-in-production'

# Session security
app.config['SESSION_COOKIE_SECURE'] = os.getenv('FLASK_ENV') == 'production'
app.config['SESSION_COOKIE_HTTPONLY'] = True
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

folio = Folio(app)


# ===== Run =====

if __name__ == '__main__':
    print("\n" + "=" * 60)
    print(f"{app.config['BRAND_NAME']} - Folio")
    print("=" * 60)
    print(f"Portfolio:       http://localhost:{Config.port}")
    print(f"Admin Sign In:   http://localhost:{Config.port}/auth/sign-in")
    print(f"Admin Panel:     http://localhost:{Config.port}/admin")
    print(f"Storage:         {app.config['STORAGE_TYPE']}")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=os.getenv('FLASK_ENV') != 'production')
