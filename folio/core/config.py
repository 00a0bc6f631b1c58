import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for the Folio portfolio site.
    Host apps can override any of these through app.config or environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Database paths - use environment variables or fallback to DB_DIR
    PORTFOLIO_DB = os.getenv('PORTFOLIO_DB', os.path.join(DB_DIR, "portfolio.db"))
    LOGS_DB = os.getenv('LOGS_DB', os.path.join(DB_DIR, "app_logs.db"))

    # Table names
    ADMIN_SETTINGS_TABLE = "admin_settings"
    PROFILE_TABLE = "profile"
    EDUCATION_TABLE = "education"
    CERTIFICATES_TABLE = "certificates"
    ACHIEVEMENTS_TABLE = "achievements"
    LOGS_TABLE = "app_logs"

    # Object storage: 'local' keeps attachments under UPLOAD_FOLDER,
    # 'cloud' sends them to DigitalOcean Spaces
    STORAGE_TYPE = os.getenv('STORAGE_TYPE', 'local')
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join(os.getcwd(), 'uploads'))
    UPLOAD_URL_MAX_AGE = int(os.getenv('UPLOAD_URL_MAX_AGE', '3600'))
    MAX_UPLOAD_SIZE = int(os.getenv('MAX_UPLOAD_SIZE', str(10 * 1024 * 1024)))
    ALLOWED_UPLOAD_EXTENSIONS = {'pdf', 'png', 'jpg', 'jpeg', 'gif', 'webp', 'doc', 'docx'}

    DO_SPACES_REGION = os.getenv('DO_SPACES_REGION')
    DO_SPACES_NAME = os.getenv('DO_SPACES_NAME')
    DO_SPACES_KEY = os.getenv('DO_SPACES_KEY')
    DO_SPACES_SECRET = os.getenv('DO_SPACES_SECRET')
    SPACES_FOLDER = os.getenv('SPACES_FOLDER', 'portfolio')

    # OAuth settings
    GOOGLE_CLIENT_ID = os.getenv('GOOGLE_CLIENT_ID')
    GOOGLE_CLIENT_SECRET = os.getenv('GOOGLE_CLIENT_SECRET')

    # Site settings
    BRAND_NAME = os.getenv('BRAND_NAME', 'Portfolio')
    # Comma separated list of origins allowed to read the public JSON API
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Port for local server (optional, projects can set this)
    port = int(os.getenv('PORT', '5000'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
