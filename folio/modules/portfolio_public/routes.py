"""
Portfolio Public Routes
=======================

Public-facing portfolio page and API.
"""

from flask import Blueprint, jsonify, render_template
import re

portfolio_public_bp = Blueprint('portfolio_public', __name__, template_folder='templates')


def format_bio(content):
    """Convert blank-line separated text into paragraphs and single newlines into <br>"""
    if not content:
        return ""

    content = re.sub(r'\n\s*\n', '</p><p>', content)
    content = re.sub(r'\n', '<br>', content)
    content = f'<p>{content}</p>'
    content = re.sub(r'<p>\s*</p>', '', content)
    return content


@portfolio_public_bp.app_template_filter('format_bio')
def format_bio_filter(content):
    from markupsafe import Markup, escape
    return Markup(format_bio(str(escape(content or ''))))


@portfolio_public_bp.app_template_filter('date_range')
def date_range_filter(start, end=None):
    """'2019 - 2023', or '2021 - Present' for ongoing entries"""
    return f"{start} - {end or 'Present'}"


def get_portfolio():
    """Everything the public page shows, in one dict"""
    from folio.modules.admin_auth.gate import get_admin_email, is_setup
    from folio.modules.profile.routes import get_profile
    from folio.modules.education.routes import education_collection
    from folio.modules.certificates.routes import certificates_collection
    from folio.modules.achievements.routes import achievements_collection

    return {
        'profile': get_profile(),
        'education': education_collection.list(),
        'certificates': certificates_collection.list(),
        'achievements': achievements_collection.list(),
        'is_admin_setup': is_setup(),
        'admin_email': get_admin_email(),
    }


# ===== Routes =====

@portfolio_public_bp.route('/')
def home():
    """Public portfolio page"""
    return render_template('portfolio_public/index.html', **get_portfolio())


@portfolio_public_bp.route('/api/portfolio', methods=['GET'])
def portfolio_api():
    """Whole portfolio as JSON - public endpoint."""
    data = get_portfolio()
    data.pop('is_admin_setup')
    data.pop('admin_email')
    return jsonify(data)
