"""
Admin Auth Routes
=================

Status queries, the one-time admin setup, and the admin panel.
"""

from flask import flash, jsonify, redirect, render_template, request, url_for

from ...core.exceptions import FolioError, PermissionDenied, Unauthenticated, ValidationError
from ..auth.utils import resolve_caller_identity
from . import admin_auth_bp
from .gate import get_admin_email, is_setup, setup_admin, validate_admin_access


def _setup_for_caller(email):
    """Bind the admin, insisting the signed-in caller is binding their own email"""
    identity = resolve_caller_identity()
    if identity is None:
        raise Unauthenticated()

    if email is not None and not isinstance(email, str):
        raise ValidationError("Field 'email' must be a string")

    email = (email or identity.email).strip()
    if email != identity.email:
        raise PermissionDenied('You can only bind the account you are signed in with')

    return setup_admin(email)


# ===== API Routes =====

@admin_auth_bp.route('/api/setup-status', methods=['GET'])
def api_setup_status():
    """Whether an admin has been bound - public, drives first-run UI"""
    return jsonify({'is_setup': is_setup()})


@admin_auth_bp.route('/api/admin-email', methods=['GET'])
def api_admin_email():
    """The bound admin email - public, shown as a sign-in hint"""
    return jsonify({'admin_email': get_admin_email()})


@admin_auth_bp.route('/api/setup', methods=['POST'])
def api_setup():
    """Bind the admin email (once)"""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    settings = _setup_for_caller(data.get('email'))
    return jsonify({'success': True, **settings}), 201


@admin_auth_bp.route('/api/validate', methods=['GET'])
def api_validate():
    """Whether the current caller is the admin"""
    return jsonify({'is_admin': validate_admin_access(resolve_caller_identity())})


# ===== Pages =====

@admin_auth_bp.route('/setup', methods=['GET', 'POST'])
def setup_page():
    """First time setup - bind the signed-in account as admin"""
    identity = resolve_caller_identity()
    if identity is None:
        return redirect(url_for('auth.signin'))

    if is_setup():
        return redirect(url_for('admin_auth.admin_panel'))

    if request.method == 'POST':
        try:
            _setup_for_caller(request.form.get('email'))
        except FolioError as e:
            flash(e.message, 'error')
            return render_template('admin_auth/setup.html', identity=identity)

        flash('Admin account created', 'success')
        return redirect(url_for('admin_auth.admin_panel'))

    return render_template('admin_auth/setup.html', identity=identity)


@admin_auth_bp.route('/')
@admin_auth_bp.route('/panel')
def admin_panel():
    """Admin panel - profile, education, certificates, achievements"""
    identity = resolve_caller_identity()
    if identity is None:
        return redirect(url_for('auth.signin', next=request.path))

    if not validate_admin_access(identity):
        return render_template('admin_auth/access_denied.html', identity=identity), 403

    from folio.modules.profile.routes import get_profile
    from folio.modules.education.routes import education_collection
    from folio.modules.certificates.routes import certificates_collection
    from folio.modules.achievements.routes import achievements_collection

    return render_template(
        'admin_auth/panel.html',
        identity=identity,
        profile=get_profile(),
        education=education_collection.list(),
        certificates=certificates_collection.list(),
        achievements=achievements_collection.list(),
    )
