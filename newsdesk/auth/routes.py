"""
Auth Routes

Dashboard sign-in using the credentials provider and Flask-Login.
"""

from flask import render_template, request, redirect, url_for, flash
from flask_login import logout_user, login_required, current_user
from newsdesk.auth import auth_bp
from newsdesk.auth.provider import authenticate


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Dashboard login route"""
    if current_user.is_authenticated:
        return redirect(url_for('dashboard.index'))

    error = None
    if request.method == 'POST':
        error = authenticate(request.form)
        if error is None:
            flash(f'Welcome back, {current_user.firstname}!', 'success')
            next_page = request.args.get('next')
            if next_page and next_page.startswith('/') and not next_page.startswith('//'):
                return redirect(next_page)
            return redirect(url_for('dashboard.index'))

    return render_template('auth/login.html', error=error,
                           email=request.form.get('email', ''))


@auth_bp.route('/logout')
@login_required
def logout():
    """Dashboard logout route"""
    logout_user()
    flash('You have been logged out successfully.', 'info')
    return redirect(url_for('auth.login'))
