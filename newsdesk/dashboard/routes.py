"""
Dashboard Routes

The home overview plus list/create/edit/delete screens for each resource.
The four CRUD views are written once and registered per resource.
"""

import logging

from flask import abort, current_app, flash, redirect, render_template, request, url_for

from newsdesk.auth.decorators import admin_required
from newsdesk.dashboard import dashboard_bp
from newsdesk.dashboard.forms import form_values, submitted_values, validate_form
from newsdesk.dashboard.listing import Confirmation, ListingState, confirmation_from
from newsdesk.dashboard.resources import RESOURCES
from newsdesk.dashboard.services import apply_uploads, get_overview

logger = logging.getLogger(__name__)


@dashboard_bp.context_processor
def inject_resources():
    return dict(resources=RESOURCES)


@dashboard_bp.route('/')
def index():
    """Dashboard home with per-table counts"""
    overview = get_overview()
    if overview['error']:
        flash(overview['error'], 'danger')
    return render_template('dashboard/index.html', counts=overview['data'] or {})


def _listing_state(resource):
    return ListingState.from_args(
        request.args,
        default_sort=resource.default_sort,
        default_limit=current_app.config['DEFAULT_ITEMS_PER_PAGE'],
        limit_options=current_app.config['ITEMS_PER_PAGE_OPTIONS'],
    )


def _get_or_404(resource, id):
    found = resource.get(id)
    if found['error']:
        flash(found['error'], 'danger')
        return None
    if found['data'] is None:
        abort(404)
    return found['data']


def _render_form(resource, values, errors, item=None, status=200):
    return render_template(
        'dashboard/form.html', resource=resource, item=item, values=values,
        errors=errors, back_args=_listing_state(resource).to_args()), status


def list_view(resource):
    state = _listing_state(resource)
    result = resource.fetch(state)
    if result['error']:
        flash(result['error'], 'danger')
    return render_template(
        'dashboard/list.html', resource=resource, state=state,
        rows=result['data'] or [], total_count=result.get('total_count', 0),
        total_pages=result.get('total_pages', 0), start=result.get('start', 0),
        end=result.get('end', 0),
        limit_options=current_app.config['ITEMS_PER_PAGE_OPTIONS'],
        debounce_ms=current_app.config['SEARCH_DEBOUNCE_MS'])


def create_view(resource):
    if request.method == 'GET':
        return _render_form(resource, form_values(resource.fields, None), {})

    data, errors = validate_form(resource.fields, request.form, request.files)
    if resource.check:
        resource.check(data, errors)
    if errors:
        return _render_form(resource, submitted_values(resource.fields, request.form), errors,
                            status=400)

    upload_error = apply_uploads(resource.fields, request.files, data)
    if upload_error:
        flash(upload_error, 'danger')
        return _render_form(resource, submitted_values(resource.fields, request.form), {},
                            status=400)

    created = resource.create(data)
    if created['error']:
        flash(created['error'], 'danger')
        return _render_form(resource, submitted_values(resource.fields, request.form), {},
                            status=400)

    flash(f'{resource.label} created successfully', 'success')
    return redirect(url_for(f'dashboard.{resource.name}_list', **_listing_state(resource).to_args()))


def _changed(resource, item, data):
    current = form_values(resource.fields, item)
    proposed = form_values(resource.fields, data)
    if data.get('password'):
        return True
    return any(current.get(name) != value for name, value in proposed.items() if name in data)


def edit_view(resource, id):
    item = _get_or_404(resource, id)
    if item is None:
        return redirect(url_for(f'dashboard.{resource.name}_list'))

    if request.method == 'GET':
        return _render_form(resource, form_values(resource.fields, item), {}, item=item)

    data, errors = validate_form(resource.fields, request.form, request.files, editing=True)
    if resource.check:
        resource.check(data, errors, id)
    if errors:
        return _render_form(resource, submitted_values(resource.fields, request.form), errors,
                            item=item, status=400)

    upload_error = apply_uploads(resource.fields, request.files, data)
    if upload_error:
        flash(upload_error, 'danger')
        return _render_form(resource, submitted_values(resource.fields, request.form), {},
                            item=item, status=400)

    back = url_for(f'dashboard.{resource.name}_list', **_listing_state(resource).to_args())
    if not _changed(resource, item, data):
        flash('No changes to update', 'info')
        return redirect(back)

    updated = resource.update(id, data)
    if updated['error']:
        flash(updated['error'], 'danger')
        return _render_form(resource, submitted_values(resource.fields, request.form), {},
                            item=item, status=400)

    flash(f'{resource.label} updated successfully', 'success')
    return redirect(back)


def delete_view(resource, id):
    """GET shows the confirmation; POST resolves it and deletes on confirm."""
    state = _listing_state(resource)
    back = url_for(f'dashboard.{resource.name}_list', **state.to_args())
    item = _get_or_404(resource, id)
    if item is None:
        return redirect(back)

    if request.method == 'GET':
        return render_template('dashboard/confirm_delete.html', resource=resource, item=item,
                               state=state)

    if confirmation_from(request.form) is Confirmation.CANCELLED:
        flash('Delete cancelled', 'info')
        return redirect(back)

    if resource.before_delete:
        refusal = resource.before_delete(item)
        if refusal:
            flash(refusal, 'danger')
            return redirect(back)

    deleted = resource.delete(id)
    if deleted['error']:
        flash(deleted['error'], 'danger')
        return redirect(back)

    logger.info('%s %s deleted', resource.label, id)
    flash(f'{resource.label} deleted successfully', 'success')

    remaining = resource.fetch(state)
    if not remaining['error']:
        state = state.after_delete(len(remaining['data']))
    return redirect(url_for(f'dashboard.{resource.name}_list', **state.to_args()))


def _register(resource):
    def bind(view):
        def endpoint(**kwargs):
            return view(resource, **kwargs)
        if resource.admin_only:
            endpoint = admin_required(endpoint)
        return endpoint

    prefix = f'/{resource.name}'
    dashboard_bp.add_url_rule(prefix, f'{resource.name}_list', bind(list_view))
    dashboard_bp.add_url_rule(f'{prefix}/create', f'{resource.name}_create', bind(create_view),
                              methods=['GET', 'POST'])
    dashboard_bp.add_url_rule(f'{prefix}/<int:id>/edit', f'{resource.name}_edit',
                              bind(edit_view), methods=['GET', 'POST'])
    dashboard_bp.add_url_rule(f'{prefix}/<int:id>/delete', f'{resource.name}_delete',
                              bind(delete_view), methods=['GET', 'POST'])


for _resource in RESOURCES:
    _register(_resource)
