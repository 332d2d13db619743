"""
Dashboard Forms

Field tables for the entity forms plus a single validator. Validation
returns parsed values and a ``{field: message}`` dict; the templates show
each message next to its input and nothing is written while any remain.
"""

import re
from datetime import date, datetime

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
COLOR_RE = re.compile(r'^#[0-9a-fA-F]{6}$')


class Field:
    """One form input.

    ``type`` is one of text, textarea, email, password, color, url, date,
    datetime, checkbox, select, multiselect or file. ``choices`` is a
    callable returning ``[(value, label), ...]`` for select inputs. A file
    field uploads media of kind ``upload`` and writes the resulting URL
    into the field named by ``target``.
    """

    def __init__(self, name, label, type='text', required=False, choices=None,
                 default=None, upload=None, target=None, placeholder=None):
        self.name = name
        self.label = label
        self.type = type
        self.required = required
        self.choices = choices
        self.default = default
        self.upload = upload
        self.target = target
        self.placeholder = placeholder

    def options(self):
        return list(self.choices()) if self.choices else []


def _parse(field, raw):
    """Return ``(value, error)`` for a non-empty raw string."""
    if field.type == 'select':
        valid = {str(value): value for value, _ in field.options()}
        if raw not in valid:
            return None, f'Please select a valid {field.label.lower()}.'
        return valid[raw], None
    if field.type == 'email':
        if not EMAIL_RE.match(raw):
            return None, 'Please provide a valid email address.'
        return raw.lower(), None
    if field.type == 'color':
        if not COLOR_RE.match(raw):
            return None, 'Color must be a hex value like #ff0000.'
        return raw.lower(), None
    if field.type == 'url':
        if not raw.startswith(('http://', 'https://')):
            return None, f'{field.label} must start with http:// or https://.'
        return raw, None
    if field.type == 'date':
        try:
            return date.fromisoformat(raw), None
        except ValueError:
            return None, f'{field.label} must be a date (YYYY-MM-DD).'
    if field.type == 'datetime':
        try:
            return datetime.fromisoformat(raw), None
        except ValueError:
            return None, f'{field.label} must be a date and time.'
    return raw, None


def validate_form(fields, form, files=None, editing=False):
    """Parse and check submitted values against ``fields``.

    Passwords left blank while editing are omitted so the stored hash is
    kept. A required field that a file field targets is satisfied by an
    uploaded file.
    """
    data = {}
    errors = {}
    files = files or {}

    uploads = {field.target for field in fields
               if field.type == 'file' and files.get(field.name)
               and getattr(files.get(field.name), 'filename', None)}

    for field in fields:
        if field.type == 'file':
            continue
        if field.type == 'checkbox':
            data[field.name] = field.name in form
            continue
        if field.type == 'multiselect':
            valid = {str(value): value for value, _ in field.options()}
            picked = form.getlist(field.name) if hasattr(form, 'getlist') else form.get(field.name, [])
            unknown = [value for value in picked if value not in valid]
            if unknown:
                errors[field.name] = f'Unknown {field.label.lower()}: {", ".join(unknown)}.'
            data[field.name] = [valid[value] for value in picked if value in valid]
            continue

        raw = form.get(field.name) or ''
        if field.type != 'password':
            raw = raw.strip()

        if not raw:
            if field.type == 'password' and editing:
                continue
            if field.required and field.name not in uploads:
                errors[field.name] = f'{field.label} is required.'
            data[field.name] = None
            continue

        value, error = _parse(field, raw)
        if error:
            errors[field.name] = error
        else:
            data[field.name] = value

    return data, errors


def form_values(fields, item):
    """Render an existing record's values as the strings the inputs expect."""
    values = {}
    for field in fields:
        if field.type in ('file', 'password'):
            continue
        value = item.get(field.name) if item else None
        if value is None:
            value = field.default
        if field.type == 'datetime' and isinstance(value, datetime):
            value = value.strftime('%Y-%m-%dT%H:%M')
        elif field.type == 'date' and isinstance(value, date):
            value = value.isoformat()
        elif field.type == 'multiselect':
            value = [str(v) for v in (value or [])]
        elif field.type == 'checkbox':
            value = bool(value)
        elif value is not None:
            value = str(value)
        values[field.name] = value
    return values


def submitted_values(fields, form):
    """Echo a rejected submission back into the form."""
    values = {}
    for field in fields:
        if field.type in ('file', 'password'):
            continue
        if field.type == 'checkbox':
            values[field.name] = field.name in form
        elif field.type == 'multiselect':
            values[field.name] = form.getlist(field.name) if hasattr(form, 'getlist') else []
        else:
            values[field.name] = form.get(field.name, '')
    return values
