"""Promote a user to admin, creating the account when it does not exist.

Usage: python scripts/make_admin.py EMAIL [PASSWORD]
"""
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from newsdesk import create_app
from newsdesk.data import users

if len(sys.argv) < 2:
    print(__doc__)
    sys.exit(1)

email = sys.argv[1].strip().lower()
password = sys.argv[2] if len(sys.argv) > 2 else None

app = create_app()

with app.app_context():
    found = users.get_user_credentials(email)
    if found['error']:
        print('Could not look up user:', found['error'])
        sys.exit(1)

    if found['data'] is None:
        if not password:
            print('A password is required to create a new admin')
            sys.exit(1)
        result = users.create_user({
            'firstname': 'Admin',
            'lastname': 'User',
            'email': email,
            'password': password,
            'role': 'admin',
            'status': 'active',
        })
        message = 'New admin user created'
    else:
        changes = {'role': 'admin', 'status': 'active'}
        if password:
            changes['password'] = password
        result = users.update_user(found['data']['id'], changes)
        message = 'Existing user promoted to admin'

    if result['error']:
        print(result['error'])
        sys.exit(1)
    print(message)
