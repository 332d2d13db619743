"""
Listing State

Everything a dashboard table needs to know about what is on screen, parsed
once from the query string. Every user action is a transition that returns
a new state; the page is then re-rendered from the URL.
"""

import enum
from dataclasses import dataclass, replace


class Confirmation(enum.Enum):
    CONFIRMED = 'confirm'
    CANCELLED = 'cancel'


def confirmation_from(form):
    """Resolve a confirm dialog submission; anything but 'confirm' cancels."""
    if form.get('decision') == Confirmation.CONFIRMED.value:
        return Confirmation.CONFIRMED
    return Confirmation.CANCELLED


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


@dataclass(frozen=True)
class ListingState:
    page: int = 1
    limit: int = 10
    query: str = ''
    sort_field: str = 'created_at'
    sort_direction: str = 'desc'

    @classmethod
    def from_args(cls, args, default_sort=('created_at', 'desc'), default_limit=10,
                  limit_options=None):
        """Parse ``page, limit, query|search, sortField, sortDirection``."""
        limit = _positive_int(args.get('limit'), default_limit)
        if limit_options and limit not in limit_options:
            limit = default_limit
        direction = (args.get('sortDirection') or default_sort[1]).lower()
        if direction not in ('asc', 'desc'):
            direction = default_sort[1]
        return cls(
            page=_positive_int(args.get('page'), 1),
            limit=limit,
            query=(args.get('query') or args.get('search') or '').strip(),
            sort_field=args.get('sortField') or default_sort[0],
            sort_direction=direction,
        )

    def with_page(self, page):
        return replace(self, page=max(1, int(page)))

    def search(self, term):
        return replace(self, query=(term or '').strip(), page=1)

    def with_limit(self, limit):
        return replace(self, limit=int(limit), page=1)

    def toggle_sort(self, field):
        """Same field flips direction; a new field starts ascending."""
        if field == self.sort_field and self.sort_direction == 'asc':
            return replace(self, sort_field=field, sort_direction='desc')
        return replace(self, sort_field=field, sort_direction='asc')

    def after_delete(self, rows_left_on_page):
        """Step back a page when a delete emptied the current one."""
        if rows_left_on_page == 0 and self.page > 1:
            return self.with_page(self.page - 1)
        return self

    def to_args(self):
        args = {
            'page': self.page,
            'limit': self.limit,
            'sortField': self.sort_field,
            'sortDirection': self.sort_direction,
        }
        if self.query:
            args['query'] = self.query
        return args
