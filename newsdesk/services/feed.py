"""
Incremental Feed ("Load More")

Accumulates consecutive pages of a listing. One explicit state value
replaces separate loading/error flags:

    IDLE --load_more--> LOADING --ok--> IDLE
                                --fail--> ERROR

Each reset() starts a new generation; a page fetched for an older
generation is dropped instead of overwriting the newer feed.
"""

import enum
import logging

logger = logging.getLogger(__name__)


class FeedState(enum.Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    ERROR = 'error'


class LoadMoreFeed:
    """Client-side style pagination over ``fetch_page(key, page, items_per_page)``.

    ``fetch_page`` returns the listing dict shape: ``{'data', 'total_count',
    'error'}``.
    """

    def __init__(self, fetch_page, items_per_page=10):
        self.fetch_page = fetch_page
        self.items_per_page = items_per_page
        self.key = None
        self.generation = 0
        self.state = FeedState.IDLE
        self.items = []
        self.current_page = 0
        self.total_count = 0
        self.has_more = False
        self.error = None

    def reset(self, key):
        """Switch to a new category/filter and load its first page."""
        self.generation += 1
        self.key = key
        self.items = []
        self.current_page = 0
        self.total_count = 0
        self.has_more = False
        self.error = None
        self.state = FeedState.IDLE
        logger.debug('Feed reset to %r (generation %s)', key, self.generation)
        return self._load(1)

    def load_more(self):
        """Fetch the next page; a no-op while loading or when nothing is left.

        From ERROR this retries the page that failed, including page 1.
        """
        if self.state is FeedState.LOADING:
            logger.debug('Ignoring load_more while a page is loading')
            return False
        if self.state is FeedState.ERROR:
            logger.debug('Retrying page %s for %r', self.current_page + 1, self.key)
            return self._load(self.current_page + 1)
        if not self.has_more:
            return False
        return self._load(self.current_page + 1)

    def _load(self, page):
        generation = self.generation
        self.state = FeedState.LOADING
        try:
            result = self.fetch_page(self.key, page, self.items_per_page)
        except Exception as e:
            logger.exception('Feed fetch failed for %r page %s', self.key, page)
            result = {'data': None, 'total_count': 0, 'error': str(e)}

        if generation != self.generation:
            logger.debug('Dropping stale page %s for generation %s', page, generation)
            return False

        if result.get('error'):
            self.state = FeedState.ERROR
            self.error = result['error']
            return False

        rows = result.get('data') or []
        self.items.extend(rows)
        self.current_page = page
        self.total_count = int(result.get('total_count') or 0)
        self.has_more = self.total_count > len(self.items)
        self.state = FeedState.IDLE
        self.error = None
        return True

    @property
    def loaded_count(self):
        return len(self.items)
