"""
Services Package

Exports all services for easy importing.
"""

from newsdesk.services.feed import FeedState, LoadMoreFeed
from newsdesk.services.media import MediaClient, MediaConfigError, resource_type_for

__all__ = [
    'FeedState',
    'LoadMoreFeed',
    'MediaClient',
    'MediaConfigError',
    'resource_type_for',
]
