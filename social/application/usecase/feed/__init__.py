"""Feed use cases."""

from .get_feed import FeedItem, GetFeedRequest, GetFeedResponse, GetFeedUseCase

__all__ = [
    "FeedItem",
    "GetFeedRequest",
    "GetFeedResponse",
    "GetFeedUseCase",
]
