"""Story use cases."""

from .list_stories import (
    GetStoryRequest,
    GetStoryUseCase,
    ListStoriesRequest,
    ListStoriesResponse,
    ListStoriesUseCase,
    StoryResponse,
)
from .story_activity import (
    CreateStoryRequest,
    CreateStoryUseCase,
    MarkStorySeenUseCase,
    ReactToStoryRequest,
    ReactToStoryUseCase,
    StoryReactionResponse,
    StorySeenRequest,
)

__all__ = [
    "CreateStoryRequest",
    "CreateStoryUseCase",
    "GetStoryRequest",
    "GetStoryUseCase",
    "ListStoriesRequest",
    "ListStoriesResponse",
    "ListStoriesUseCase",
    "MarkStorySeenUseCase",
    "ReactToStoryRequest",
    "ReactToStoryUseCase",
    "StoryReactionResponse",
    "StoryResponse",
    "StorySeenRequest",
]
