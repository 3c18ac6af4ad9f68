"""
Sync package: author filtering and the story synchronizer.
"""

from .filters import should_process, user_list_as_set
from .stories import StorySynchronizer

__all__ = ["should_process", "user_list_as_set", "StorySynchronizer"]
