"""
Correlate package: expose the story locator and identity resolver.
"""

from .linker import locate_story, locate_story_id
from .identity import resolve_identity

__all__ = ["locate_story", "locate_story_id", "resolve_identity"]
