"""
Exception hierarchy for the story sync pipeline.
Fatal conditions raise one of these; the CLI reports them and marks the run failed.
"""
import json
from typing import Any, Dict, Optional


class ShortcutSyncError(RuntimeError):
    """Base exception that carries structured context."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(ShortcutSyncError):
    """Raised when a required action input is missing or an input has an unusable value."""


class ConfigurationConflictError(ConfigurationError):
    """Raised when an actor is listed in both ignored-users and only-users."""


class MissingEntityError(ShortcutSyncError):
    """Raised when a required Shortcut entity (e.g. the project) cannot be found by name."""


class RemoteRequestError(ShortcutSyncError):
    """
    Raised when a remote call returns an unexpected status or fails in transport.
    Transport failures are reported with status 0.
    """

    def __init__(self, status: int, url: str, body: Any = None, detail: str = ''):
        lines = [f"HTTP {status} {url}"]
        if body not in (None, '', {}, []):
            lines.append(body if isinstance(body, str) else json.dumps(body))
        if detail:
            lines.append(detail)
        super().__init__("\n".join(lines), context={'status': status, 'url': url})
        self.status = status
        self.url = url
        self.body = body


__all__ = [
    "ShortcutSyncError",
    "ConfigurationConflictError",
    "ConfigurationError",
    "MissingEntityError",
    "RemoteRequestError",
]
