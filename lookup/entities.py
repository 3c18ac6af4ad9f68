"""
Entity locator: resolve human-readable Shortcut names to entities.

Every lookup lists the full collection and returns the first entry whose name is exactly equal
(case-sensitive, untrimmed). When names are duplicated the winner depends on the server's listing order.
Project lookups are required for story creation, so their failures propagate; group and workflow state
lookups only refine the story and degrade to None with a warning.
"""
import logging
from typing import Any, Callable, Dict, Iterable, Optional
from errors import RemoteRequestError
from ingest.shortcut import ShortcutClient
from normalize.models import Group, Project, WorkflowState
from normalize.util import normalize_group, normalize_project, normalize_workflow_state
from storage.cache import Cache, cache_key

logger = logging.getLogger(__name__)


def find_by_name(name: str, fetch_collection: Callable[[], Iterable[Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
    for entity in fetch_collection() or []:
        if entity.get('name') == name:
            return entity
    return None


def _memoized(cache: Optional[Cache], kind: str, name: str, loader: Callable[[], Optional[Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
    # only hits are memoized; a miss is looked up again on the next call
    key = cache_key(kind, name)
    if cache is not None:
        hit = cache.get(key)
        if hit is not None:
            return hit
    found = loader()
    if found is not None and cache is not None:
        cache.set(key, found)
    return found


def find_project_by_name(shortcut: ShortcutClient, name: str, cache: Optional[Cache] = None) -> Optional[Project]:
    """Return the project called name, or None. Listing failures raise RemoteRequestError."""
    raw = _memoized(cache, 'project', name, lambda: find_by_name(name, shortcut.list_projects))
    return normalize_project(raw) if raw else None


def find_group_by_name(shortcut: ShortcutClient, name: str, cache: Optional[Cache] = None) -> Optional[Group]:
    try:
        raw = _memoized(cache, 'group', name, lambda: find_by_name(name, shortcut.list_groups))
    except RemoteRequestError as exc:
        logger.warning("could not list Shortcut groups: %s", exc)
        return None
    return normalize_group(raw) if raw else None


def _team_states(shortcut: ShortcutClient, team_id) -> Iterable[Dict[str, Any]]:
    team = shortcut.get_team(team_id)
    return (team.get('workflow') or {}).get('states') or []


def find_workflow_state(shortcut: ShortcutClient, state_name: str, project: Project, cache: Optional[Cache] = None) -> Optional[WorkflowState]:
    """Find a workflow state by name in the workflow of the team that owns project."""
    if project.team_id is None:
        logger.warning("Shortcut project %s has no team; cannot resolve workflow state %r", project.name, state_name)
        return None
    try:
        raw = _memoized(
            cache,
            'workflow_state',
            f"{project.team_id}/{state_name}",
            lambda: find_by_name(state_name, lambda: _team_states(shortcut, project.team_id)),
        )
    except RemoteRequestError as exc:
        logger.warning("could not load workflow for Shortcut team %s: %s", project.team_id, exc)
        return None
    return normalize_workflow_state(raw) if raw else None


__all__ = ["find_by_name", "find_project_by_name", "find_group_by_name", "find_workflow_state"]
