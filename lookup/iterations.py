"""
Iteration selection for label-driven moves.

A GitHub label maps (via the label-iteration-group-map input) to a Shortcut group and an optional
name fragment to skip. The selected iteration is the most recently updated started iteration of that group.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional
from normalize.models import Iteration, IterationInfo
from normalize.util import normalize_iteration

logger = logging.getLogger(__name__)

STARTED = "started"

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def iteration_info_for_label(label: Optional[str], label_map_text: Optional[str]) -> Optional[IterationInfo]:
    """Return the IterationInfo configured for label, or None.

    An unset or malformed map, a missing label and an entry without groupId all yield None;
    none of them fail the run.
    """
    if not label_map_text:
        logger.warning("`label-iteration-group-map` is empty or unset")
        return None
    try:
        label_map = json.loads(label_map_text)
    except ValueError:
        logger.warning("`label-iteration-group-map` is not valid JSON")
        return None
    if not isinstance(label_map, dict):
        logger.warning("`label-iteration-group-map` must be a JSON object")
        return None

    if label is None or label not in label_map:
        return None
    info = label_map[label]
    if not isinstance(info, dict) or not info.get('groupId'):
        logger.warning('missing "groupId" key from "%s" label in "label-iteration-group-map"; skipping', label)
        return None
    return IterationInfo(group_id=info['groupId'], exclude_name=info.get('excludeName') or None)


def _parse_updated_at(value: Optional[str]) -> datetime:
    # unparseable timestamps sort as the oldest
    if not value:
        return _OLDEST
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return _OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _matches(iteration: Iteration, info: IterationInfo) -> bool:
    if iteration.status != STARTED:
        return False
    if info.group_id not in iteration.group_ids:
        return False
    if info.exclude_name and info.exclude_name in iteration.name:
        return False
    return True


def filter_iterations(iterations: Iterable[Iteration], info: IterationInfo) -> List[Iteration]:
    return [it for it in iterations if _matches(it, info)]


def select_iteration(info: IterationInfo, fetch_iterations: Callable[[], Iterable[Dict[str, Any]]]) -> Optional[Iteration]:
    """Pick the most recently updated started iteration for info.group_id, or None.

    Ties on updated_at keep listing order (sorted() is stable), so the same snapshot always
    yields the same iteration.
    """
    iterations = [normalize_iteration(raw) for raw in fetch_iterations() or []]
    candidates = filter_iterations(iterations, info)
    if not candidates:
        return None
    # sort most-recently updated first
    ordered = sorted(candidates, key=lambda it: _parse_updated_at(it.updated_at), reverse=True)
    return ordered[0]


__all__ = ["iteration_info_for_label", "filter_iterations", "select_iteration"]
