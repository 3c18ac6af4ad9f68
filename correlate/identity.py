"""
Map a GitHub username to a Shortcut member id.

An explicit user-map entry wins and short-circuits every remote call. Otherwise the member
directory is matched against the user's public GitHub email, compared byte-for-byte.
"""
import json
import logging
from typing import Any, Callable, Dict, Iterable, Optional
from errors import RemoteRequestError
from normalize.util import normalize_member

logger = logging.getLogger(__name__)


def parse_user_map(user_map_text: Optional[str]) -> Optional[Dict[str, str]]:
    """Parse the user-map input. Returns None (with a warning) if it is not a JSON string-to-string object."""
    if not user_map_text:
        return None
    try:
        parsed = json.loads(user_map_text)
    except ValueError:
        logger.warning("`user-map` is not valid JSON")
        return None
    if not isinstance(parsed, dict) or not all(isinstance(k, str) and isinstance(v, str) for k, v in parsed.items()):
        logger.warning("`user-map` must map GitHub usernames to Shortcut member ids")
        return None
    return parsed


def email_to_member_id(members: Iterable[Dict[str, Any]]) -> Dict[str, str]:
    """Build email -> member id, skipping members without an email. Later duplicates overwrite earlier ones."""
    mapping: Dict[str, str] = {}
    for raw in members or []:
        member = normalize_member(raw)
        if member.email:
            mapping[member.email] = member.member_id
    return mapping


def resolve_identity(
    actor: str,
    user_map_text: Optional[str],
    list_members: Callable[[], Iterable[Dict[str, Any]]],
    get_user_email: Callable[[str], Optional[str]],
) -> Optional[str]:
    """Return the Shortcut member id for actor, or None if it cannot be resolved.

    A failing member directory fetch raises RemoteRequestError; a failing GitHub user lookup
    only logs a warning.
    """
    user_map = parse_user_map(user_map_text)
    if user_map and actor in user_map:
        return user_map[actor]

    emails = email_to_member_id(list_members())
    logger.debug("email to Shortcut ID: %s", json.dumps(emails, sort_keys=True))

    try:
        email = get_user_email(actor)
    except RemoteRequestError as exc:
        logger.warning("could not look up GitHub user @%s: %s", actor, exc)
        return None
    if not email:
        logger.warning("could not get email address for GitHub user @%s", actor)
        return None
    member_id = emails.get(email)
    if member_id is None:
        logger.warning("no Shortcut member has the email address of GitHub user @%s", actor)
    return member_id


__all__ = ["parse_user_map", "email_to_member_id", "resolve_identity"]
