"""
Allow/deny filtering of pull request authors (ignored-users / only-users inputs).
"""
import logging
from typing import Optional, Set
from errors import ConfigurationConflictError

logger = logging.getLogger(__name__)


def user_list_as_set(user_list: Optional[str]) -> Set[str]:
    """Split a comma-separated username list, trimming whitespace around each entry."""
    users: Set[str] = set()
    if user_list:
        for username in user_list.split(","):
            users.add(username.strip())
    return users


def should_process(actor: str, ignored_users: Set[str], only_users: Set[str]) -> bool:
    """Decide whether events authored by actor are synced.

    Raises ConfigurationConflictError when actor is in both non-empty lists.
    """
    if not ignored_users and not only_users:
        logger.debug("No users defined in only-users or ignored-users. Proceeding with Shortcut workflow...")
        return True

    if only_users and ignored_users:
        if actor in only_users and actor in ignored_users:
            raise ConfigurationConflictError(
                f"PR author {actor} is defined in both ignored-users and only-users lists. Cancelling Shortcut workflow...",
                context={'actor': actor},
            )
        logger.debug("Users are defined in both lists. This may create unexpected results.")

    if only_users:
        if actor in only_users:
            logger.debug("PR author %s is defined in only-users list. Proceeding with Shortcut workflow...", actor)
            return True
        logger.debug("PR author %s isn't in the only-users list. Ignoring user...", actor)
        return False

    if actor in ignored_users:
        logger.debug("PR author %s is defined in ignored-users list. Ignoring user...", actor)
        return False
    logger.debug("PR author %s is NOT defined in ignored-users list. Proceeding with Shortcut workflow...", actor)
    return True
