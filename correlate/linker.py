"""
Linker heuristics to associate a pull request with a Shortcut story.
Sources are checked in a fixed priority order and the first hit wins:
- story id embedded in the head branch name (e.g. feature/sc123-fix)
- story URL in the pull request description
- story URL in the first page of issue comments
"""
import logging
import re
from typing import Any, Callable, Dict, Optional
from correlate.models import StoryMatch, BRANCH, DESCRIPTION, COMMENT
from normalize.models import PullRequestContext

logger = logging.getLogger(__name__)

SHORTCUT_STORY_URL_REGEXP = re.compile(r"https://app\.shortcut\.com/\w+/story/(\d+)(/[A-Za-z0-9-]*)?", re.ASCII)
SHORTCUT_BRANCH_NAME_REGEXP = re.compile(r"(?:.+[-/])?sc(\d+)(?:[-/].+)?")

# (owner, repo, issue_number) -> {'status': int, 'data': [{'body': ...}, ...]}
CommentLister = Callable[[str, str, int], Dict[str, Any]]


def story_id_from_branch_name(branch_name: Optional[str]) -> Optional[str]:
    if not branch_name:
        return None
    match = SHORTCUT_BRANCH_NAME_REGEXP.fullmatch(branch_name)
    return match.group(1) if match else None


def find_story_url(text: Optional[str]):
    """Return the first story URL match object in text, or None."""
    if not text:
        return None
    return SHORTCUT_STORY_URL_REGEXP.search(text)


def _match_in_comments(pr: PullRequestContext, list_comments: CommentLister) -> Optional[StoryMatch]:
    response = list_comments(pr.owner, pr.repo, pr.number)
    status = response.get('status')
    if status != 200:
        logger.warning("HTTP %s listing comments for %s/%s#%s", status, pr.owner, pr.repo, pr.number)
        return None
    for comment in response.get('data') or []:
        match = find_story_url(comment.get('body'))
        if match:
            return StoryMatch(match.group(1), COMMENT, match.group(0))
    return None


def locate_story(pr: PullRequestContext, list_comments: CommentLister) -> Optional[StoryMatch]:
    """Find the story linked to a pull request, or None if no source mentions one.

    Comments are only fetched when neither the branch name nor the description matches.
    """
    story_id = story_id_from_branch_name(pr.branch_name)
    if story_id:
        return StoryMatch(story_id, BRANCH, pr.branch_name)

    match = find_story_url(pr.body)
    if match:
        return StoryMatch(match.group(1), DESCRIPTION, match.group(0))

    return _match_in_comments(pr, list_comments)


def locate_story_id(pr: PullRequestContext, list_comments: CommentLister) -> Optional[str]:
    found = locate_story(pr, list_comments)
    if found:
        logger.debug("linked story %s", found)
        return found.story_id
    return None
