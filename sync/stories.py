"""
Story synchronizer: keeps a pull request and its Shortcut story in step.

Per pull request the story moves NoStoryKnown -> Located | Created on opened events, and
Located | Created -> Updated on label (iteration) and close (workflow state) events.
Every remote call is made once; nothing is retried.
"""
import logging
import time
from typing import Any, Callable, Dict, Optional

from config import ActionConfig
from correlate.identity import resolve_identity
from correlate.linker import locate_story_id
from errors import MissingEntityError, RemoteRequestError
from ingest.github import GitHubClient
from ingest.shortcut import ShortcutClient
from lookup.entities import find_group_by_name, find_project_by_name, find_workflow_state
from lookup.iterations import iteration_info_for_label, select_iteration
from normalize.models import IterationInfo, PullRequestContext
from normalize.util import normalize_project, normalize_story, pull_request_context
from report.renderer import render_comment, render_story_fields
from storage.cache import Cache
from sync.filters import should_process, user_list_as_set

logger = logging.getLogger(__name__)

PULL_REQUEST_EVENTS = ('pull_request', 'pull_request_target')

# pull_request action -> handler method
ACTION_HANDLERS = {
    'opened': 'handle_opened',
    'reopened': 'handle_opened',
    'labeled': 'handle_labeled',
    'closed': 'handle_closed',
}


def delay(seconds: float, sleep: Callable[[float], None] = time.sleep):
    """Use with caution! Only to resolve potential races in event handling."""
    if seconds and seconds > 0:
        sleep(seconds)


class StorySynchronizer:
    """Orchestrates locating, creating and updating the story linked to a pull request."""

    def __init__(self, config: ActionConfig, shortcut: ShortcutClient, github: GitHubClient, cache: Optional[Cache] = None, sleep: Callable[[float], None] = time.sleep):
        self.config = config
        self.shortcut = shortcut
        self.github = github
        self.cache = cache
        self._sleep = sleep

    def should_process(self, pr: PullRequestContext) -> bool:
        return should_process(pr.author_login, user_list_as_set(self.config.ignored_users), user_list_as_set(self.config.only_users))

    def locate_story_id(self, pr: PullRequestContext) -> Optional[str]:
        return locate_story_id(pr, self.github.list_comments)

    def resolve_owner(self, github_username: str) -> Optional[str]:
        return resolve_identity(github_username, self.config.user_map, self.shortcut.list_members, self.github.get_user_email)

    def build_story_body(self, pr: PullRequestContext) -> Dict[str, Any]:
        """Assemble the creation payload. Optional fields are left out when they cannot be resolved."""
        fields = render_story_fields(self.config.story_title_template, self.config.story_description_template, pr.payload)
        owner_id = self.resolve_owner(pr.author_login)
        project = find_project_by_name(self.shortcut, self.config.project_name, self.cache)
        if project is None:
            raise MissingEntityError(f"Could not find Shortcut project: {self.config.project_name}", context={'project_name': self.config.project_name})

        body: Dict[str, Any] = {
            'name': fields['name'],
            'description': fields['description'],
            'project_id': project.project_id,
            'external_links': [pr.html_url],
        }
        if owner_id:
            body['owner_ids'] = [owner_id]
        if self.config.opened_state_name:
            state = find_workflow_state(self.shortcut, self.config.opened_state_name, project, self.cache)
            if state:
                body['workflow_state_id'] = state.state_id
            else:
                logger.warning("Shortcut workflow state %r not found; creating story without it", self.config.opened_state_name)
        if self.config.team_name:
            group = find_group_by_name(self.shortcut, self.config.team_name, self.cache)
            if group:
                body['group_id'] = group.group_id
            else:
                logger.warning("Shortcut team %r not found; creating story without it", self.config.team_name)
        return body

    def create_story(self, pr: PullRequestContext) -> Dict[str, Any]:
        """Create the story for pr and return the story as returned by Shortcut."""
        body = self.build_story_body(pr)
        story = self.shortcut.create_story(body)
        logger.info("Created Shortcut story %s for %s", story.get('id'), pr.html_url)
        return story

    def link_pull_request(self, pr: PullRequestContext, story: Dict[str, Any]):
        """Comment on the pull request with a link to story. Any status but 201 fails the run."""
        comment = render_comment(self.config.comment_template, pr.payload, story)
        res = self.github.create_comment(pr.owner, pr.repo, pr.number, comment)
        if res.get('status') != 201:
            raise RemoteRequestError(res.get('status', 0), self.github.comments_endpoint(pr.owner, pr.repo, pr.number), body=res.get('data'))

    def move_story_to_iteration(self, story_id: str, info: IterationInfo) -> Optional[Dict[str, Any]]:
        iteration = select_iteration(info, self.shortcut.list_iterations)
        if iteration is None:
            logger.warning("No started Shortcut iteration found for group %s; story %s not moved", info.group_id, story_id)
            return None
        logger.info("Moving Shortcut story %s to iteration %s (%s)", story_id, iteration.iteration_id, iteration.name)
        return self.shortcut.update_story(story_id, {'iteration_id': iteration.iteration_id})

    def move_story_to_state(self, story_id: str, state_name: str) -> Optional[Dict[str, Any]]:
        """Move a story to the named workflow state of its own project's team."""
        story = normalize_story(self.shortcut.get_story(story_id))
        project = normalize_project(self.shortcut.get_project(story.project_id))
        state = find_workflow_state(self.shortcut, state_name, project, self.cache)
        if state is None:
            logger.warning("Shortcut workflow state %r not found for project %s; story %s not moved", state_name, project.name, story_id)
            return None
        if story.workflow_state_id == state.state_id:
            logger.debug("Shortcut story %s is already in %r", story_id, state_name)
            return None
        logger.info("Moving Shortcut story %s to %r", story_id, state_name)
        return self.shortcut.update_story(story_id, {'workflow_state_id': state.state_id})

    def handle_opened(self, payload: Dict[str, Any]) -> Optional[str]:
        """Link or create the story for a newly opened pull request; returns the story id."""
        pr = pull_request_context(payload)
        if not self.should_process(pr):
            return None
        story_id = self.locate_story_id(pr)
        if story_id:
            logger.info("Pull request %s is already linked to Shortcut story %s", pr.html_url, story_id)
            return story_id
        story = self.create_story(pr)
        self.link_pull_request(pr, story)
        return str(story.get('id'))

    def handle_labeled(self, payload: Dict[str, Any]) -> Optional[str]:
        pr = pull_request_context(payload)
        if not self.should_process(pr):
            return None
        info = iteration_info_for_label(pr.label, self.config.label_iteration_group_map)
        if info is None:
            logger.warning("Label %r is not mapped to a Shortcut iteration group; skipping", pr.label)
            return None
        # give a concurrent opened run time to create and link the story
        delay(self.config.label_delay, self._sleep)
        story_id = self.locate_story_id(pr)
        if not story_id:
            logger.warning("Could not find a Shortcut story linked to %s; skipping iteration update", pr.html_url)
            return None
        self.move_story_to_iteration(story_id, info)
        return story_id

    def handle_closed(self, payload: Dict[str, Any]) -> Optional[str]:
        pr = pull_request_context(payload)
        if not self.should_process(pr):
            return None
        state_name = self.config.merged_state_name if pr.merged else self.config.closed_state_name
        if not state_name:
            logger.debug("No workflow state configured for %s pull requests", 'merged' if pr.merged else 'closed')
            return None
        story_id = self.locate_story_id(pr)
        if not story_id:
            logger.warning("Could not find a Shortcut story linked to %s; skipping state update", pr.html_url)
            return None
        self.move_story_to_state(story_id, state_name)
        return story_id

    def handle_event(self, event_name: str, payload: Dict[str, Any]) -> Optional[str]:
        """Dispatch a GitHub event to its handler. Unsupported events and actions are ignored."""
        if event_name not in PULL_REQUEST_EVENTS:
            logger.warning("Unsupported event %r; only pull_request events are handled", event_name)
            return None
        action = payload.get('action') or ''
        handler_name = ACTION_HANDLERS.get(action)
        if handler_name is None:
            logger.debug("Ignoring pull_request action %r", action)
            return None
        return getattr(self, handler_name)(payload)
