"""
Run configuration for the story sync action.
Values come from GitHub Action inputs (INPUT_<NAME> environment variables) and may be overridden from the CLI.
The resulting ActionConfig is built once per run and handed to every component.
"""
import os
from typing import Dict, Mapping, Optional
from errors import ConfigurationError

DEFAULT_STORY_TITLE_TEMPLATE = "{{ payload.pull_request.title }}"
DEFAULT_STORY_DESCRIPTION_TEMPLATE = "{{ payload.pull_request.body }}"
DEFAULT_COMMENT_TEMPLATE = "This pull request is linked to a [Shortcut story]({{ story.app_url }})."

REQUIRED_INPUTS = ('shortcut-token', 'github-token', 'project-name')

# input name -> ActionConfig attribute
INPUT_FIELDS = {
    'shortcut-token': 'shortcut_token',
    'github-token': 'github_token',
    'project-name': 'project_name',
    'ignored-users': 'ignored_users',
    'only-users': 'only_users',
    'user-map': 'user_map',
    'label-iteration-group-map': 'label_iteration_group_map',
    'team-name': 'team_name',
    'opened-state-name': 'opened_state_name',
    'merged-state-name': 'merged_state_name',
    'closed-state-name': 'closed_state_name',
    'story-title-template': 'story_title_template',
    'story-description-template': 'story_description_template',
    'comment-template': 'comment_template',
    'label-delay': 'label_delay',
}


def input_env_name(name: str) -> str:
    """Environment variable GitHub Actions uses for an input: spaces become underscores, then upper-cased."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    return (env.get(input_env_name(name)) or '').strip()


class ActionConfig:
    """
    Explicit per-run configuration. JSON inputs (user-map, label-iteration-group-map) are kept as raw
    text; the components that use them parse them and treat malformed JSON as a warning.
    """

    def __init__(
        self,
        shortcut_token: str,
        github_token: str,
        project_name: str,
        ignored_users: str = '',
        only_users: str = '',
        user_map: str = '',
        label_iteration_group_map: str = '',
        team_name: str = '',
        opened_state_name: str = '',
        merged_state_name: str = '',
        closed_state_name: str = '',
        story_title_template: str = DEFAULT_STORY_TITLE_TEMPLATE,
        story_description_template: str = DEFAULT_STORY_DESCRIPTION_TEMPLATE,
        comment_template: str = DEFAULT_COMMENT_TEMPLATE,
        label_delay: float = 0.0,
    ):
        self.shortcut_token = shortcut_token
        self.github_token = github_token
        self.project_name = project_name
        self.ignored_users = ignored_users
        self.only_users = only_users
        self.user_map = user_map
        self.label_iteration_group_map = label_iteration_group_map
        self.team_name = team_name
        self.opened_state_name = opened_state_name
        self.merged_state_name = merged_state_name
        self.closed_state_name = closed_state_name
        self.story_title_template = story_title_template or DEFAULT_STORY_TITLE_TEMPLATE
        self.story_description_template = story_description_template or DEFAULT_STORY_DESCRIPTION_TEMPLATE
        self.comment_template = comment_template or DEFAULT_COMMENT_TEMPLATE
        self.label_delay = float(label_delay or 0.0)

    @classmethod
    def from_inputs(cls, inputs: Mapping[str, Optional[str]]) -> 'ActionConfig':
        """Build a config from an input-name -> value mapping, raising if a required input is missing."""
        missing = [name for name in REQUIRED_INPUTS if not inputs.get(name)]
        if missing:
            sources = ', '.join(f"{name} (CLI flag --{name} or env {input_env_name(name)})" for name in missing)
            raise ConfigurationError('Missing required inputs: ' + sources, context={'missing': missing})

        kwargs: Dict[str, object] = {}
        for name, attr in INPUT_FIELDS.items():
            value = inputs.get(name)
            if value:
                kwargs[attr] = value
        if 'label_delay' in kwargs:
            try:
                kwargs['label_delay'] = float(kwargs['label_delay'])
            except (TypeError, ValueError):
                raise ConfigurationError(f"`label-delay` must be a number of seconds, got {kwargs['label_delay']!r}")
        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, overrides: Optional[Mapping[str, Optional[str]]] = None) -> 'ActionConfig':
        """Read every known input from the environment; non-empty overrides (e.g. CLI flags) take precedence."""
        inputs = {name: get_input(name, environ) for name in INPUT_FIELDS}
        for name, value in (overrides or {}).items():
            if value:
                inputs[name] = value
        return cls.from_inputs(inputs)
