import pytest

from config import ActionConfig, DEFAULT_COMMENT_TEMPLATE, DEFAULT_STORY_TITLE_TEMPLATE, get_input, input_env_name
from errors import ConfigurationError

REQUIRED_ENV = {
    'INPUT_SHORTCUT-TOKEN': 'sc-token',
    'INPUT_GITHUB-TOKEN': 'gh-token',
    'INPUT_PROJECT-NAME': 'Web',
}


def test_input_env_name():
    assert input_env_name('project-name') == 'INPUT_PROJECT-NAME'
    assert input_env_name('user map') == 'INPUT_USER_MAP'


def test_get_input_strips_whitespace():
    assert get_input('team-name', {'INPUT_TEAM-NAME': '  Platform \n'}) == 'Platform'
    assert get_input('team-name', {}) == ''


def test_from_env_reads_inputs_and_defaults():
    env = dict(REQUIRED_ENV, **{'INPUT_ONLY-USERS': 'alice, bob', 'INPUT_LABEL-DELAY': '2.5'})
    config = ActionConfig.from_env(env)
    assert config.shortcut_token == 'sc-token'
    assert config.project_name == 'Web'
    assert config.only_users == 'alice, bob'
    assert config.label_delay == 2.5
    assert config.story_title_template == DEFAULT_STORY_TITLE_TEMPLATE
    assert config.comment_template == DEFAULT_COMMENT_TEMPLATE
    assert config.team_name == ''


def test_overrides_take_precedence():
    config = ActionConfig.from_env(REQUIRED_ENV, overrides={'project-name': 'Mobile', 'team-name': None})
    assert config.project_name == 'Mobile'
    assert config.team_name == ''


def test_missing_required_inputs_are_listed():
    with pytest.raises(ConfigurationError) as excinfo:
        ActionConfig.from_env({'INPUT_GITHUB-TOKEN': 'gh-token'})
    message = str(excinfo.value)
    assert 'shortcut-token' in message
    assert 'INPUT_PROJECT-NAME' in message
    assert excinfo.value.context['missing'] == ['shortcut-token', 'project-name']


def test_invalid_label_delay():
    with pytest.raises(ConfigurationError):
        ActionConfig.from_env(dict(REQUIRED_ENV, **{'INPUT_LABEL-DELAY': 'soon'}))
