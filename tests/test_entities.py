import unittest
from unittest.mock import Mock

from errors import RemoteRequestError
from lookup.entities import find_by_name, find_project_by_name, find_group_by_name, find_workflow_state
from normalize.models import Project
from storage.cache import Cache

PROJECTS = [
    {'id': 1, 'name': 'Web', 'team_id': 10},
    {'id': 2, 'name': 'web', 'team_id': 11},
    {'id': 3, 'name': 'Web', 'team_id': 12},
]
TEAM = {'id': 10, 'workflow': {'states': [{'id': 500, 'name': 'Backlog'}, {'id': 501, 'name': 'In Review'}]}}


def _shortcut(**methods):
    client = Mock()
    for name, value in methods.items():
        if isinstance(value, Exception):
            getattr(client, name).side_effect = value
        else:
            getattr(client, name).return_value = value
    return client


class TestFindByName(unittest.TestCase):
    def test_first_exact_match(self):
        self.assertEqual(find_by_name('Web', lambda: PROJECTS)['id'], 1)

    def test_case_sensitive_and_untrimmed(self):
        self.assertEqual(find_by_name('web', lambda: PROJECTS)['id'], 2)
        self.assertIsNone(find_by_name(' Web', lambda: PROJECTS))

    def test_missing(self):
        self.assertIsNone(find_by_name('Mobile', lambda: PROJECTS))


class TestProjectAndGroup(unittest.TestCase):
    def test_project_found(self):
        project = find_project_by_name(_shortcut(list_projects=PROJECTS), 'Web')
        self.assertEqual((project.project_id, project.team_id), (1, 10))

    def test_project_listing_failure_propagates(self):
        client = _shortcut(list_projects=RemoteRequestError(500, 'https://api.app.shortcut.com/api/v3/projects'))
        with self.assertRaises(RemoteRequestError):
            find_project_by_name(client, 'Web')

    def test_group_listing_failure_is_soft(self):
        client = _shortcut(list_groups=RemoteRequestError(500, 'https://api.app.shortcut.com/api/v3/groups'))
        with self.assertLogs('lookup.entities', level='WARNING'):
            self.assertIsNone(find_group_by_name(client, 'Platform'))

    def test_group_found(self):
        client = _shortcut(list_groups=[{'id': 'g-1', 'name': 'Platform'}])
        self.assertEqual(find_group_by_name(client, 'Platform').group_id, 'g-1')

    def test_cache_avoids_second_listing(self):
        client = _shortcut(list_projects=PROJECTS)
        with Cache() as cache:
            first = find_project_by_name(client, 'Web', cache)
            second = find_project_by_name(client, 'Web', cache)
        self.assertEqual(first.project_id, second.project_id)
        client.list_projects.assert_called_once()

    def test_cache_does_not_memoize_misses(self):
        client = _shortcut(list_projects=PROJECTS)
        with Cache() as cache:
            self.assertIsNone(find_project_by_name(client, 'Mobile', cache))
            self.assertIsNone(find_project_by_name(client, 'Mobile', cache))
        self.assertEqual(client.list_projects.call_count, 2)


class TestWorkflowState(unittest.TestCase):
    def test_state_from_project_team(self):
        client = _shortcut(get_team=TEAM)
        state = find_workflow_state(client, 'In Review', Project(1, 'Web', team_id=10))
        self.assertEqual(state.state_id, 501)
        client.get_team.assert_called_once_with(10)

    def test_unknown_state(self):
        client = _shortcut(get_team=TEAM)
        self.assertIsNone(find_workflow_state(client, 'Done', Project(1, 'Web', team_id=10)))

    def test_team_failure_is_soft(self):
        client = _shortcut(get_team=RemoteRequestError(404, 'https://api.app.shortcut.com/api/v3/teams/10'))
        with self.assertLogs('lookup.entities', level='WARNING'):
            self.assertIsNone(find_workflow_state(client, 'In Review', Project(1, 'Web', team_id=10)))

    def test_project_without_team(self):
        client = _shortcut(get_team=TEAM)
        with self.assertLogs('lookup.entities', level='WARNING'):
            self.assertIsNone(find_workflow_state(client, 'In Review', Project(1, 'Web')))
        client.get_team.assert_not_called()


if __name__ == '__main__':
    unittest.main()
