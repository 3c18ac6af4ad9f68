import unittest
from unittest.mock import Mock

from correlate.linker import story_id_from_branch_name, find_story_url, locate_story, locate_story_id
from correlate.models import BRANCH, DESCRIPTION, COMMENT
from normalize.util import pull_request_context
from helpers import make_pr_event


def _comments(status=200, bodies=()):
    return Mock(return_value={'status': status, 'data': [{'body': b} for b in bodies]})


class TestBranchName(unittest.TestCase):
    def test_branch_patterns(self):
        cases = {
            'feature/sc12345-fix-bug': '12345',
            'sc42': '42',
            'sc42/more': '42',
            'user-sc7': '7',
            'jane/feature/sc900/part-two': '900',
        }
        for branch, expected in cases.items():
            self.assertEqual(story_id_from_branch_name(branch), expected, branch)

    def test_non_matching_branches(self):
        for branch in ('main', 'feature/sc-12', 'scx12', 'featuresc12', 'sc12abc', '', 'sc12\n', 'feature/sc12-fix\n'):
            self.assertIsNone(story_id_from_branch_name(branch), branch)


class TestStoryUrl(unittest.TestCase):
    def test_find_url_with_slug(self):
        match = find_story_url('See https://app.shortcut.com/acme/story/555/title for details')
        self.assertEqual(match.group(1), '555')
        self.assertEqual(match.group(0), 'https://app.shortcut.com/acme/story/555/title')

    def test_find_url_without_slug(self):
        self.assertEqual(find_story_url('https://app.shortcut.com/acme/story/9').group(1), '9')

    def test_no_url(self):
        self.assertIsNone(find_story_url('https://app.clubhouse.io/acme/story/9'))
        self.assertIsNone(find_story_url(None))


class TestLocateStory(unittest.TestCase):
    def test_branch_wins_over_description(self):
        pr = pull_request_context(make_pr_event(branch='feature/sc12345-fix-bug', body='https://app.shortcut.com/acme/story/555'))
        lister = _comments()
        found = locate_story(pr, lister)
        self.assertEqual(found.story_id, '12345')
        self.assertEqual(found.source, BRANCH)
        lister.assert_not_called()

    def test_description_link(self):
        pr = pull_request_context(make_pr_event(branch='main', body='Closes https://app.shortcut.com/acme/story/555/title'))
        lister = _comments()
        found = locate_story(pr, lister)
        self.assertEqual(found.story_id, '555')
        self.assertEqual(found.source, DESCRIPTION)
        lister.assert_not_called()

    def test_first_matching_comment(self):
        pr = pull_request_context(make_pr_event(branch='main', body=None))
        lister = _comments(bodies=['LGTM', 'linked: https://app.shortcut.com/acme/story/31', 'https://app.shortcut.com/acme/story/99'])
        found = locate_story(pr, lister)
        self.assertEqual(found.story_id, '31')
        self.assertEqual(found.source, COMMENT)
        lister.assert_called_once_with('acme', 'widgets', 7)

    def test_comment_listing_failure_is_no_match(self):
        pr = pull_request_context(make_pr_event(branch='main'))
        with self.assertLogs('correlate.linker', level='WARNING'):
            self.assertIsNone(locate_story_id(pr, _comments(status=500)))

    def test_no_sources_match(self):
        pr = pull_request_context(make_pr_event(branch='main', body='nothing here'))
        self.assertIsNone(locate_story_id(pr, _comments(bodies=['no links'])))


if __name__ == '__main__':
    unittest.main()
