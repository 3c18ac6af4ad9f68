"""
Data models for pull request to story correlation results.
"""

BRANCH = 'branch'
DESCRIPTION = 'description'
COMMENT = 'comment'


class StoryMatch:
    """
    Links a pull request to a Shortcut story id with the evidence it was found by.
    """

    def __init__(self, story_id: str, source: str, evidence: str):
        self.story_id = story_id
        self.source = source  # branch / description / comment
        self.evidence = evidence  # branch name or matched URL

    def __str__(self):
        return f"sc-{self.story_id} (from {self.source}: {self.evidence})"
