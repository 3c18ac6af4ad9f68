"""
Unified data models for Shortcut entities and pull request events.
"""

from typing import List, Optional, Dict, Any


class Member:
    """
    Shortcut member identity.
    """
    def __init__(self, member_id: str, email: Optional[str] = None):
        self.member_id = member_id
        self.email = email  # profile.email_address, matched byte-for-byte


class Project:
    """
    Shortcut project. Workflow states are reached through the project's team.
    """
    def __init__(self, project_id: int, name: str, team_id: Optional[int] = None):
        self.project_id = project_id
        self.name = name
        self.team_id = team_id


class Group:
    """
    Shortcut group (team).
    """
    def __init__(self, group_id: str, name: str):
        self.group_id = group_id
        self.name = name


class WorkflowState:
    def __init__(self, state_id: int, name: str):
        self.state_id = state_id
        self.name = name


class Iteration:
    """
    Time-boxed grouping of stories scoped to one or more groups.
    """
    def __init__(self, iteration_id: int, name: str, status: str, group_ids: Optional[List[str]] = None, updated_at: Optional[str] = None):
        self.iteration_id = iteration_id
        self.name = name
        self.status = status  # unstarted/started/done
        self.group_ids = group_ids or []
        self.updated_at = updated_at


class IterationInfo:
    """
    Label-driven iteration target: the group to search and an optional name fragment to skip.
    """
    def __init__(self, group_id: str, exclude_name: Optional[str] = None):
        self.group_id = group_id
        self.exclude_name = exclude_name

    def __eq__(self, other):
        if not isinstance(other, IterationInfo):
            return NotImplemented
        return (self.group_id, self.exclude_name) == (other.group_id, other.exclude_name)

    def __repr__(self):
        return f"IterationInfo(group_id={self.group_id!r}, exclude_name={self.exclude_name!r})"


class Story:
    """
    Shortcut story as returned by the stories endpoints.
    """
    def __init__(self, story_id: int, name: str, description: str = '', project_id: Optional[int] = None, owner_ids: Optional[List[str]] = None, group_id: Optional[str] = None, workflow_state_id: Optional[int] = None, iteration_id: Optional[int] = None, external_links: Optional[List[str]] = None, app_url: str = ''):
        self.story_id = story_id
        self.name = name
        self.description = description
        self.project_id = project_id
        self.owner_ids = owner_ids or []
        self.group_id = group_id
        self.workflow_state_id = workflow_state_id
        self.iteration_id = iteration_id
        self.external_links = external_links or []
        self.app_url = app_url


class PullRequestContext:
    """
    Read-only view of a pull request event. Comments are not part of the event and are fetched lazily by the locator.
    """
    def __init__(self, owner: str, repo: str, number: int, branch_name: str, body: Optional[str], author_login: str, html_url: str, merged: bool = False, label: Optional[str] = None, payload: Optional[Dict[str, Any]] = None):
        self.owner = owner
        self.repo = repo
        self.number = number
        self.branch_name = branch_name
        self.body = body
        self.author_login = author_login
        self.html_url = html_url
        self.merged = merged
        self.label = label  # set on labeled/unlabeled events
        self.payload = payload or {}  # raw event, exposed to templates
