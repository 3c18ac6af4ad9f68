"""
Normalization utility helpers.
Small helpers to normalize raw Shortcut and GitHub payloads into normalize.models entities.
"""
from typing import Dict, Any
from normalize.models import Member, Project, Group, WorkflowState, Iteration, Story, PullRequestContext


def normalize_member(raw: Dict[str, Any]) -> Member:
    """Create a Member from a Shortcut member dict. The email is kept exactly as returned."""
    profile = raw.get('profile') or {}
    return Member(member_id=raw.get('id'), email=profile.get('email_address') or None)


def normalize_project(raw: Dict[str, Any]) -> Project:
    return Project(project_id=raw.get('id'), name=raw.get('name'), team_id=raw.get('team_id'))


def normalize_group(raw: Dict[str, Any]) -> Group:
    return Group(group_id=raw.get('id'), name=raw.get('name'))


def normalize_workflow_state(raw: Dict[str, Any]) -> WorkflowState:
    return WorkflowState(state_id=raw.get('id'), name=raw.get('name'))


def normalize_iteration(raw: Dict[str, Any]) -> Iteration:
    return Iteration(
        iteration_id=raw.get('id'),
        name=raw.get('name') or '',
        status=raw.get('status') or '',
        group_ids=list(raw.get('group_ids') or []),
        updated_at=raw.get('updated_at'),
    )


def normalize_story(raw: Dict[str, Any]) -> Story:
    # external_links may be plain URLs or objects depending on the endpoint version
    links = []
    for link in raw.get('external_links') or []:
        links.append(link.get('url') if isinstance(link, dict) else link)
    return Story(
        story_id=raw.get('id'),
        name=raw.get('name') or '',
        description=raw.get('description') or '',
        project_id=raw.get('project_id'),
        owner_ids=list(raw.get('owner_ids') or []),
        group_id=raw.get('group_id'),
        workflow_state_id=raw.get('workflow_state_id'),
        iteration_id=raw.get('iteration_id'),
        external_links=links,
        app_url=raw.get('app_url') or '',
    )


def pull_request_context(payload: Dict[str, Any]) -> PullRequestContext:
    """Build a PullRequestContext from a GitHub pull_request event payload."""
    pr = payload.get('pull_request') or {}
    repository = payload.get('repository') or {}
    return PullRequestContext(
        owner=(repository.get('owner') or {}).get('login') or '',
        repo=repository.get('name') or '',
        number=pr.get('number') or payload.get('number'),
        branch_name=(pr.get('head') or {}).get('ref') or '',
        body=pr.get('body'),
        author_login=(pr.get('user') or {}).get('login') or '',
        html_url=pr.get('html_url') or '',
        merged=bool(pr.get('merged')),
        label=(payload.get('label') or {}).get('name'),
        payload=payload,
    )
