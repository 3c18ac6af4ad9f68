"""
Minimal GitHub REST client for the pull request side of the sync: user lookup and issue comments.
"""
from typing import List, Dict, Any, Optional
from errors import RemoteRequestError
from ingest.http import perform_request

GITHUB_API_URL = "https://api.github.com"


class GitHubClient:
    """Simple GitHub client to look up users and read/write pull request comments."""

    def __init__(self, token: str, base_url: str = None):
        self.token = token
        self.base_url = (base_url or GITHUB_API_URL).rstrip('/')
        self.headers = {
            "Authorization": f"Bearer {self.token}" if self.token else "",
            "Accept": "application/vnd.github+json",
        }

    def get_user(self, username: str) -> Dict[str, Any]:
        """Return the public profile for a user. Raises RemoteRequestError on a non-200 response."""
        url = f"{self.base_url}/users/{username}"
        res = perform_request('GET', url, headers=self.headers)
        status = res.get('status', 0)
        if status != 200:
            raise RemoteRequestError(status, url, body=res.get('response'))
        return res.get('response') or {}

    def get_user_email(self, username: str) -> Optional[str]:
        """Return the user's public email, or None when the profile does not expose one."""
        return self.get_user(username).get('email') or None

    def list_comments(self, owner: str, repo: str, issue_number: int) -> Dict[str, Any]:
        """Fetch the first page of comments on an issue or pull request.

        Returns {'status': int, 'data': list}; the status is passed through so callers decide how to treat failures.
        """
        url = self.comments_endpoint(owner, repo, issue_number)
        res = perform_request('GET', url, headers=self.headers)
        status = res.get('status', 0)
        data: List[Dict[str, Any]] = res.get('response') if status == 200 and isinstance(res.get('response'), list) else []
        return {'status': status, 'data': data}

    def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> Dict[str, Any]:
        """Post a comment. Returns {'status': int, 'data': dict}."""
        url = self.comments_endpoint(owner, repo, issue_number)
        res = perform_request('POST', url, headers=self.headers, json_body={'body': body})
        return {'status': res.get('status', 0), 'data': res.get('response')}

    def comments_endpoint(self, owner: str, repo: str, issue_number: int) -> str:
        return f"{self.base_url}/repos/{owner}/{repo}/issues/{issue_number}/comments"
