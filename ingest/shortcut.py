"""
Shortcut REST v3 client used by the story sync pipeline.
Methods return raw JSON dicts/lists; any non-success status raises RemoteRequestError carrying the status and endpoint.
"""

import json
from typing import List, Dict, Any
from errors import RemoteRequestError
from ingest.http import perform_request, is_success

SHORTCUT_API_URL = "https://api.app.shortcut.com/api/v3"


class ShortcutClient:
    """Minimal Shortcut client covering members, projects, groups, teams, iterations and stories.

    The token travels in the Shortcut-Token header, so endpoints reported in errors never contain it.
    """

    def __init__(self, token: str, base_url: str = None):
        self.token = token
        self.base_url = (base_url or SHORTCUT_API_URL).rstrip('/')
        self.headers = {
            "Shortcut-Token": self.token or "",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _request(self, method: str, path: str, json_body: Any = None, detail: str = '') -> Any:
        url = f"{self.base_url}{path}"
        res = perform_request(method, url, headers=self.headers, json_body=json_body)
        status = res.get('status', 0)
        data = res.get('response')
        if not is_success(status) or data in (None, ''):
            raise RemoteRequestError(status, url, body=data, detail=detail)
        return data

    def list_members(self) -> List[Dict[str, Any]]:
        return self._request('GET', '/members')

    def list_projects(self) -> List[Dict[str, Any]]:
        return self._request('GET', '/projects')

    def get_project(self, project_id) -> Dict[str, Any]:
        return self._request('GET', f'/projects/{project_id}')

    def list_groups(self) -> List[Dict[str, Any]]:
        return self._request('GET', '/groups')

    def get_team(self, team_id) -> Dict[str, Any]:
        return self._request('GET', f'/teams/{team_id}')

    def list_iterations(self) -> List[Dict[str, Any]]:
        return self._request('GET', '/iterations')

    def get_story(self, story_id) -> Dict[str, Any]:
        return self._request('GET', f'/stories/{story_id}')

    def create_story(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """POST a new story. The request body is echoed in the error so the failed payload shows up in the run log."""
        return self._request('POST', '/stories', json_body=body, detail=json.dumps(body))

    def update_story(self, story_id, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._request('PUT', f'/stories/{story_id}', json_body=body)
