"""
Single-attempt HTTP helper shared by the GitHub and Shortcut clients.
Every call is attempted exactly once; transport exceptions are converted into a status-0 result
so callers decide whether the failure is fatal.
"""

import time
from typing import Optional, Dict, Any
import requests

DEFAULT_TIMEOUT = 30.0


def _parse_body(resp):
    try:
        return resp.json()
    except Exception:
        return getattr(resp, 'text', None)


def perform_request(
    method: str,
    url: str,
    headers: Dict[str, str] = None,
    params: Dict[str, Any] = None,
    json_body: Any = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT,
) -> Dict[str, Any]:
    """Issue one request and return {'response', 'status', 'timestamp'}.

    On a transport error the result carries status 0 and the exception text as the response.
    """
    try:
        resp = requests.request(method, url, headers=headers or {}, params=params or {}, json=json_body, timeout=timeout)
    except requests.RequestException as ex:
        return {'response': str(ex), 'status': 0, 'timestamp': time.time()}

    status = getattr(resp, 'status_code', 0)
    return {'response': _parse_body(resp), 'status': status, 'timestamp': time.time()}


def is_success(status: int) -> bool:
    return 200 <= int(status or 0) < 300


__all__ = ["perform_request", "is_success", "DEFAULT_TIMEOUT"]
