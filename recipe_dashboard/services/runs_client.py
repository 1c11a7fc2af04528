"""
HTTP client for the runs API — used by DashboardState.

Every request carries a timeout. Failures surface as RunsApiError with a
message suitable for the dashboard's error banner.
"""
import logging
from typing import Any, Dict, Optional

import requests

from recipe_dashboard.config import RUNS_API_URL, RUNS_API_TIMEOUT

logger = logging.getLogger('services.runs_client')


class RunsApiError(Exception):
    """A runs API call failed (transport error or non-2xx response)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RunsApiClient:
    def __init__(self, base_url: str = None, timeout: float = None, session: requests.Session = None):
        self.base_url = (base_url or RUNS_API_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else RUNS_API_TIMEOUT
        self.session = session or requests.Session()

    def list_runs(self, page: int = 1) -> Dict[str, Any]:
        """GET /api/runs?page=N → {data, pagination}."""
        return self._request('GET', '/api/runs', params={'page': page})

    def get_run(self, run_id: int) -> Dict[str, Any]:
        return self._request('GET', f'/api/runs/{run_id}')

    def update_feedback(self, run_id: int, feedback: str) -> Dict[str, Any]:
        """PATCH /api/runs/<id>/feedback → updated run."""
        return self._request('PATCH', f'/api/runs/{run_id}/feedback', json={'feedback': feedback})

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f'{self.base_url}{path}'
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise RunsApiError(f"Failed to fetch data: {e}") from e

        if not resp.ok:
            message = _error_message(resp)
            logger.error("%s %s returned %d: %s", method, path, resp.status_code, message)
            raise RunsApiError(message, status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise RunsApiError(f"Invalid JSON from {path}", status_code=resp.status_code) from e


def _error_message(resp) -> str:
    """Prefer the API's {"error": ...} message; fall back to the status code."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get('error'):
        return str(body['error'])
    return f"HTTP error! status: {resp.status_code}"
