"""
Dashboard state — the held page of runs and its fetch cycle.

One page is held at a time and replaced wholesale on every successful
load. Fetches are ticketed: only the response to the most recently issued
fetch is applied, so a slow response for an older page cannot overwrite a
newer one.

States: idle → loading → loaded | failed. A failed fetch keeps the last
good runs and pagination and records the error for the retry banner.
"""
import threading
from typing import Any, Dict, List, Optional, Tuple

from recipe_dashboard.config import PAGE_LIMIT
from recipe_dashboard.services.run_views import filter_runs, summarize_statuses, page_window, result_range
from recipe_dashboard.services.runs_client import RunsApiError

IDLE = 'idle'
LOADING = 'loading'
LOADED = 'loaded'
FAILED = 'failed'

MALFORMED_PAGE = 'Invalid response from runs API'


def _is_page(payload) -> bool:
    return (
        isinstance(payload, dict)
        and isinstance(payload.get('data'), list)
        and isinstance(payload.get('pagination'), dict)
    )


class DashboardState:
    def __init__(self, client, page: int = 1):
        self.client = client
        self.runs: List[Dict[str, Any]] = []
        self.pagination: Dict[str, int] = {'page': page, 'limit': PAGE_LIMIT, 'total': 0, 'totalPages': 0}
        self.status = IDLE
        self.error: Optional[str] = None
        self.requested_page = page
        self.search_term = ''
        self.selected_run_id: Optional[int] = None
        self._seq = 0
        self._lock = threading.Lock()

    # ── Fetch cycle ──────────────────────────────────────────────────────────

    def begin_fetch(self, page: int) -> int:
        """Enter loading for `page` and return the ticket for this fetch."""
        with self._lock:
            self._seq += 1
            self.status = LOADING
            self.error = None
            self.requested_page = page
            return self._seq

    def complete_fetch(self, ticket: int, payload: Dict[str, Any]) -> bool:
        """Apply a successful response. Returns False if the ticket is stale."""
        with self._lock:
            if ticket != self._seq:
                return False
            self.runs = list(payload.get('data') or [])
            self.pagination = dict(payload.get('pagination') or {})
            self.status = LOADED
            self.error = None
            return True

    def fail_fetch(self, ticket: int, message: str) -> bool:
        """Record a failed fetch, keeping the last good data. False if stale."""
        with self._lock:
            if ticket != self._seq:
                return False
            self.status = FAILED
            self.error = message or 'Failed to fetch data'
            return True

    def load(self, page: Optional[int] = None) -> bool:
        """Fetch `page` (default: the current page) and apply the result."""
        if page is None:
            page = self.pagination.get('page', 1)
        ticket = self.begin_fetch(page)
        try:
            payload = self.client.list_runs(page)
        except RunsApiError as e:
            self.fail_fetch(ticket, e.message)
            return False
        if not _is_page(payload):
            self.fail_fetch(ticket, MALFORMED_PAGE)
            return False
        return self.complete_fetch(ticket, payload)

    def refresh(self) -> bool:
        return self.load(self.pagination.get('page', 1))

    def retry(self) -> bool:
        """Re-run the fetch that last failed."""
        return self.load(self.requested_page)

    def change_page(self, page: int) -> bool:
        """Load `page`; a no-op outside [1, totalPages]."""
        if page < 1 or page > self.pagination.get('totalPages', 0):
            return False
        return self.load(page)

    # ── Derived views ────────────────────────────────────────────────────────

    @property
    def filtered_runs(self) -> List[Dict[str, Any]]:
        return filter_runs(self.runs, self.search_term)

    @property
    def stats(self) -> Dict[str, int]:
        return summarize_statuses(self.runs, self.pagination)

    @property
    def page_numbers(self) -> List[int]:
        return page_window(self.pagination.get('page', 1), self.pagination.get('totalPages', 0))

    @property
    def result_range(self) -> Tuple[int, int]:
        return result_range(self.pagination)

    # ── Feedback ─────────────────────────────────────────────────────────────

    def select_run(self, run_id: int) -> str:
        """Select a run for feedback and return the text to seed the editor with."""
        run = self._find(run_id)
        if run is None:
            raise KeyError(run_id)
        self.selected_run_id = run_id
        return run.get('feedback') or ''

    def submit_feedback(self, text: str) -> bool:
        """Save feedback for the selected run and swap the saved record into the held page."""
        if self.selected_run_id is None or not (text or '').strip():
            return False
        try:
            updated = self.client.update_feedback(self.selected_run_id, text.strip())
        except RunsApiError as e:
            self.error = e.message
            return False

        with self._lock:
            self.runs = [updated if run.get('id') == updated.get('id') else run for run in self.runs]
            self.selected_run_id = None
        return True

    def _find(self, run_id: int) -> Optional[Dict[str, Any]]:
        for run in self.runs:
            if run.get('id') == run_id:
                return run
        return None
