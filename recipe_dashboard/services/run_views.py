"""
Derived views over a loaded page of runs — search, status counters, pager.

Pure functions shared by the HTMX partials and DashboardState. They only
ever see the rows of the current page, never the whole dataset.
"""
from typing import Any, Dict, List, Optional, Tuple

from recipe_dashboard.config import PAGE_WINDOW, RUN_STATUSES, STATUS_ALIASES, SUMMARY_STATUSES

SEARCH_FIELDS = ('phone_number', 'platform', 'url', 'status')


def normalize_status(raw: Optional[str]) -> Optional[str]:
    """Map a stored status onto the canonical vocabulary, or None if unknown."""
    if not raw:
        return None
    value = str(raw).strip().lower()
    value = STATUS_ALIASES.get(value, value)
    return value if value in RUN_STATUSES else None


def search_text(run: Dict[str, Any]) -> str:
    """Lowercased searchable fields, one per line; the table rows carry this for in-page filtering."""
    return '\n'.join(str(run[key]).lower() for key in SEARCH_FIELDS if run.get(key) is not None)


def filter_runs(runs: List[Dict[str, Any]], term: Optional[str]) -> List[Dict[str, Any]]:
    """Case-insensitive substring match against phone number, platform, url or status."""
    needle = (term or '').strip().lower()
    if not needle:
        return list(runs)
    return [run for run in runs if needle in search_text(run)]


def summarize_statuses(runs: List[Dict[str, Any]], pagination: Dict[str, int]) -> Dict[str, int]:
    """
    Dashboard KPI counters.

    `total` is the dataset-wide count from pagination; every other counter
    covers only the runs on the loaded page.
    """
    stats = {'total': pagination.get('total', 0)}
    for status in SUMMARY_STATUSES:
        stats[status] = 0
    stats['other'] = 0

    for run in runs:
        status = normalize_status(run.get('status'))
        if status in stats:
            stats[status] += 1
        else:
            stats['other'] += 1
    return stats


def page_window(page: int, total_pages: int, size: int = PAGE_WINDOW) -> List[int]:
    """Page numbers for the pager: at most `size`, centered on page, clamped to [1, total_pages]."""
    if total_pages < 1:
        return []
    count = min(size, total_pages)
    start = max(1, min(total_pages - size + 1, page - size // 2))
    return list(range(start, start + count))


def result_range(pagination: Dict[str, int]) -> Tuple[int, int]:
    """(first, last) 1-based row numbers shown on the current page."""
    total = pagination.get('total', 0)
    if total <= 0:
        return 0, 0
    page = pagination.get('page', 1)
    limit = pagination.get('limit', 1)
    first = (page - 1) * limit + 1
    return min(first, total), min(page * limit, total)


def format_cell(value) -> str:
    """Placeholder for absent fields."""
    if value is None or value == '':
        return '-'
    return str(value)
