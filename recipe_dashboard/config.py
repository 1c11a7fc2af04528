"""
Centralized configuration — env vars, listing constants, status vocabulary.
"""
import os
from dataclasses import dataclass
from typing import Optional


# ── Dashboard client ─────────────────────────────────────────────────────────
RUNS_API_URL = os.getenv('RUNS_API_URL', 'http://localhost:8080')
RUNS_API_TIMEOUT = float(os.getenv('RUNS_API_TIMEOUT', '30'))

# ── Listing ──────────────────────────────────────────────────────────────────
PAGE_LIMIT = 100   # rows per page; not a request parameter
PAGE_WINDOW = 5    # page buttons shown by the pager

# ── Run status values ────────────────────────────────────────────────────────
RUN_STATUSES = [
    'pending',
    'processing',
    'completed',
    'failed',
    'invalid_recipe',
    'insufficient_credits',
]

# Spellings written by the extraction pipeline that mean a canonical status
STATUS_ALIASES = {
    'succes': 'completed',
    'success': 'completed',
    'error': 'failed',
}

# Per-status counters shown on the dashboard, in display order
SUMMARY_STATUSES = [
    'completed',
    'failed',
    'invalid_recipe',
    'insufficient_credits',
    'processing',
    'pending',
]


@dataclass(frozen=True)
class ListingConfig:
    """Connection settings for the run store.

    Both values must be present for the listing service to query the store;
    otherwise it serves the built-in fixture runs. Read from RUNS_DATABASE_URL
    and RUNS_DATABASE_KEY when the app is created, never at import.
    """
    store_url: Optional[str] = None
    store_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'ListingConfig':
        return cls(
            store_url=os.getenv('RUNS_DATABASE_URL') or None,
            store_key=os.getenv('RUNS_DATABASE_KEY') or None,
        )

    @property
    def store_configured(self) -> bool:
        return bool(self.store_url) and bool(self.store_key)
