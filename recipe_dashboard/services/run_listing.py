"""
Run listing — paginated reads over recipe_processing_run.

Serves from the run store when one is configured, otherwise from the
built-in fixture runs. The mode is fixed when the service is constructed;
both modes return the same response shape.
"""
import copy
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from recipe_dashboard.config import PAGE_LIMIT
from recipe_dashboard.models.processing_run import RecipeProcessingRun
from recipe_dashboard.services.fixtures import FIXTURE_RUNS

logger = logging.getLogger('services.run_listing')


class StoreQueryError(Exception):
    """The run store rejected or failed a query. Terminal for the request."""


class InvalidPageError(ValueError):
    """Requested page is not a positive integer."""


class RunNotFoundError(LookupError):
    """No run with the requested id."""


class FeedbackNotSupportedError(RuntimeError):
    """Feedback cannot be saved because no run store is configured."""


@dataclass
class RunPage:
    """One page of runs plus pagination metadata."""
    data: List[Dict[str, Any]]
    pagination: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {'data': self.data, 'pagination': self.pagination}


def parse_page(raw) -> int:
    """Parse the ?page= query value. Missing or empty means page 1."""
    if raw is None or str(raw).strip() == '':
        return 1
    try:
        page = int(str(raw).strip())
    except ValueError:
        raise InvalidPageError(f"page must be a positive integer, got {raw!r}")
    if page < 1:
        raise InvalidPageError(f"page must be a positive integer, got {raw!r}")
    return page


def build_pagination(page: int, total: int, limit: int = PAGE_LIMIT) -> Dict[str, int]:
    """Pagination block for a response. totalPages is 0 when total is 0."""
    return {
        'page': page,
        'limit': limit,
        'total': total,
        'totalPages': math.ceil(total / limit),
    }


class RunListingService:
    """
    Read access to processing runs, plus the feedback write.

    Pass a session factory to query the run store; pass None to serve the
    fixture runs.
    """

    def __init__(self, session_factory=None, fixtures: Optional[List[Dict[str, Any]]] = None):
        self._session_factory = session_factory
        self._fixtures = fixtures if fixtures is not None else FIXTURE_RUNS

    @classmethod
    def from_config(cls, config):
        """Build the service for a ListingConfig, choosing store or fixture mode once."""
        if not config.store_configured:
            logger.warning("Run store not configured — serving built-in fixture runs")
            return cls()

        from recipe_dashboard.database import create_store_engine, make_session_factory
        engine = create_store_engine(config.store_url, config.store_key)
        logger.info("Run store configured (%s)", engine.url.render_as_string(hide_password=True))
        return cls(session_factory=make_session_factory(engine))

    @property
    def mode(self) -> str:
        return 'store' if self._session_factory is not None else 'fixture'

    # ── Reads ────────────────────────────────────────────────────────────────

    def list_runs(self, page: int = 1) -> RunPage:
        """Return page `page` (1-indexed) of runs, newest first."""
        if page < 1:
            raise InvalidPageError(f"page must be a positive integer, got {page!r}")

        offset = (page - 1) * PAGE_LIMIT

        if self._session_factory is None:
            total = len(self._fixtures)
            data = copy.deepcopy(self._fixtures[offset:offset + PAGE_LIMIT])
            return RunPage(data=data, pagination=build_pagination(page, total))

        session = self._session_factory()
        try:
            total = session.query(func.count(RecipeProcessingRun.id)).scalar() or 0
            rows = (
                session.query(RecipeProcessingRun)
                .order_by(RecipeProcessingRun.created_at.desc(), RecipeProcessingRun.id.desc())
                .offset(offset)
                .limit(PAGE_LIMIT)
                .all()
            )
            data = [row.to_dict() for row in rows]
        except SQLAlchemyError as e:
            logger.error("Failed to list runs (page %d)", page, exc_info=True)
            raise StoreQueryError(str(e)) from e
        finally:
            session.close()

        logger.debug("Listed %d runs for page %d of %d total", len(data), page, total)
        return RunPage(data=data, pagination=build_pagination(page, total))

    def get_run(self, run_id: int) -> Dict[str, Any]:
        """Return a single run by id."""
        if self._session_factory is None:
            for run in self._fixtures:
                if run['id'] == run_id:
                    return copy.deepcopy(run)
            raise RunNotFoundError(f"Run {run_id} not found")

        session = self._session_factory()
        try:
            row = session.get(RecipeProcessingRun, run_id)
            if row is None:
                raise RunNotFoundError(f"Run {run_id} not found")
            return row.to_dict()
        except SQLAlchemyError as e:
            logger.error("Failed to load run %s", run_id, exc_info=True)
            raise StoreQueryError(str(e)) from e
        finally:
            session.close()

    # ── Writes ───────────────────────────────────────────────────────────────

    def update_feedback(self, run_id: int, feedback: str) -> Dict[str, Any]:
        """Persist operator feedback for a run and return the updated run."""
        if not isinstance(feedback, str) or not feedback.strip():
            raise ValueError("feedback must be a non-empty string")

        if self._session_factory is None:
            raise FeedbackNotSupportedError("Run store is not configured; feedback cannot be saved")

        session = self._session_factory()
        try:
            row = session.get(RecipeProcessingRun, run_id)
            if row is None:
                raise RunNotFoundError(f"Run {run_id} not found")
            row.feedback = feedback.strip()
            session.commit()
            logger.info("Saved feedback for run %s", run_id)
            return row.to_dict()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Failed to save feedback for run %s", run_id, exc_info=True)
            raise StoreQueryError(str(e)) from e
        finally:
            session.close()
