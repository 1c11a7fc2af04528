"""Shared test fixtures."""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from recipe_dashboard.config import ListingConfig
from recipe_dashboard.database import Base, make_session_factory


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with schema created."""
    engine = create_engine('sqlite:///:memory:')
    import recipe_dashboard.models.processing_run
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """SQLAlchemy session bound to in-memory SQLite. Rolls back after each test."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def store_service(db_engine):
    """RunListingService in store mode, backed by the in-memory engine."""
    from recipe_dashboard.services.run_listing import RunListingService
    return RunListingService(session_factory=make_session_factory(db_engine))


@pytest.fixture
def fixture_service():
    """RunListingService with no store configured."""
    from recipe_dashboard.services.run_listing import RunListingService
    return RunListingService.from_config(ListingConfig())


@pytest.fixture
def app():
    """Flask test app in fixture mode (no run store configured)."""
    from recipe_dashboard import create_app
    app = create_app(listing_config=ListingConfig())
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c


@pytest.fixture
def store_app(store_service):
    """Flask test app in store mode."""
    from recipe_dashboard import create_app
    app = create_app(listing_service=store_service)
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def store_client(store_app):
    with store_app.test_client() as c:
        yield c


@pytest.fixture
def make_processing_run(db_session):
    """Factory fixture — inserts a RecipeProcessingRun row and commits."""
    from recipe_dashboard.models.processing_run import RecipeProcessingRun

    base_time = datetime(2026, 1, 15, 10, 0, tzinfo=timezone.utc)
    counter = {'n': 0}

    def _make(**overrides):
        counter['n'] += 1
        n = counter['n']
        defaults = dict(
            phone_number=f'+1555000{n:04d}',
            content_id=f'content_{n}',
            platform='Instagram',
            url=f'https://instagram.com/reel/{n}',
            status='pending',
            created_at=base_time + timedelta(minutes=n),
            run_id=f'run_{n}',
        )
        defaults.update(overrides)
        row = RecipeProcessingRun(**defaults)
        db_session.add(row)
        db_session.commit()
        return row
    return _make


@pytest.fixture
def sample_page():
    """A loaded page payload as returned by GET /api/runs."""
    return {
        'data': [
            {'id': 1, 'phone_number': '+1234567890', 'platform': 'Instagram',
             'url': 'https://instagram.com/recipe/123', 'status': 'succes',
             'feedback': 'Great recipe extraction!', 'sender': {'id': 'u1', 'name': 'Jane'}},
            {'id': 2, 'phone_number': '+1987654321', 'platform': 'TikTok',
             'url': 'https://tiktok.com/@chef/video/789', 'status': 'error',
             'feedback': None, 'sender': None},
            {'id': 3, 'phone_number': '+1555123456', 'platform': 'YouTube',
             'url': 'https://youtube.com/watch?v=recipe123', 'status': 'invalid_recipe',
             'feedback': None, 'sender': None},
        ],
        'pagination': {'page': 1, 'limit': 100, 'total': 250, 'totalPages': 3},
    }
