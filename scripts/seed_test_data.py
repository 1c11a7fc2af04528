#!/usr/bin/env python3
"""
Seed test data for verifying the dashboard locally.

Creates senders and processing runs covering the statuses the extraction
pipeline writes, including its legacy spellings ("succes", "error"), runs
without a sender, and enough rows to span several pages.

Usage:
    python scripts/seed_test_data.py              # seed 250 runs
    python scripts/seed_test_data.py --count 40   # seed 40 runs
    python scripts/seed_test_data.py --clear      # wipe seeded data first

Requires: RUNS_DATABASE_URL and RUNS_DATABASE_KEY set (any key works for SQLite).
"""
import sys
import os
import random
import argparse
from datetime import datetime, timezone, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from recipe_dashboard.config import ListingConfig
from recipe_dashboard.database import Base, create_store_engine, make_session_factory
from recipe_dashboard.models.processing_run import RecipeProcessingRun, Sender


# ── Fake senders ─────────────────────────────────────────────────────────────

SENDERS = [
    {'id': 'seed-user-1', 'name': 'Jane Morrison'},
    {'id': 'seed-user-2', 'name': 'Carlos Reyes'},
    {'id': 'seed-user-3', 'name': 'Priya Sharma'},
    {'id': 'seed-user-4', 'name': None},
]

PLATFORM_URLS = {
    'Instagram': 'https://instagram.com/reel/{}',
    'TikTok':    'https://tiktok.com/@chef/video/{}',
    'YouTube':   'https://youtube.com/watch?v={}',
}

# (status, error_message)
OUTCOMES = [
    ('succes', None),
    ('completed', None),
    ('processing', None),
    ('pending', None),
    ('error', 'Transcript download timed out'),
    ('failed', 'Unable to parse recipe content'),
    ('invalid_recipe', 'No ingredients found in caption or transcript'),
    ('insufficient_credits', 'Sender has no remaining credits'),
]

# Prefix for seeded run ids so we can clear them
SEED_PREFIX = 'seed-'


def seed_runs(session, count):
    """Insert `count` runs spread over the last 30 days."""
    rng = random.Random(42)
    now = datetime.now(timezone.utc)

    for sender in SENDERS:
        if session.get(Sender, sender['id']) is None:
            session.add(Sender(**sender))
    session.flush()

    for i in range(count):
        platform = rng.choice(list(PLATFORM_URLS))
        status, error_message = rng.choice(OUTCOMES)
        # Every fifth run has no sender
        user_id = None if i % 5 == 0 else rng.choice(SENDERS)['id']
        succeeded = status in ('succes', 'completed')

        session.add(RecipeProcessingRun(
            phone_number=f'+1555{rng.randint(1000000, 9999999)}',
            content_id=f'content_{i:05d}',
            platform=platform,
            url=PLATFORM_URLS[platform].format(rng.randint(100000, 999999)),
            status=status,
            recipe_id=rng.randint(1, 10000) if succeeded else None,
            error_message=error_message,
            created_at=now - timedelta(minutes=rng.randint(0, 30 * 24 * 60)),
            user_id=user_id,
            run_id=f'{SEED_PREFIX}{i:05d}',
            good_recipe=rng.choice([True, False, None]) if succeeded else None,
        ))

    print(f'  Seeded {count} runs across {len(SENDERS)} senders')


def clear_seeded_data(session):
    """Remove all seeded runs and senders."""
    deleted_runs = session.query(RecipeProcessingRun).filter(
        RecipeProcessingRun.run_id.like(f'{SEED_PREFIX}%')
    ).delete(synchronize_session=False)
    deleted_senders = session.query(Sender).filter(
        Sender.id.like(f'{SEED_PREFIX}%')
    ).delete(synchronize_session=False)
    session.commit()
    print(f'Cleared {deleted_runs} runs, {deleted_senders} senders.')


def main():
    parser = argparse.ArgumentParser(description='Seed recipe processing runs for UI verification')
    parser.add_argument('--count', type=int, default=250, help='Number of runs to seed')
    parser.add_argument('--clear', action='store_true', help='Clear seeded data before (or instead of) seeding')
    parser.add_argument('--clear-only', action='store_true', help='Only clear, do not re-seed')
    args = parser.parse_args()

    config = ListingConfig.from_env()
    if not config.store_configured:
        parser.error('RUNS_DATABASE_URL and RUNS_DATABASE_KEY must both be set')

    engine = create_store_engine(config.store_url, config.store_key)
    # Ensure tables exist (for SQLite local dev)
    Base.metadata.create_all(engine)

    session = make_session_factory(engine)()
    try:
        if args.clear or args.clear_only:
            clear_seeded_data(session)
            if args.clear_only:
                return

        print('Seeding test data...')
        seed_runs(session, args.count)
        session.commit()
        print('\nDone! Visit http://localhost:8080/ to verify.')

    except Exception as e:
        session.rollback()
        print(f'Error: {e}')
        raise
    finally:
        session.close()


if __name__ == '__main__':
    main()
