"""
Flask application factory.

Creates and configures the Flask app, builds the run listing service once
from its configuration, registers all blueprints.
"""
import os
from datetime import datetime, timezone
from flask import Flask


def _time_since(iso_str):
    """Jinja2 filter: convert ISO timestamp to '2m ago' style string."""
    if not iso_str:
        return '-'
    try:
        if isinstance(iso_str, str):
            dt = datetime.fromisoformat(iso_str.replace('Z', '+00:00'))
        else:
            dt = iso_str
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        diff = (datetime.now(timezone.utc) - dt).total_seconds()
        if diff < 60:
            return 'just now'
        if diff < 3600:
            return f'{int(diff // 60)}m ago'
        if diff < 86400:
            return f'{int(diff // 3600)}h ago'
        return f'{int(diff // 86400)}d ago'
    except (TypeError, ValueError):
        return '-'


def create_app(listing_config=None, listing_service=None):
    """
    Create and configure the Flask application.

    listing_config defaults to ListingConfig.from_env(). A ready-made
    listing_service takes precedence over the config (used by tests).
    """
    from recipe_dashboard.config import ListingConfig
    from recipe_dashboard.logging_config import configure_logging
    from recipe_dashboard.services.run_listing import RunListingService
    from recipe_dashboard.services.run_views import format_cell, search_text

    app = Flask(
        __name__,
        template_folder=os.path.join(os.path.dirname(os.path.dirname(__file__)), 'templates'),
        static_folder=os.path.join(os.path.dirname(os.path.dirname(__file__)), 'static'),
    )

    configure_logging(app)

    app.secret_key = os.getenv('SECRET_KEY', 'dev-secret-change-me')

    app.jinja_env.filters['time_since'] = _time_since
    app.jinja_env.filters['cell'] = format_cell
    app.jinja_env.filters['search_text'] = search_text

    if listing_service is None:
        listing_service = RunListingService.from_config(listing_config or ListingConfig.from_env())
    app.extensions['run_listing'] = listing_service

    # Register blueprints
    from recipe_dashboard.routes.dashboard import bp as dashboard_bp
    from recipe_dashboard.routes.runs import bp as runs_bp

    app.register_blueprint(dashboard_bp)
    app.register_blueprint(runs_bp)

    return app
