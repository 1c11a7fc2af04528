"""
Runs API — paginated listing, single run detail, feedback write.
"""
import logging
from flask import Blueprint, current_app, jsonify, request

from recipe_dashboard.services.run_listing import (
    parse_page,
    InvalidPageError,
    StoreQueryError,
    RunNotFoundError,
    FeedbackNotSupportedError,
)

logger = logging.getLogger('routes.runs')

bp = Blueprint('runs', __name__)


def listing_service():
    return current_app.extensions['run_listing']


@bp.route('/api/runs')
def list_runs():
    """List one page (100 rows) of processing runs, newest first."""
    try:
        page = parse_page(request.args.get('page'))
        result = listing_service().list_runs(page)
        return jsonify(result.to_dict())

    except InvalidPageError as e:
        return jsonify({'error': str(e)}), 400
    except StoreQueryError as e:
        return jsonify({'error': str(e)}), 500
    except Exception:
        logger.error("Unexpected error listing runs", exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500


@bp.route('/api/runs/<int:run_id>')
def get_run(run_id):
    """Get a single run."""
    try:
        return jsonify(listing_service().get_run(run_id))

    except RunNotFoundError:
        return jsonify({'error': 'Run not found'}), 404
    except StoreQueryError as e:
        return jsonify({'error': str(e)}), 500


@bp.route('/api/runs/<int:run_id>/feedback', methods=['PATCH', 'POST'])
def update_feedback(run_id):
    """Save operator feedback for a run. Accepts JSON or form data."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    feedback = data.get('feedback')

    if not isinstance(feedback, str) or not feedback.strip():
        return jsonify({'error': 'feedback must be a non-empty string'}), 400

    try:
        return jsonify(listing_service().update_feedback(run_id, feedback))

    except RunNotFoundError:
        return jsonify({'error': 'Run not found'}), 404
    except FeedbackNotSupportedError as e:
        return jsonify({'error': str(e)}), 503
    except StoreQueryError as e:
        return jsonify({'error': str(e)}), 500
