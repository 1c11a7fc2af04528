"""
Dashboard routes — Home page, health check, HTMX partials.
"""
import logging
from flask import Blueprint, current_app, jsonify, render_template, request

from recipe_dashboard.services.run_listing import (
    parse_page,
    InvalidPageError,
    StoreQueryError,
    RunNotFoundError,
)
from recipe_dashboard.services.run_views import (
    normalize_status,
    page_window,
    result_range,
    summarize_statuses,
)

logger = logging.getLogger('routes.dashboard')

bp = Blueprint('dashboard', __name__)

STATUS_BADGE = {
    'completed': 'bg-green-100 text-green-800',
    'processing': 'bg-blue-100 text-blue-800',
    'pending': 'bg-yellow-100 text-yellow-800',
    'failed': 'bg-red-100 text-red-800',
    'invalid_recipe': 'bg-orange-100 text-orange-800',
    'insufficient_credits': 'bg-purple-100 text-purple-800',
}


@bp.app_template_global()
def status_badge(status):
    return STATUS_BADGE.get(normalize_status(status), 'bg-gray-100 text-gray-800')


@bp.route('/')
def index():
    """Runs dashboard."""
    return render_template('dashboard.html')


@bp.route('/health')
def health_check():
    """Health check endpoint."""
    return jsonify({"status": "healthy", "mode": current_app.extensions['run_listing'].mode}), 200


def _error_partial(error, status, swap_into, retry_url, retry_target):
    """
    Retry banner for a failed partial.

    htmx drops 4xx/5xx bodies unless told otherwise; the shell's beforeSwap
    handler swaps any error response that names its own HX-Retarget.
    """
    html = render_template(
        'partials/error_banner.html',
        error=error,
        retry_url=retry_url,
        retry_target=retry_target,
    )
    return html, status, {'HX-Retarget': swap_into, 'HX-Reswap': 'innerHTML'}


@bp.route('/partials/runs-table')
def runs_table_partial():
    """HTMX partial: KPI cards, runs table and pager for one page.

    Errors go to #runs-error so the last good table stays in #runs-panel.
    """
    try:
        page = parse_page(request.args.get('page'))
    except InvalidPageError as e:
        return _error_partial(str(e), 400, '#runs-error', '/partials/runs-table?page=1', '#runs-panel')

    try:
        result = current_app.extensions['run_listing'].list_runs(page)
    except StoreQueryError as e:
        logger.warning("Runs table page %d failed: %s", page, e)
        return _error_partial(
            str(e), 500, '#runs-error', f'/partials/runs-table?page={page}', '#runs-panel',
        )

    first, last = result_range(result.pagination)
    return render_template(
        'partials/runs_table.html',
        runs=result.data,
        stats=summarize_statuses(result.data, result.pagination),
        pagination=result.pagination,
        pages=page_window(page, result.pagination['totalPages']),
        first=first,
        last=last,
    )


@bp.route('/partials/run-detail/<int:run_id>')
def run_detail_partial(run_id):
    """HTMX partial: run detail with feedback form."""
    try:
        run = current_app.extensions['run_listing'].get_run(run_id)
    except RunNotFoundError:
        html = '<div class="text-center py-8 text-sm" style="color:#f65c4e;">Run not found</div>'
        return html, 404, {'HX-Retarget': '#run-detail'}
    except StoreQueryError as e:
        logger.warning("Run detail %d failed: %s", run_id, e)
        detail_url = f'/partials/run-detail/{run_id}'
        return _error_partial(str(e), 500, '#run-detail', detail_url, '#run-detail')
    return render_template('partials/run_detail.html', run=run)
