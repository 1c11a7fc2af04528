"""Tests for recipe_dashboard.services.dashboard_state — fetch cycle, paging, feedback."""
import copy
from unittest.mock import MagicMock

import pytest

from recipe_dashboard.services.dashboard_state import DashboardState, IDLE, LOADING, LOADED, FAILED
from recipe_dashboard.services.runs_client import RunsApiError


@pytest.fixture
def api(sample_page):
    """Mock RunsApiClient returning the sample page."""
    mock = MagicMock()
    mock.list_runs.return_value = copy.deepcopy(sample_page)
    return mock


@pytest.fixture
def loaded_state(api):
    state = DashboardState(api)
    assert state.load(1) is True
    return state


def _page(page, ids, total=250):
    return {
        'data': [{'id': i, 'status': 'pending', 'platform': 'Instagram'} for i in ids],
        'pagination': {'page': page, 'limit': 100, 'total': total, 'totalPages': 3},
    }


# ---------------------------------------------------------------------------
# Fetch cycle
# ---------------------------------------------------------------------------

class TestFetchCycle:
    """idle → loading → loaded | failed."""

    def test_starts_idle_and_empty(self, api):
        state = DashboardState(api)
        assert state.status == IDLE
        assert state.runs == []
        assert state.pagination['totalPages'] == 0

    def test_begin_fetch_enters_loading(self, api):
        state = DashboardState(api)
        state.begin_fetch(1)
        assert state.status == LOADING
        assert state.requested_page == 1

    def test_successful_load(self, loaded_state, sample_page):
        assert loaded_state.status == LOADED
        assert loaded_state.runs == sample_page['data']
        assert loaded_state.pagination == sample_page['pagination']
        assert loaded_state.error is None

    def test_load_replaces_page_wholesale(self, loaded_state, api):
        api.list_runs.return_value = _page(2, [201, 202])
        loaded_state.load(2)
        assert [r['id'] for r in loaded_state.runs] == [201, 202]
        assert loaded_state.pagination['page'] == 2

    def test_failure_preserves_last_good_data(self, loaded_state, api, sample_page):
        api.list_runs.side_effect = RunsApiError('relation "recipe_processing_run" does not exist', 500)

        assert loaded_state.refresh() is False
        assert loaded_state.status == FAILED
        assert loaded_state.error == 'relation "recipe_processing_run" does not exist'
        assert loaded_state.runs == sample_page['data']
        assert loaded_state.pagination == sample_page['pagination']

    @pytest.mark.parametrize('body', [
        ['not', 'a', 'page'],
        None,
        {'data': None, 'pagination': {}},
        {'data': [], 'pagination': 'page 1'},
    ])
    def test_malformed_body_fails_and_keeps_last_page(self, loaded_state, api, sample_page, body):
        api.list_runs.return_value = body

        assert loaded_state.refresh() is False
        assert loaded_state.status == FAILED
        assert loaded_state.error == 'Invalid response from runs API'
        assert loaded_state.runs == sample_page['data']
        assert loaded_state.pagination == sample_page['pagination']

    def test_retry_after_malformed_body(self, loaded_state, api):
        api.list_runs.return_value = 'oops'
        loaded_state.refresh()
        api.list_runs.return_value = _page(1, [7])
        assert loaded_state.retry() is True
        assert loaded_state.status == LOADED
        assert [r['id'] for r in loaded_state.runs] == [7]

    def test_retry_refetches_failed_page(self, loaded_state, api):
        api.list_runs.side_effect = RunsApiError('boom')
        loaded_state.change_page(3)
        assert loaded_state.status == FAILED
        assert loaded_state.pagination['page'] == 1

        api.list_runs.side_effect = None
        api.list_runs.return_value = _page(3, [301])
        assert loaded_state.retry() is True
        api.list_runs.assert_called_with(3)
        assert loaded_state.status == LOADED
        assert loaded_state.pagination['page'] == 3
        assert loaded_state.error is None

    def test_refresh_uses_current_page(self, loaded_state, api):
        loaded_state.refresh()
        api.list_runs.assert_called_with(1)

    def test_fetching_same_page_twice_is_stable(self, loaded_state):
        runs, pagination = copy.deepcopy(loaded_state.runs), dict(loaded_state.pagination)
        loaded_state.refresh()
        assert loaded_state.runs == runs
        assert loaded_state.pagination == pagination


class TestStaleResponses:
    """Only the response to the latest fetch is applied."""

    def test_stale_success_ignored(self, api):
        state = DashboardState(api)
        old = state.begin_fetch(1)
        new = state.begin_fetch(2)

        assert state.complete_fetch(new, _page(2, [201])) is True
        assert state.complete_fetch(old, _page(1, [101])) is False
        assert [r['id'] for r in state.runs] == [201]
        assert state.pagination['page'] == 2

    def test_stale_failure_ignored(self, api):
        state = DashboardState(api)
        old = state.begin_fetch(1)
        new = state.begin_fetch(2)
        state.complete_fetch(new, _page(2, [201]))

        assert state.fail_fetch(old, 'timeout') is False
        assert state.status == LOADED
        assert state.error is None

    def test_out_of_order_arrival(self, api):
        state = DashboardState(api)
        first = state.begin_fetch(1)
        second = state.begin_fetch(3)
        # second answers first, then the slow first response lands
        state.complete_fetch(second, _page(3, [301]))
        state.complete_fetch(first, _page(1, [101]))
        assert state.pagination['page'] == 3


# ---------------------------------------------------------------------------
# Paging
# ---------------------------------------------------------------------------

class TestChangePage:
    """Page changes outside [1, totalPages] are no-ops."""

    @pytest.mark.parametrize('page', [0, -1, 4])
    def test_out_of_range_is_noop(self, loaded_state, api, sample_page, page):
        api.list_runs.reset_mock()
        assert loaded_state.change_page(page) is False
        api.list_runs.assert_not_called()
        assert loaded_state.pagination == sample_page['pagination']
        assert loaded_state.runs == sample_page['data']

    def test_in_range_fetches(self, loaded_state, api):
        api.list_runs.return_value = _page(2, [201])
        assert loaded_state.change_page(2) is True
        api.list_runs.assert_called_with(2)
        assert loaded_state.pagination['page'] == 2

    def test_noop_before_first_load(self, api):
        state = DashboardState(api)
        assert state.change_page(1) is False
        api.list_runs.assert_not_called()


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------

class TestDerivedViews:

    def test_filtered_runs_follow_search_term(self, loaded_state):
        loaded_state.search_term = 'tiktok'
        assert [r['id'] for r in loaded_state.filtered_runs] == [2]

    def test_search_does_not_fetch(self, loaded_state, api):
        api.list_runs.reset_mock()
        loaded_state.search_term = 'youtube'
        loaded_state.filtered_runs
        api.list_runs.assert_not_called()

    def test_stats(self, loaded_state):
        stats = loaded_state.stats
        assert stats['total'] == 250
        assert stats['completed'] == 1
        assert stats['failed'] == 1
        assert stats['invalid_recipe'] == 1

    def test_page_numbers(self, loaded_state):
        assert loaded_state.page_numbers == [1, 2, 3]

    def test_result_range(self, loaded_state):
        assert loaded_state.result_range == (1, 100)


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------

class TestFeedback:

    def test_select_seeds_existing_feedback(self, loaded_state):
        assert loaded_state.select_run(1) == 'Great recipe extraction!'
        assert loaded_state.selected_run_id == 1

    def test_select_seeds_empty_when_none(self, loaded_state):
        assert loaded_state.select_run(2) == ''

    def test_select_unknown_run(self, loaded_state):
        with pytest.raises(KeyError):
            loaded_state.select_run(999)

    def test_submit_persists_and_replaces_run(self, loaded_state, api):
        saved = dict(loaded_state.runs[1], feedback='Wrong ingredients')
        api.update_feedback.return_value = saved

        loaded_state.select_run(2)
        assert loaded_state.submit_feedback('  Wrong ingredients ') is True

        api.update_feedback.assert_called_once_with(2, 'Wrong ingredients')
        assert loaded_state.runs[1]['feedback'] == 'Wrong ingredients'
        assert loaded_state.runs[0]['feedback'] == 'Great recipe extraction!'
        assert loaded_state.selected_run_id is None

    def test_blank_submit_ignored(self, loaded_state, api):
        loaded_state.select_run(2)
        assert loaded_state.submit_feedback('   ') is False
        api.update_feedback.assert_not_called()

    def test_submit_without_selection_ignored(self, loaded_state, api):
        assert loaded_state.submit_feedback('text') is False
        api.update_feedback.assert_not_called()

    def test_failed_submit_keeps_page(self, loaded_state, api):
        api.update_feedback.side_effect = RunsApiError('Run store is not configured; feedback cannot be saved', 503)
        loaded_state.select_run(2)

        assert loaded_state.submit_feedback('text') is False
        assert loaded_state.error == 'Run store is not configured; feedback cannot be saved'
        assert loaded_state.runs[1]['feedback'] is None
        assert loaded_state.selected_run_id == 2
