"""
Tests for redraw coalescing.
"""
import os
import sys

# Add the src directory to the path if not already installed
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import pytest
from radiation_pattern import RedrawScheduler


def _make_scheduler(callback=None):
    calls = []
    queue = []
    scheduler = RedrawScheduler(callback or (lambda: calls.append(1)), queue.append)
    return scheduler, calls, queue


def test_requests_coalesce_into_one_pass():
    """Any number of requests before the tick run the callback once."""
    scheduler, calls, queue = _make_scheduler()

    assert scheduler.request() is True
    assert scheduler.request() is False
    assert scheduler.request() is False
    assert len(queue) == 1
    assert scheduler.pending

    queue.pop()()

    assert calls == [1]
    assert scheduler.runs == 1
    assert scheduler.coalesced == 2
    assert not scheduler.pending


def test_request_after_run_schedules_again():
    scheduler, calls, queue = _make_scheduler()

    scheduler.request()
    queue.pop()()
    assert scheduler.request() is True
    queue.pop()()

    assert calls == [1, 1]


def test_failed_pass_clears_pending():
    """An exception in the callback propagates and does not block later passes."""
    def failing():
        raise RuntimeError("boom")

    scheduler, _, queue = _make_scheduler(failing)
    scheduler.request()

    with pytest.raises(RuntimeError):
        queue.pop()()

    assert not scheduler.pending
    assert scheduler.runs == 0
    assert scheduler.request() is True
