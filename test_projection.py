#!/usr/bin/env python
"""Snapshot projection: categories, log-scale heights, summary text."""

import numpy as np
import pytest

from ping_monitor import constants
from ping_monitor.data import HistoryRing, Statistics
from ping_monitor.ping import Outcome
from ping_monitor.projection import Category, classify, format_summary, project, to_log_scale


def fill(outcomes, capacity=constants.NUM_HISTORY_ENTRIES):
    ring, stats = HistoryRing(capacity), Statistics()
    for o in outcomes:
        ring.record(o)
        stats.update(o)
    return ring, stats


def test_empty_projection_has_all_slots_without_data():
    ring, stats = fill([])
    snap = project(ring, stats, "/tmp/x.csv")

    assert len(snap.points) == constants.NUM_HISTORY_ENTRIES
    assert all(p.category is Category.NO_DATA for p in snap.points)
    assert snap.summary == (
        "0 packets sent, 0 received (0.000% lost)\n"
        "Min=-ms, Max=-ms, avg=0ms\n"
        "Log file /tmp/x.csv"
    )


@pytest.mark.parametrize(
    "success, rtt, expected",
    [
        (True, 0, Category.SUCCESS_FAST),
        (True, 50, Category.SUCCESS_FAST),
        (True, 51, Category.SUCCESS_SLOW),
        (True, 2999, Category.SUCCESS_SLOW),
        (False, 3000, Category.FAILURE),
        (False, 0, Category.FAILURE),
    ],
)
def test_classify(success, rtt, expected):
    assert classify(success, rtt) is expected


def test_log_scale_values():
    np.testing.assert_allclose(to_log_scale([0, 1, 10, 100]), [0, 0, 95, 190])
    assert to_log_scale(10**6) == constants.MAX_Y


def test_log_scale_is_monotonic():
    heights = to_log_scale(np.arange(0, 5000))
    assert np.all(np.diff(heights) >= 0)


def test_points_follow_ring_order_and_categories():
    outcomes = [Outcome(True, 10, 64), Outcome(True, 200, 64), Outcome.failed()]
    ring, stats = fill(outcomes)
    snap = project(ring, stats)

    assert [p.category for p in snap.points[:3]] == [
        Category.SUCCESS_FAST,
        Category.SUCCESS_SLOW,
        Category.FAILURE,
    ]
    assert snap.points[0].height == pytest.approx(95.0)
    assert snap.points[1].height == pytest.approx(95.0 * np.log10(200))
    assert snap.points[2].height == constants.MAX_Y
    assert snap.points[3].category is Category.NO_DATA
    assert [p.slot for p in snap.points] == list(range(constants.NUM_HISTORY_ENTRIES))


def test_wrapped_ring_puts_newest_last():
    outcomes = [Outcome(True, 10, 64)] * 4 + [Outcome.failed()]
    ring, stats = fill(outcomes, capacity=4)
    snap = project(ring, stats)

    assert len(snap.points) == 4
    assert snap.points[-1].category is Category.FAILURE
    assert all(p.category is Category.SUCCESS_FAST for p in snap.points[:-1])


def test_projection_does_not_mutate():
    ring, stats = fill([Outcome(True, 10, 64), Outcome.failed()])
    before = (ring.w_idx, ring.snapshot(), stats.snapshot())
    project(ring, stats)
    project(ring, stats)
    assert (ring.w_idx, ring.snapshot(), stats.snapshot()) == before


def test_heights_by_category():
    ring, stats = fill([Outcome(True, 10, 64), Outcome.failed(), Outcome(True, 100, 64)])
    snap = project(ring, stats)

    slots, heights = snap.heights(Category.SUCCESS_FAST)
    np.testing.assert_array_equal(slots, [0])
    slots, heights = snap.heights(Category.SUCCESS_SLOW)
    np.testing.assert_array_equal(slots, [2])
    np.testing.assert_allclose(heights, [190])


def test_summary_text():
    ring, stats = fill(
        [Outcome(True, rtt, 57) for rtt in [10, 20, 30, 40, 50, 60, 70]] + [Outcome.failed()] * 3
    )
    text = format_summary(stats.snapshot(), "log.csv")
    assert text == (
        "10 packets sent, 7 received (30.000% lost)\n"
        "Min=10ms, Max=70ms, avg=40ms\n"
        "Log file log.csv"
    )
