"""Turn ring + statistics into something a view can draw.

Nothing in here mutates the ring or the statistics; callers hold the session
lock while projecting.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from . import constants


class Category(Enum):
    NO_DATA = "no_data"
    SUCCESS_FAST = "success_fast"
    SUCCESS_SLOW = "success_slow"
    FAILURE = "failure"


@dataclass(frozen=True)
class DisplayPoint:
    slot: int
    category: Category
    height: float


@dataclass(frozen=True)
class RenderSnapshot:
    points: tuple
    summary: str
    num_sent: int
    num_received: int
    pct_lost: float

    def heights(self, category):
        """(slots, heights) of every point in `category`, as numpy arrays."""
        slots = [p.slot for p in self.points if p.category is category]
        heights = [p.height for p in self.points if p.category is category]
        return np.asarray(slots, dtype=float), np.asarray(heights, dtype=float)


def to_log_scale(rtt_millis, max_extent=constants.MAX_Y):
    """log10 mapping used for bar heights, clamped to [0, max_extent].

    Anything under 1 ms maps to 0.
    """
    values = np.maximum(np.asarray(rtt_millis, dtype=float), 1.0)
    return np.minimum(constants.LOG_SCALE * np.log10(values), max_extent)


def classify(success, rtt_millis, threshold=constants.MAX_GREEN_PING_MS):
    if not success:
        return Category.FAILURE
    if rtt_millis <= threshold:
        return Category.SUCCESS_FAST
    return Category.SUCCESS_SLOW


def format_summary(stats_snapshot, log_file_path):
    s = stats_snapshot
    if s["num_received"]:
        min_text, max_text = str(s["min_time"]), str(s["max_time"])
    else:
        min_text = max_text = "-"
    return (
        f"{s['num_sent']} packets sent, {s['num_received']} received ({s['pct_lost']:.3f}% lost)\n"
        f"Min={min_text}ms, Max={max_text}ms, avg={s['avg_time']}ms\n"
        f"Log file {log_file_path}"
    )


def project(ring, stats, log_file_path="", threshold=constants.MAX_GREEN_PING_MS):
    success, rtt, _ = ring.arrays()
    heights = to_log_scale(rtt)

    points = []
    for slot in range(ring.capacity):
        if slot >= len(success):
            points.append(DisplayPoint(slot, Category.NO_DATA, 0.0))
            continue
        category = classify(bool(success[slot]), int(rtt[slot]), threshold)
        height = float(constants.MAX_Y) if category is Category.FAILURE else float(heights[slot])
        points.append(DisplayPoint(slot, category, height))

    stats_snapshot = stats.snapshot()
    return RenderSnapshot(
        points=tuple(points),
        summary=format_summary(stats_snapshot, log_file_path),
        num_sent=stats_snapshot["num_sent"],
        num_received=stats_snapshot["num_received"],
        pct_lost=stats_snapshot["pct_lost"],
    )
