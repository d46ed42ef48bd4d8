import pyqtgraph as pg

from . import constants
from .projection import to_log_scale


def grid_levels():
    """(major, minor) grid positions in ms, e.g. 10 major with 20..90 minor."""
    major = list(constants.GRID_LINES_MS)
    minor = []
    for low, high in zip(major, major[1:]):
        minor.extend(range(low * 2, high, low))
    return major, minor


def _log_y(ms):
    return float(to_log_scale(ms, max_extent=float("inf")))


class LogAxisItem(pg.AxisItem):
    """Left axis for a chart whose y values went through `to_log_scale`.

    Ticks sit on the grid decades and are labelled in milliseconds.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        major, _ = grid_levels()
        self.setTicks([[(_log_y(ms), f"{ms}") for ms in major], []])


def add_grid(plot, dark=False):
    major, minor = grid_levels()
    major_pen = pg.mkPen((200, 200, 200) if dark else (0, 0, 0), width=0.5)
    minor_pen = pg.mkPen(constants.COLOR_GRID_MINOR, width=0.3)

    lines = []
    for ms, pen in [(m, minor_pen) for m in minor] + [(m, major_pen) for m in major]:
        y = _log_y(ms)
        if y > constants.MAX_Y:
            continue
        line = pg.InfiniteLine(pos=y, angle=0, movable=False, pen=pen)
        plot.addItem(line, ignoreBounds=True)
        lines.append(line)
    return lines
