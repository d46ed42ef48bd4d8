import pyqtgraph as pg

from .. import constants
from ..plot_items import LogAxisItem, add_grid
from ..projection import Category


def build_history_chart(window, parent_layout, dark=False):
    """Creates the ping history plot with one bar series per category."""

    plot = pg.PlotWidget(axisItems={"left": LogAxisItem(orientation="left")})
    plot.setMenuEnabled(False)
    plot.setLabel("left", "ms")
    plot.setMouseEnabled(x=False, y=False)
    plot.wheelEvent = lambda evt: None
    plot.hideButtons()
    plot.getAxis("bottom").setStyle(showValues=False)
    plot.setXRange(-0.5, constants.NUM_HISTORY_ENTRIES - 0.5, padding=0)
    plot.setYRange(0, constants.MAX_Y, padding=0)

    window.grid_lines = add_grid(plot, dark=dark)

    failure_color = constants.COLOR_FAILURE_DARK if dark else constants.COLOR_FAILURE
    colors = {
        Category.SUCCESS_FAST: constants.COLOR_FAST,
        Category.SUCCESS_SLOW: constants.COLOR_SLOW,
        Category.FAILURE: failure_color,
    }

    window.bar_items = {}
    for category, color in colors.items():
        item = pg.BarGraphItem(
            x=[0], height=[0], width=1.0, brush=pg.mkBrush(color), pen=pg.mkPen(None)
        )
        item.hide()
        plot.addItem(item)
        window.bar_items[category] = item

    window.history_plot = plot
    parent_layout.addWidget(plot)
    return plot
