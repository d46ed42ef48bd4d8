def draw_snapshot(window, snapshot):
    """Push a RenderSnapshot into the window's bar series and stats label.

    Runs on the GUI thread only.
    """
    if snapshot is None:
        return

    for category, item in window.bar_items.items():
        slots, heights = snapshot.heights(category)
        if len(slots) == 0:
            item.hide()
            continue
        item.setOpts(x=slots, height=heights, width=1.0)
        item.show()

    window.stats_label.setText(snapshot.summary)


def show_error(window, message):
    window.stats_label.setText(f"{window.stats_label.text()}\n\nStopped: {message}")
