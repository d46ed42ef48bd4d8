import logging
import os
import subprocess

import pyqtgraph as pg

logger = logging.getLogger(__name__)

def _detect_dark_mode():
    """Detect if system is using dark mode."""
    # Method 1: Check GTK_THEME environment variable
    gtk_theme = os.environ.get("GTK_THEME", "").lower()
    if "dark" in gtk_theme:
        return True

    # Method 2: Check GNOME color scheme via gsettings
    try:
        result = subprocess.run(
            ["gsettings", "get", "org.gnome.desktop.interface", "color-scheme"],
            capture_output=True, text=True, timeout=2
        )
        if "dark" in result.stdout.lower():
            return True
    except (OSError, subprocess.SubprocessError):
        pass

    # Method 3: Check Qt palette (works well for KDE)
    from PyQt5.QtGui import QPalette
    from PyQt5.QtWidgets import QApplication

    app = QApplication.instance()
    if app:
        bg_lightness = app.palette().color(QPalette.Window).lightness()
        if bg_lightness < 128:
            return True

    return False


def configure_pyqtgraph(dark_mode=None):
    pg.setConfigOptions(antialias=False)

    if dark_mode is None:
        dark_mode = _detect_dark_mode()

    if dark_mode:
        pg.setConfigOption("background", (30, 30, 30))
        pg.setConfigOption("foreground", (200, 200, 200))
    else:
        pg.setConfigOption("background", "w")
        pg.setConfigOption("foreground", "k")

    logger.debug("pyqtgraph theme: %s", "dark" if dark_mode else "light")
    return dark_mode
