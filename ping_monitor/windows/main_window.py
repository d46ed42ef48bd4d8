import logging

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtWidgets import QLabel, QMainWindow, QMessageBox, QVBoxLayout, QWidget

from .. import constants
from ..config import build_session_config
from ..controllers import rendering
from ..controllers.collection import MonitorSession
from ..data import generate_test_data
from ..results_log import LogWriteError
from ..widgets.history_chart import build_history_chart
from ..widgets.host_bar import build_host_bar, lock_host_bar


logger = logging.getLogger(__name__)


class SnapshotBridge(QObject):
    """Carries snapshots and errors from the ping thread to the GUI thread."""

    snapshot_ready = pyqtSignal(object)
    failed = pyqtSignal(str)


class PingMonitorWindow(QMainWindow):
    def __init__(
        self,
        host="",
        log_dir=None,
        interval_ms=constants.PING_INTERVAL_MS,
        timeout_ms=constants.PING_TIMEOUT_MS,
        test_data=0,
        dark=False,
    ):
        super().__init__()
        self.log_dir = log_dir
        self.interval_ms = interval_ms
        self.timeout_ms = timeout_ms
        self.test_data = test_data
        self.session = None

        self.setWindowTitle("Ping Monitor")
        self.setGeometry(100, 100, 840, 480)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setSpacing(5)

        build_host_bar(self, layout, host)
        build_history_chart(self, layout, dark=dark)

        self.stats_label = QLabel("")
        layout.addWidget(self.stats_label)

        # Queued across threads: slots run on the GUI thread.
        self.bridge = SnapshotBridge()
        self.bridge.snapshot_ready.connect(self.on_snapshot_ready)
        self.bridge.failed.connect(self.on_session_failed)

    # ---- Commands / actions ----

    def start_session(self):
        if self.session is not None:
            return

        host = self.host_entry.text().strip()
        try:
            config = build_session_config(host, self.log_dir)
        except ValueError:
            self.host_entry.selectAll()
            return

        session = MonitorSession(
            config,
            interval_ms=self.interval_ms,
            timeout_ms=self.timeout_ms,
            on_snapshot=self.bridge.snapshot_ready.emit,
            on_error=lambda e: self.bridge.failed.emit(str(e)),
        )
        if self.test_data:
            session.seed(lambda ring, stats: generate_test_data(ring, stats, self.test_data))

        try:
            session.start()
        except LogWriteError as e:
            QMessageBox.critical(self, "Ping Monitor", str(e))
            return

        self.session = session
        lock_host_bar(self)
        self.setWindowTitle(f"Ping {config.destination_host}, timeout {self.timeout_ms}")
        rendering.draw_snapshot(self, session.project())

    # ---- Data + rendering ----

    def on_snapshot_ready(self, snapshot):
        rendering.draw_snapshot(self, snapshot)

    def on_session_failed(self, message):
        rendering.show_error(self, message)
        QMessageBox.critical(self, "Ping Monitor", f"Logging failed, monitoring stopped:\n{message}")

    def closeEvent(self, event):
        if self.session is not None:
            self.session.stop()
            if not self.session.join(timeout=0.5):
                logger.debug("Ping thread still busy at exit; leaving it to the interpreter")
        super().closeEvent(event)
