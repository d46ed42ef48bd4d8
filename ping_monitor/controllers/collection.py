import logging
import threading
from datetime import datetime
from enum import Enum

from .. import constants
from ..data import HistoryRing, Statistics
from ..ping import probe
from ..projection import project
from ..results_log import LogWriteError, ResultLogger


logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class SessionError(Exception):
    """A session was started twice or after it stopped."""


class MonitorSession:
    """One destination, one background ping thread, one CSV log.

    Ring, statistics, log handle and the cached snapshot all live behind
    `self.lock`. The probe itself and the sleep between probes run without it.

    `on_snapshot(snapshot)` is called from the sampling thread after each
    iteration, outside the lock; if it raises, the error is logged and
    sampling goes on. `on_error(exc)` is called once if the log cannot be
    written, after which the session is stopped.
    """

    def __init__(
        self,
        config,
        probe_fn=probe,
        interval_ms=constants.PING_INTERVAL_MS,
        timeout_ms=constants.PING_TIMEOUT_MS,
        capacity=constants.NUM_HISTORY_ENTRIES,
        on_snapshot=None,
        on_error=None,
        clock=datetime.now,
    ):
        self.config = config
        self.probe_fn = probe_fn
        self.interval_ms = interval_ms
        self.timeout_ms = timeout_ms
        self.on_snapshot = on_snapshot
        self.on_error = on_error
        self.clock = clock

        self.lock = threading.Lock()
        self.ring = HistoryRing(capacity)
        self.stats = Statistics()
        self.result_log = ResultLogger(config.log_file_path)
        self.latest_snapshot = None
        self.error = None

        self._state = SessionState.IDLE
        self._state_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread = None

    @property
    def state(self):
        with self._state_lock:
            return self._state

    @property
    def destination(self):
        return self.config.destination_host

    def open(self):
        """Create the log file (with header). Idempotent."""
        with self.lock:
            if self.result_log.closed:
                self.result_log.open()

    def start(self, background=True):
        with self._state_lock:
            if self._state is not SessionState.IDLE:
                raise SessionError(f"session already {self._state.value}")
            self._state = SessionState.RUNNING

        try:
            self.open()
        except LogWriteError:
            self._set_state(SessionState.STOPPED)
            raise

        logger.info(
            "Pinging %s every %d ms, timeout %d ms",
            self.destination, self.interval_ms, self.timeout_ms,
        )
        if background:
            self._thread = threading.Thread(
                target=self._run, name=f"ping-{self.destination}", daemon=True
            )
            self._thread.start()
        return self

    def stop(self):
        """Ask the loop to exit. The probe in flight, if any, finishes first."""
        self._stop_event.set()
        with self._state_lock:
            if self._state is SessionState.IDLE:
                self._state = SessionState.STOPPED
        if self._thread is None:
            self._finish()

    def join(self, timeout=None):
        if self._thread is not None:
            self._thread.join(timeout)
            return not self._thread.is_alive()
        return True

    def _set_state(self, state):
        with self._state_lock:
            self._state = state

    def _finish(self):
        with self.lock:
            self.result_log.close()
        self._set_state(SessionState.STOPPED)

    def sample_once(self):
        """Probe once and publish the result. Returns the new snapshot."""
        outcome = self.probe_fn(self.destination, self.timeout_ms)
        timestamp = self.clock()

        with self.lock:
            self.ring.record(outcome)
            self.stats.update(outcome)
            self.result_log.append(timestamp, self.destination, outcome)
            self.latest_snapshot = project(
                self.ring, self.stats, self.config.log_file_path
            )
            snapshot = self.latest_snapshot

        if not outcome.success:
            logger.debug("No reply from %s", self.destination)

        if self.on_snapshot is not None:
            try:
                self.on_snapshot(snapshot)
            except Exception:
                # A broken view must not end the session.
                logger.exception("Snapshot callback failed for %s", self.destination)
        return snapshot

    def project(self):
        with self.lock:
            return project(self.ring, self.stats, self.config.log_file_path)

    def seed(self, fill):
        """Run `fill(ring, stats)` under the lock, e.g. to load test data."""
        with self.lock:
            result = fill(self.ring, self.stats)
            self.latest_snapshot = project(
                self.ring, self.stats, self.config.log_file_path
            )
        return result

    def _run(self):
        try:
            while not self._stop_event.is_set():
                try:
                    self.sample_once()
                except LogWriteError as e:
                    logger.error("Stopping session for %s: %s", self.destination, e)
                    self.error = e
                    if self.on_error is not None:
                        self.on_error(e)
                    break
                self._stop_event.wait(self.interval_ms / 1000)
        finally:
            self._finish()
            logger.info("Stopped pinging %s", self.destination)
