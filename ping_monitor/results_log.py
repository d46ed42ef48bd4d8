import csv
import logging
import os
from pathlib import Path

from . import constants


logger = logging.getLogger(__name__)


class LogWriteError(Exception):
    """The session's CSV log could not be written."""


class ResultLogger:
    """Append-only CSV log of every probe in a session.

    Each row is flushed and synced before `append` returns. Any OSError is
    re-raised as LogWriteError and is meant to end the session.
    """

    def __init__(self, path):
        self.path = Path(path)
        self._file = None
        self._writer = None

    def open(self):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, "a", encoding="utf-8", newline="")
            self._writer = csv.writer(self._file, lineterminator="\n")
            if self._file.tell() == 0:
                self._write_row(constants.LOG_HEADER)
        except OSError as e:
            self.close()
            raise LogWriteError(f"cannot open log file {self.path}: {e}") from e
        logger.info("Logging results to %s", self.path)
        return self

    @property
    def closed(self):
        return self._file is None

    def _write_row(self, row):
        self._writer.writerow(row)
        self._file.flush()
        os.fsync(self._file.fileno())

    def append(self, timestamp, destination, outcome):
        if self._file is None:
            raise LogWriteError(f"log file {self.path} is not open")
        row = [
            f"{timestamp:%Y-%m-%d}",
            f"{timestamp:%H:%M:%S}",
            destination,
            str(outcome.success),
            outcome.round_trip_millis,
            outcome.time_to_live,
        ]
        try:
            self._write_row(row)
        except OSError as e:
            raise LogWriteError(f"cannot write to log file {self.path}: {e}") from e

    def close(self):
        if self._file is not None:
            try:
                self._file.close()
            except OSError as e:
                logger.warning("Error closing log file %s: %s", self.path, e)
        self._file = None
        self._writer = None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
