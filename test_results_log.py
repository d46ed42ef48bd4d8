#!/usr/bin/env python
"""CSV result log: header, row format, durability and failure policy."""

import csv
from datetime import datetime

import pytest

from ping_monitor.ping import Outcome
from ping_monitor.results_log import LogWriteError, ResultLogger


STAMP = datetime(2024, 5, 1, 12, 0, 3)


def read_lines(path):
    return path.read_text(encoding="utf-8").splitlines()


def test_open_writes_header(tmp_path):
    path = tmp_path / "logs" / "session.csv"
    with ResultLogger(path):
        pass
    assert read_lines(path) == ["Date,Time,Host,Success,PingTime,Ttl"]


def test_rows_visible_before_close(tmp_path):
    path = tmp_path / "session.csv"
    log = ResultLogger(path).open()
    log.append(STAMP, "1.1.1.1", Outcome(True, 11, 57))
    log.append(STAMP, "1.1.1.1", Outcome.failed(3000))

    # Flushed per append, so another reader sees it immediately.
    assert read_lines(path)[1:] == [
        "2024-05-01,12:00:03,1.1.1.1,True,11,57",
        "2024-05-01,12:00:03,1.1.1.1,False,3000,0",
    ]
    log.close()
    assert log.closed


def test_reopen_does_not_repeat_header(tmp_path):
    path = tmp_path / "session.csv"
    with ResultLogger(path) as log:
        log.append(STAMP, "h", Outcome(True, 1, 1))
    with ResultLogger(path) as log:
        log.append(STAMP, "h", Outcome(True, 2, 1))
    lines = read_lines(path)
    assert lines.count("Date,Time,Host,Success,PingTime,Ttl") == 1
    assert len(lines) == 3


def test_append_when_not_open_raises(tmp_path):
    log = ResultLogger(tmp_path / "x.csv")
    with pytest.raises(LogWriteError):
        log.append(STAMP, "h", Outcome(True, 1, 1))


def test_unwritable_location_raises(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    log = ResultLogger(blocker / "session.csv")
    with pytest.raises(LogWriteError):
        log.open()
    assert log.closed


def test_write_error_wrapped(tmp_path):
    log = ResultLogger(tmp_path / "x.csv").open()

    class BrokenFile:
        def write(self, data):
            raise OSError(28, "No space left on device")

    log._writer = csv.writer(BrokenFile(), lineterminator="\n")
    with pytest.raises(LogWriteError, match="No space left"):
        log.append(STAMP, "h", Outcome(True, 1, 1))
    log.close()
