#!/usr/bin/env python
"""Headless command-line run with a stand-in probe."""

from ping_monitor.main import build_parser, run_headless
from ping_monitor.ping import Outcome


def unreachable(host, timeout_ms):
    return Outcome.failed(timeout_ms)


def parse(*argv):
    return build_parser().parse_args(list(argv))


def test_headless_stops_after_count(tmp_path, capsys):
    args = parse("10.0.0.1", "--headless", "--log-dir", str(tmp_path), "--interval", "0", "-c", "3")
    assert run_headless(args, probe_fn=unreachable) == 0

    logs = list(tmp_path.glob("*-10.0.0.1.csv"))
    assert len(logs) == 1
    rows = logs[0].read_text(encoding="utf-8").splitlines()[1:]
    assert len(rows) == 3
    assert all(",10.0.0.1,False,3000,0" in row for row in rows)

    out = capsys.readouterr().out
    assert "3 packets sent, 0 received (100.000% lost)" in out


def test_headless_count_ignores_seeded_history(tmp_path, capsys):
    args = parse(
        "example.com", "--headless", "--log-dir", str(tmp_path),
        "--interval", "0", "-c", "2", "--test-data", "10",
    )
    assert run_headless(args, probe_fn=unreachable) == 0

    rows = next(tmp_path.glob("*.csv")).read_text(encoding="utf-8").splitlines()[1:]
    assert len(rows) == 2
    assert "12 packets sent" in capsys.readouterr().out


def test_headless_bad_host_exit_code(tmp_path):
    args = parse("bad host", "--headless", "--log-dir", str(tmp_path))
    assert run_headless(args, probe_fn=unreachable) == 2


def test_headless_unwritable_log_exit_code(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    args = parse("10.0.0.1", "--headless", "--log-dir", str(blocker), "-c", "1")
    assert run_headless(args, probe_fn=unreachable) == 1
