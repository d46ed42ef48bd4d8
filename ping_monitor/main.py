import argparse
import logging
import sys

from . import constants
from .config import build_session_config
from .controllers.collection import MonitorSession
from .data import generate_test_data
from .ping import probe
from .results_log import LogWriteError


logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        add_help=True,
        description="Ping one host forever, chart the last few minutes and log every reply to CSV.",
    )
    parser.add_argument(
        "host",
        nargs="?",
        default="",
        help="Destination to ping. If given, monitoring starts right away.",
    )
    parser.add_argument(
        "--log-dir",
        metavar="DIR",
        help="Where to write the CSV log (default: ~/Documents/pingLog).",
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=constants.PING_INTERVAL_MS,
        metavar="MS",
        help="Pause between probes in milliseconds.",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=constants.PING_TIMEOUT_MS,
        metavar="MS",
        help="Probe timeout in milliseconds.",
    )
    parser.add_argument(
        "--test-data",
        type=int,
        default=0,
        metavar="COUNT",
        help="Pre-fill the history with COUNT synthetic results.",
    )
    parser.add_argument(
        "-c",
        "--count",
        type=int,
        default=0,
        metavar="N",
        help="Stop after N probes (headless only; 0 runs until Ctrl-C).",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="No window; print the summary after every probe until Ctrl-C.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def run_headless(args, probe_fn=probe):
    try:
        config = build_session_config(args.host, args.log_dir)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    done = []

    def print_summary(snapshot):
        print(snapshot.summary, end="\n\n", flush=True)
        done.append(1)
        if args.count and len(done) >= args.count:
            session.stop()

    session = MonitorSession(
        config,
        probe_fn=probe_fn,
        interval_ms=args.interval,
        timeout_ms=args.timeout,
        on_snapshot=print_summary,
    )
    if args.test_data:
        session.seed(lambda ring, stats: generate_test_data(ring, stats, args.test_data))

    try:
        session.start()
    except LogWriteError as e:
        logger.error("%s", e)
        return 1

    try:
        while not session.join(timeout=0.5):
            pass
    except KeyboardInterrupt:
        session.stop()
        session.join()

    return 1 if session.error else 0


def run_gui(args, qt_args):
    from PyQt5.QtWidgets import QApplication

    from .theme import configure_pyqtgraph
    from .windows.main_window import PingMonitorWindow

    app = QApplication([sys.argv[0], *qt_args])
    dark = configure_pyqtgraph()

    window = PingMonitorWindow(
        host=args.host,
        log_dir=args.log_dir,
        interval_ms=args.interval,
        timeout_ms=args.timeout,
        test_data=args.test_data,
        dark=dark,
    )
    window.show()
    if args.host:
        window.start_session()

    return app.exec_()


def main(argv=None):
    parser = build_parser()
    args, qt_args = parser.parse_known_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.headless:
        if not args.host:
            parser.error("--headless needs a host")
        sys.exit(run_headless(args))

    sys.exit(run_gui(args, qt_args))


if __name__ == "__main__":
    main()
