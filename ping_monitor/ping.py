import logging
import math
import re
import subprocess
import sys
from dataclasses import dataclass

from . import constants


logger = logging.getLogger(__name__)

TIME_RE = re.compile(r"time[=<]\s*([\d.]+)\s*ms", re.IGNORECASE)
TTL_RE = re.compile(r"ttl=(\d+)", re.IGNORECASE)

# Extra seconds given to the ping binary on top of its own timeout.
PROCESS_GRACE_S = 2.0


@dataclass(frozen=True)
class Outcome:
    """Result of one echo request.

    On failure `round_trip_millis` holds the probe timeout and
    `time_to_live` is 0.
    """

    success: bool
    round_trip_millis: int
    time_to_live: int

    @classmethod
    def failed(cls, timeout_millis=constants.PING_TIMEOUT_MS):
        return cls(success=False, round_trip_millis=int(timeout_millis), time_to_live=0)


def build_ping_command(host, timeout_millis, platform=None):
    platform = platform or sys.platform
    size = str(len(constants.PING_PAYLOAD))
    if platform.startswith("win"):
        return ["ping", "-n", "1", "-w", str(timeout_millis), "-l", size, "-f", host]
    # 0x61 == "a"; the payload is a run of the same byte.
    pattern = constants.PING_PAYLOAD[:1].hex()
    if platform == "darwin":
        # macOS takes -W in milliseconds, -D sets don't-fragment.
        return ["ping", "-c", "1", "-W", str(timeout_millis), "-s", size, "-p", pattern, "-D", host]
    timeout_s = max(1, math.ceil(timeout_millis / 1000))
    return ["ping", "-c", "1", "-W", str(timeout_s), "-s", size, "-p", pattern, "-M", "do", host]


def parse_ping_output(output, timeout_millis=constants.PING_TIMEOUT_MS):
    """Turn the text of a single-echo `ping` run into an Outcome."""
    time_match = TIME_RE.search(output)
    if not time_match:
        return Outcome.failed(timeout_millis)

    rtt = max(0, int(round(float(time_match.group(1)))))
    if rtt > timeout_millis:
        return Outcome.failed(timeout_millis)

    ttl_match = TTL_RE.search(output)
    ttl = int(ttl_match.group(1)) if ttl_match else 0
    return Outcome(success=True, round_trip_millis=rtt, time_to_live=ttl)


def probe(destination, timeout_millis=constants.PING_TIMEOUT_MS):
    """Send one ICMP echo to `destination`. Never raises."""
    host = (destination or "").strip()
    if not host:
        logger.debug("probe skipped: empty destination")
        return Outcome.failed(timeout_millis)

    try:
        result = subprocess.check_output(
            build_ping_command(host, timeout_millis),
            text=True,
            stderr=subprocess.DEVNULL,
            timeout=timeout_millis / 1000 + PROCESS_GRACE_S,
        )
    except subprocess.CalledProcessError as e:
        logger.debug("ping %s exited with %s", host, e.returncode)
        return Outcome.failed(timeout_millis)
    except subprocess.TimeoutExpired:
        logger.debug("ping %s did not finish in time", host)
        return Outcome.failed(timeout_millis)
    except Exception as e:
        logger.debug("ping %s failed: %r", host, e)
        return Outcome.failed(timeout_millis)

    return parse_ping_output(result, timeout_millis)
