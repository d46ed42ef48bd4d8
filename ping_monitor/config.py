import ipaddress
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from . import constants


HOST_PATTERN = re.compile(
    r"^[\d]{1,3}\.[\d]{1,3}\.[\d]{1,3}\.[\d]{1,3}$|^[a-zA-Z0-9][a-zA-Z0-9.\-:]*$"
)


@dataclass(frozen=True)
class SessionConfig:
    """What a monitoring session was started with. Never changes afterwards."""

    destination_host: str
    log_file_path: Path


def default_log_dir():
    documents = Path.home() / "Documents"
    base = documents if documents.is_dir() else Path.home()
    return base / constants.LOG_DIR_NAME


def is_valid_host(host):
    if not host:
        return False
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        return bool(HOST_PATTERN.match(host))


def build_session_config(host, log_dir=None, now=None):
    host = (host or "").strip()
    if not is_valid_host(host):
        raise ValueError(f"invalid destination host: {host!r}")

    now = now or datetime.now()
    log_dir = Path(log_dir) if log_dir is not None else default_log_dir()
    # ':' would break the filename for IPv6 literals on Windows
    safe_host = host.replace(":", "_")
    filename = f"{now:%Y%m%d-%H%M%S}-{safe_host}.csv"
    return SessionConfig(destination_host=host, log_file_path=log_dir / filename)
