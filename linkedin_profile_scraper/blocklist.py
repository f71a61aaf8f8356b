from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Mapping

from .config import BLOCKED_HOSTS_PATH
from .scraper_logging import logger


# Trackers LinkedIn pulls in that the hosts file does not list
EXTRA_BLOCKED_HOSTS = (
    "static.chartbeat.com",
    "scdn.cxense.com",
    "api.cxense.com",
    "www.googletagmanager.com",
    "connect.facebook.net",
    "platform.twitter.com",
    "tags.tiqcdn.com",
    "dev.visualwebsiteoptimizer.com",
    "smartlock.google.com",
    "cdn.embedly.com",
)


def parse_hosts(lines: Iterable[str]) -> Dict[str, bool]:
    """Parse hosts-file lines of the form `0.0.0.0 tracker.example.com`.

    Comments and entries pointing anywhere but 0.0.0.0 are ignored.
    """
    hosts: Dict[str, bool] = {}
    for line in lines:
        line = line.split("#", 1)[0].strip()
        frags = line.split()
        if len(frags) > 1 and frags[0] == "0.0.0.0":
            hosts[frags[1].strip().lower()] = True
    return hosts


@lru_cache(maxsize=None)
def get_blocked_hosts(path: str = BLOCKED_HOSTS_PATH) -> Mapping[str, bool]:
    """Load the tracker blocklist once per process.

    Returns a read-only hostname -> True mapping: the hosts file merged
    with `EXTRA_BLOCKED_HOSTS`. A missing file leaves only the extras.
    """
    hosts_file = Path(path)
    if hosts_file.exists():
        with open(hosts_file, "r", encoding="utf-8") as f:
            hosts = parse_hosts(f)
    else:
        logger.warning("Blocked hosts file %s not found, using built-in list only", path)
        hosts = {}
    hosts.update({host: True for host in EXTRA_BLOCKED_HOSTS})
    return MappingProxyType(hosts)
