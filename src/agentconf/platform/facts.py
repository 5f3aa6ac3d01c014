"""Host fact detection."""

import hashlib
import logging
import socket
from pathlib import Path

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")

# os-release ID / ID_LIKE tokens per family
_FAMILY_IDS = {
    "Debian": {"debian", "ubuntu", "raspbian", "linuxmint"},
    "RedHat": {"rhel", "centos", "fedora", "rocky", "almalinux", "ol", "amzn"},
}


def _parse_os_release(text: str) -> dict[str, str]:
    data = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        data[key] = value.strip().strip('"').strip("'")
    return data


def detect_os_family(os_release: Path | None = None) -> str:
    """Detect the OS family from os-release.

    Returns:
        "Debian", "RedHat", or the raw ID when the family is not recognised,
        so profile selection can report it.
    """
    path = os_release or OS_RELEASE_PATH
    try:
        data = _parse_os_release(path.read_text())
    except FileNotFoundError:
        logger.warning(f"{path} not found, OS family unknown")
        return "unknown"

    ids = [data.get("ID", "").lower()] + data.get("ID_LIKE", "").lower().split()
    for family, known in _FAMILY_IDS.items():
        if any(i in known for i in ids):
            return family
    return data.get("ID", "unknown")


def detect_fqdn() -> str:
    """Return the host's fully qualified domain name."""
    return socket.getfqdn()


def fqdn_rand(max_value: int, fqdn: str, seed: str = "") -> int:
    """Deterministic per-host number in [0, max_value).

    Spreads scheduled runs across a fleet while keeping each host's slot
    stable from one run to the next.
    """
    if max_value <= 0:
        return 0
    digest = hashlib.md5(f"{fqdn}:{seed}".encode()).hexdigest()
    return int(digest, 16) % max_value
