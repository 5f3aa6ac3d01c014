"""Platform profiles and host fact detection."""

from .facts import detect_fqdn, detect_os_family, fqdn_rand
from .profiles import OSFamily, PlatformProfile, select_profile

__all__ = [
    "OSFamily",
    "PlatformProfile",
    "detect_fqdn",
    "detect_os_family",
    "fqdn_rand",
    "select_profile",
]
