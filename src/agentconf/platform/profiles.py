"""Per-OS-family file locations and defaults-file templates."""

import logging
from dataclasses import dataclass
from enum import Enum
from string import Template

from agentconf.config.models import AgentConfig
from agentconf.errors import UnsupportedPlatformError

logger = logging.getLogger(__name__)


class OSFamily(str, Enum):
    """Supported operating system families."""

    DEBIAN = "Debian"
    REDHAT = "RedHat"


_DEBIAN_DEFAULTS = Template(
    """\
# Defaults for puppet - sourced by /etc/init.d/puppet

# Start puppet on boot?
START=$start

# Startup options
DAEMON_OPTS=""
"""
)

_REDHAT_SYSCONFIG = Template(
    """\
# The puppetmaster server
PUPPET_SERVER=$server

# If you wish to specify the port to connect to do so here
PUPPET_PORT=$port

# Where to log to. Specify syslog to send log messages to the system log.
PUPPET_LOG=/var/log/puppet/puppet.log

# You may specify other parameters to the puppet client here
#PUPPET_EXTRA_OPTS=--waitforcert=500
"""
)


@dataclass(frozen=True)
class PlatformProfile:
    """Where and how the agent's defaults file lives on one OS family."""

    os_family: OSFamily
    defaults_file_path: str
    defaults_file_template: Template
    cron_default_hour: str | None
    defaults_file_mode: str = "0644"
    owner: str = "root"
    group: str = "root"

    def render_defaults(self, cfg: AgentConfig, start: str) -> str:
        """Render the defaults file body.

        Args:
            cfg: Agent configuration supplying server and port.
            start: "yes" or "no"; only Debian's template uses it.
        """
        return self.defaults_file_template.substitute(
            start=start,
            server=cfg.puppet_server,
            port=cfg.puppet_server_port,
        )


PROFILES: dict[OSFamily, PlatformProfile] = {
    OSFamily.DEBIAN: PlatformProfile(
        os_family=OSFamily.DEBIAN,
        defaults_file_path="/etc/default/puppet",
        defaults_file_template=_DEBIAN_DEFAULTS,
        cron_default_hour=None,
    ),
    OSFamily.REDHAT: PlatformProfile(
        os_family=OSFamily.REDHAT,
        defaults_file_path="/etc/sysconfig/puppet",
        defaults_file_template=_REDHAT_SYSCONFIG,
        cron_default_hour="*",
    ),
}


def select_profile(os_family: str | OSFamily) -> PlatformProfile:
    """Pick the platform profile for an OS family fact.

    Matching is case-insensitive ("debian" and "Debian" are the same family).

    Raises:
        UnsupportedPlatformError: If no profile exists for the family.
    """
    if isinstance(os_family, OSFamily):
        return PROFILES[os_family]

    for family, profile in PROFILES.items():
        if family.value.lower() == str(os_family).strip().lower():
            logger.debug(f"Selected {family.value} platform profile")
            return profile
    raise UnsupportedPlatformError(str(os_family))
