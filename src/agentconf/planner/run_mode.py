"""Service vs cron run-style planning."""

import logging
from dataclasses import dataclass

from agentconf.config.models import AgentConfig, RunStyle
from agentconf.platform.facts import fqdn_rand
from agentconf.platform.profiles import PlatformProfile

from .intents import CronIntent, ServiceIntent

logger = logging.getLogger(__name__)

CRON_JOB_NAME = "puppet-client"
CRON_USER = "root"


@dataclass(frozen=True)
class RunModePlan:
    """Service, cron and defaults-file decisions for one run style."""

    service: ServiceIntent
    cron: CronIntent
    start: str  # START= value for Debian's defaults file


def cron_command(puppet_binary: str) -> str:
    return f"{puppet_binary} agent --no-daemonize --onetime --logdest syslog > /dev/null 2>&1"


def cron_minutes(interval: int, fqdn: str) -> str:
    """Spread runs over the hour, one every ``interval`` minutes.

    The offset comes from fqdn_rand so hosts in a fleet do not all fire on
    the same minute.
    """
    if interval >= 60:
        return str(fqdn_rand(60, fqdn))
    offset = fqdn_rand(interval, fqdn)
    return ",".join(str(m) for m in range(offset, 60, interval))


def plan_run_mode(
    cfg: AgentConfig,
    profile: PlatformProfile,
    fqdn: str,
    require: str = "",
) -> RunModePlan:
    """Derive service and cron intents for the configured run style."""
    if cfg.puppet_run_style == RunStyle.SERVICE:
        logger.debug("Run style service: agent daemon enabled, cron job removed")
        return RunModePlan(
            service=ServiceIntent(
                cfg.puppet_agent_service, ensure="running", enable=True, require=require
            ),
            cron=CronIntent(CRON_JOB_NAME, user=CRON_USER, ensure="absent", require=require),
            start="yes",
        )

    hour = cfg.cron_hour or profile.cron_default_hour
    if not hour:
        logger.warning(
            f"cron_hour unset and {profile.os_family.value} has no default hour, running hourly"
        )
        hour = "*"
    minute = cfg.cron_minute or cron_minutes(cfg.puppet_run_interval, fqdn)

    logger.debug(f"Run style cron: '{minute} {hour} * * *' for {fqdn}")
    return RunModePlan(
        service=ServiceIntent(
            cfg.puppet_agent_service, ensure="stopped", enable=False, require=require
        ),
        cron=CronIntent(
            CRON_JOB_NAME,
            command=cron_command(cfg.puppet_binary),
            user=CRON_USER,
            hour=hour,
            minute=minute,
            require=require,
        ),
        start="no",
    )
