"""Pure construction of the reconciliation plan for one host."""

import logging
from collections import Counter
from dataclasses import dataclass, field

from agentconf.config.models import AgentConfig
from agentconf.platform.facts import detect_fqdn
from agentconf.platform.profiles import OSFamily, PlatformProfile, select_profile
from agentconf.settings.resolver import resolve
from agentconf.validator import validate

from .intents import CronIntent, FileIntent, IniSettingIntent, Intent, PackageIntent, ServiceIntent
from .run_mode import plan_run_mode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciliationPlan:
    """Ordered intents that converge a host to an AgentConfig.

    The package intent always comes first; everything after it requires it.
    """

    config: AgentConfig
    profile: PlatformProfile
    intents: tuple[Intent, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.intents)

    def __len__(self) -> int:
        return len(self.intents)

    @property
    def os_family(self) -> OSFamily:
        return self.profile.os_family

    @property
    def require(self) -> str:
        return f"Package[{self.config.puppet_agent_package}]"

    @property
    def package(self) -> PackageIntent:
        return self._one(PackageIntent)

    @property
    def defaults_file(self) -> FileIntent:
        return self._one(FileIntent)

    @property
    def service(self) -> ServiceIntent:
        return self._one(ServiceIntent)

    @property
    def cron(self) -> CronIntent:
        return self._one(CronIntent)

    @property
    def ini_settings(self) -> list[IniSettingIntent]:
        return [i for i in self.intents if isinstance(i, IniSettingIntent)]

    def ini_setting(self, title: str) -> IniSettingIntent | None:
        """Look up an ini setting intent by resource title (e.g. "puppetagentsplay")."""
        for intent in self.ini_settings:
            if intent.entry.title == title:
                return intent
        return None

    def summary(self) -> dict[str, int]:
        """Count intents by kind."""
        return dict(Counter(i.kind for i in self.intents))

    def _one(self, cls: type) -> Intent:
        for intent in self.intents:
            if isinstance(intent, cls):
                return intent
        raise LookupError(f"Plan has no {cls.__name__}")


def build_plan(
    cfg: AgentConfig,
    os_family: str | OSFamily,
    fqdn: str | None = None,
) -> ReconciliationPlan:
    """Validate a configuration and compute its reconciliation plan.

    No host state is read or changed here.

    Args:
        cfg: Desired agent state.
        os_family: OS family fact ("Debian", "RedHat").
        fqdn: Host name used to spread cron minutes; detected when omitted.

    Raises:
        ValidationError: If the configuration is contradictory.
        UnsupportedPlatformError: If the OS family has no profile.
    """
    validate(cfg)
    profile = select_profile(os_family)
    fqdn = fqdn or detect_fqdn()
    require = f"Package[{cfg.puppet_agent_package}]"

    intents: list[Intent] = [PackageIntent(cfg.puppet_agent_package, cfg.version)]

    for entry in resolve(cfg):
        intents.append(IniSettingIntent(cfg.puppet_conf, entry, require=require))

    run_mode = plan_run_mode(cfg, profile, fqdn, require=require)
    intents.append(
        FileIntent(
            path=profile.defaults_file_path,
            content=profile.render_defaults(cfg, run_mode.start),
            mode=profile.defaults_file_mode,
            owner=profile.owner,
            group=profile.group,
            require=require,
        )
    )
    intents.append(run_mode.service)
    intents.append(run_mode.cron)

    plan = ReconciliationPlan(config=cfg, profile=profile, intents=tuple(intents))
    logger.info(
        f"Planned {len(plan)} intents for {profile.os_family.value} "
        f"({cfg.puppet_run_style.value} run style)"
    )
    return plan
