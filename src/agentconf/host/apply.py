"""Apply a reconciliation plan to a host."""

import logging
import subprocess
from dataclasses import dataclass, field

from agentconf.errors import ReconciliationError
from agentconf.planner.intents import (
    CronIntent,
    FileIntent,
    IniSettingIntent,
    Intent,
    PackageIntent,
    ServiceIntent,
)
from agentconf.planner.plan import ReconciliationPlan

from .base import HostCapabilities

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntentResult:
    intent: Intent
    changed: bool


@dataclass
class ApplyReport:
    """What happened to each intent of a plan."""

    results: list[IntentResult] = field(default_factory=list)

    @property
    def changed(self) -> list[Intent]:
        return [r.intent for r in self.results if r.changed]

    @property
    def unchanged(self) -> list[Intent]:
        return [r.intent for r in self.results if not r.changed]


def _apply_one(intent: Intent, host: HostCapabilities) -> bool:
    if isinstance(intent, PackageIntent):
        return host.ensure_package_installed(intent.name, intent.version)
    if isinstance(intent, IniSettingIntent):
        entry = intent.entry
        return host.upsert_ini_setting(intent.path, entry.section, entry.key, entry.value)
    if isinstance(intent, FileIntent):
        return host.write_file(
            intent.path, intent.content, intent.mode, intent.owner, intent.group
        )
    if isinstance(intent, ServiceIntent):
        return host.ensure_service_state(intent.name, intent.ensure, intent.enable)
    if isinstance(intent, CronIntent):
        return host.ensure_cron_job(intent)
    raise TypeError(f"Unknown intent: {intent!r}")


def apply(plan: ReconciliationPlan, host: HostCapabilities) -> ApplyReport:
    """Apply every intent in order.

    The first failing intent stops the run; intents already applied stay
    applied; running the plan again converges whatever is left.

    Raises:
        ReconciliationError: Wrapping the failure of a single intent.
    """
    report = ApplyReport()
    for intent in plan:
        try:
            changed = _apply_one(intent, host)
        except (OSError, ValueError, subprocess.SubprocessError) as e:
            logger.error(f"{intent.describe()} failed on {intent.target}: {e}")
            raise ReconciliationError(intent, intent.target, e) from e

        if changed:
            logger.info(f"{intent.describe()} changed")
        else:
            logger.debug(f"{intent.describe()} already in sync")
        report.results.append(IntentResult(intent, changed))

    logger.info(f"Applied plan: {len(report.changed)} of {len(report.results)} intents changed")
    return report
