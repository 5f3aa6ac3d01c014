"""Plan construction: run-mode selection and the full reconciliation plan."""

from .intents import CronIntent, FileIntent, IniSettingIntent, PackageIntent, ServiceIntent
from .plan import ReconciliationPlan, build_plan
from .run_mode import CRON_JOB_NAME, RunModePlan, plan_run_mode

__all__ = [
    "CRON_JOB_NAME",
    "CronIntent",
    "FileIntent",
    "IniSettingIntent",
    "PackageIntent",
    "ReconciliationPlan",
    "RunModePlan",
    "ServiceIntent",
    "build_plan",
    "plan_run_mode",
]
