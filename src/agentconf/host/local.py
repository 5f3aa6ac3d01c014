"""Host capabilities backed by the local machine."""

import logging
import os
import shutil
import subprocess
from pathlib import Path

from agentconf.planner.intents import CronIntent
from agentconf.platform.facts import detect_os_family
from agentconf.settings.ini import reconcile
from agentconf.settings.resolver import Absent, Present, SettingEntry

from .base import HostCapabilities

logger = logging.getLogger(__name__)

# Marker line Puppet writes above each cron job it manages
CRON_MARKER = "# Puppet Name: "


def _run(args: list[str], check: bool = True) -> subprocess.CompletedProcess:
    logger.debug(f"Running: {' '.join(args)}")
    return subprocess.run(args, capture_output=True, text=True, check=check)


class LocalHost(HostCapabilities):
    """Apply intents to this machine.

    Files are written below ``root`` so a plan can be rendered into a scratch
    tree. With ``dry_run`` set, state is still inspected but nothing is
    written and no mutating command runs.
    """

    def __init__(self, root: Path | None = None, dry_run: bool = False) -> None:
        self.root = root or Path("/")
        self.dry_run = dry_run

    def _path(self, path: str) -> Path:
        return self.root / path.lstrip("/")

    # -- packages -------------------------------------------------------

    def _package_manager(self) -> str:
        for tool in ("apt-get", "dnf", "yum"):
            if shutil.which(tool):
                return tool
        raise FileNotFoundError("No supported package manager (apt-get, dnf, yum) found")

    def _installed_version(self, name: str, manager: str) -> str | None:
        if manager == "apt-get":
            args = ["dpkg-query", "-W", "-f=${Status} ${Version}", name]
        else:
            args = ["rpm", "-q", "--qf", "installed %{VERSION}-%{RELEASE}", name]
        result = _run(args, check=False)
        if result.returncode != 0 or "installed" not in result.stdout:
            return None
        return result.stdout.split()[-1]

    def ensure_package_installed(self, name: str, version: str = "present") -> bool:
        manager = self._package_manager()
        before = self._installed_version(name, manager)
        if before is not None and version in ("present", "installed", before):
            return False

        if version in ("present", "installed", "latest"):
            spec = name
        elif manager == "apt-get":
            spec = f"{name}={version}"
        else:
            spec = f"{name}-{version}"

        if self.dry_run:
            logger.info(f"[dry-run] would install {spec} with {manager}")
            return True

        logger.info(f"Installing {spec} with {manager}")
        _run([manager, "install", "-y", spec])
        return self._installed_version(name, manager) != before

    # -- services -------------------------------------------------------

    def ensure_service_state(self, name: str, ensure: str, enable: bool) -> bool:
        active = _run(["systemctl", "is-active", "--quiet", name], check=False).returncode == 0
        enabled = _run(["systemctl", "is-enabled", "--quiet", name], check=False).returncode == 0

        actions = []
        if enable != enabled:
            actions.append("enable" if enable else "disable")
        if (ensure == "running") != active:
            actions.append("start" if ensure == "running" else "stop")

        for action in actions:
            if self.dry_run:
                logger.info(f"[dry-run] would {action} service {name}")
                continue
            logger.info(f"systemctl {action} {name}")
            _run(["systemctl", action, name])
        return bool(actions)

    # -- cron -----------------------------------------------------------

    def _read_crontab(self, user: str) -> str:
        result = _run(["crontab", "-l", "-u", user], check=False)
        # "no crontab for root" exits non-zero
        return result.stdout if result.returncode == 0 else ""

    def ensure_cron_job(self, cron: CronIntent) -> bool:
        try:
            existing = self._read_crontab(cron.user)
        except FileNotFoundError:
            if cron.ensure == "absent":
                logger.debug("crontab not available, nothing to remove")
                return False
            raise

        marker = f"{CRON_MARKER}{cron.name}"
        lines = existing.splitlines()
        kept: list[str] = []
        current: list[str] = []
        skip_next = False
        for line in lines:
            if skip_next:
                current.append(line)
                skip_next = False
                continue
            if line.strip() == marker:
                current.append(line)
                skip_next = True
                continue
            kept.append(line)

        desired = [] if cron.ensure == "absent" else [marker, f"{cron.schedule} {cron.command}"]
        if current == desired:
            return False

        new_crontab = "\n".join(kept + desired) + "\n"
        if self.dry_run:
            logger.info(f"[dry-run] would update cron job {cron.name} for {cron.user}")
            return True

        logger.info(f"Updating cron job {cron.name} for {cron.user}")
        subprocess.run(
            ["crontab", "-u", cron.user, "-"],
            input=new_crontab,
            capture_output=True,
            text=True,
            check=True,
        )
        return True

    # -- files ----------------------------------------------------------

    def write_file(
        self, path: str, content: str, mode: str, owner: str, group: str
    ) -> bool:
        target = self._path(path)
        current = target.read_text() if target.exists() else None
        wanted_mode = int(mode, 8)
        mode_ok = current is not None and (target.stat().st_mode & 0o7777) == wanted_mode
        if current == content and mode_ok:
            return False

        if self.dry_run:
            logger.info(f"[dry-run] would write {target}")
            return True

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        target.chmod(wanted_mode)
        if os.geteuid() == 0:
            shutil.chown(target, user=owner, group=group)
        logger.info(f"Wrote {target}")
        return True

    def upsert_ini_setting(
        self, path: str, section: str, key: str, value: str | None
    ) -> bool:
        target = self._path(path)
        current = target.read_bytes().decode() if target.exists() else ""
        ensure = Absent() if value is None else Present(value)
        result = reconcile(str(target), [SettingEntry(section, key, ensure)], current)
        if not result.changed:
            return False

        for edit in result.edits:
            prefix = "[dry-run] would " if self.dry_run else ""
            logger.info(f"{prefix}{edit.describe()} in {target}")
        if not self.dry_run:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(result.content.encode())
        return True

    def detect_os_family(self) -> str:
        return detect_os_family(self._path("/etc/os-release"))
