"""In-memory host used for dry runs and tests."""

from dataclasses import dataclass
from typing import Any

from agentconf.planner.intents import CronIntent
from agentconf.settings.ini import reconcile
from agentconf.settings.resolver import Absent, Present, SettingEntry

from .base import HostCapabilities


@dataclass
class FileState:
    content: str
    mode: str = "0644"
    owner: str = "root"
    group: str = "root"


class MemoryHost(HostCapabilities):
    """Host whose state lives in dicts.

    Seed it with existing files, packages and services to see what a plan
    would change; every call is recorded in ``calls``.
    """

    def __init__(
        self,
        os_family: str = "Debian",
        files: dict[str, str] | None = None,
        packages: dict[str, str] | None = None,
        services: dict[str, tuple[str, bool]] | None = None,
    ) -> None:
        self.os_family = os_family
        self.files: dict[str, FileState] = {
            path: FileState(content) for path, content in (files or {}).items()
        }
        self.packages: dict[str, str] = dict(packages or {})
        self.services: dict[str, tuple[str, bool]] = dict(services or {})
        self.crons: dict[str, CronIntent] = {}
        self.calls: list[tuple[str, Any]] = []

    def ensure_package_installed(self, name: str, version: str = "present") -> bool:
        self.calls.append(("package", (name, version)))
        installed = self.packages.get(name)
        if installed is not None and version in ("present", "installed", installed):
            return False
        self.packages[name] = "installed" if version == "present" else version
        return True

    def ensure_service_state(self, name: str, ensure: str, enable: bool) -> bool:
        self.calls.append(("service", (name, ensure, enable)))
        if self.services.get(name) == (ensure, enable):
            return False
        self.services[name] = (ensure, enable)
        return True

    def ensure_cron_job(self, cron: CronIntent) -> bool:
        self.calls.append(("cron", cron))
        current = self.crons.get(cron.name)
        if cron.ensure == "absent":
            if current is None:
                return False
            del self.crons[cron.name]
            return True
        if current is not None and (current.schedule, current.command, current.user) == (
            cron.schedule,
            cron.command,
            cron.user,
        ):
            return False
        self.crons[cron.name] = cron
        return True

    def write_file(
        self, path: str, content: str, mode: str, owner: str, group: str
    ) -> bool:
        self.calls.append(("file", path))
        desired = FileState(content, mode, owner, group)
        if self.files.get(path) == desired:
            return False
        self.files[path] = desired
        return True

    def upsert_ini_setting(
        self, path: str, section: str, key: str, value: str | None
    ) -> bool:
        self.calls.append(("ini_setting", (path, section, key, value)))
        ensure = Absent() if value is None else Present(value)
        existing = self.files.get(path)
        result = reconcile(
            path, [SettingEntry(section, key, ensure)], existing.content if existing else ""
        )
        if not result.changed:
            return False
        if existing:
            existing.content = result.content
        else:
            self.files[path] = FileState(result.content)
        return True

    def detect_os_family(self) -> str:
        return self.os_family

    def read(self, path: str) -> str:
        return self.files[path].content
