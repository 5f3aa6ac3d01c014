"""Side-effecting intents that make up a reconciliation plan."""

from dataclasses import dataclass
from typing import ClassVar

from agentconf.settings.resolver import SettingEntry


@dataclass(frozen=True)
class PackageIntent:
    """Ensure the agent package is installed."""

    kind: ClassVar[str] = "package"

    name: str
    version: str = "present"

    @property
    def target(self) -> str:
        return self.name

    def describe(self) -> str:
        return f"Package[{self.name}]"


@dataclass(frozen=True)
class IniSettingIntent:
    """Ensure one puppet.conf setting is present or absent."""

    kind: ClassVar[str] = "ini_setting"

    path: str
    entry: SettingEntry
    require: str = ""

    @property
    def target(self) -> str:
        return self.path

    def describe(self) -> str:
        return f"Ini_setting[{self.entry.title}]"


@dataclass(frozen=True)
class FileIntent:
    """Ensure a file exists with exact content and permissions."""

    kind: ClassVar[str] = "file"

    path: str
    content: str
    mode: str = "0644"
    owner: str = "root"
    group: str = "root"
    require: str = ""

    @property
    def target(self) -> str:
        return self.path

    def describe(self) -> str:
        return f"File[{self.path}]"


@dataclass(frozen=True)
class ServiceIntent:
    """Ensure the agent service is running/stopped and enabled/disabled."""

    kind: ClassVar[str] = "service"

    name: str
    ensure: str  # "running" or "stopped"
    enable: bool
    require: str = ""

    @property
    def target(self) -> str:
        return self.name

    def describe(self) -> str:
        return f"Service[{self.name}]"


@dataclass(frozen=True)
class CronIntent:
    """Ensure a root cron job exists (or is removed)."""

    kind: ClassVar[str] = "cron"

    name: str
    command: str = ""
    user: str = "root"
    hour: str = "*"
    minute: str = "*"
    ensure: str = "present"  # "present" or "absent"
    require: str = ""

    @property
    def target(self) -> str:
        return self.name

    def describe(self) -> str:
        return f"Cron[{self.name}]"

    @property
    def schedule(self) -> str:
        return f"{self.minute} {self.hour} * * *"


Intent = PackageIntent | IniSettingIntent | FileIntent | ServiceIntent | CronIntent
