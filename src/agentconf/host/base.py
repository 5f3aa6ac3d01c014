"""Abstract interface to the managed host."""

from abc import ABC, abstractmethod

from agentconf.planner.intents import CronIntent


class HostCapabilities(ABC):
    """What the applier needs from a host.

    Every ``ensure_*``/``write_*``/``upsert_*`` method is idempotent and
    returns True when it changed something.
    """

    @abstractmethod
    def ensure_package_installed(self, name: str, version: str = "present") -> bool:
        """Install a package.

        Args:
            name: Package name.
            version: "present", "latest" or an exact version.
        """

    @abstractmethod
    def ensure_service_state(self, name: str, ensure: str, enable: bool) -> bool:
        """Start/stop and enable/disable a service.

        Args:
            name: Service name.
            ensure: "running" or "stopped".
            enable: Whether the service starts at boot.
        """

    @abstractmethod
    def ensure_cron_job(self, cron: CronIntent) -> bool:
        """Create, update or remove a cron job identified by ``cron.name``."""

    @abstractmethod
    def write_file(
        self, path: str, content: str, mode: str, owner: str, group: str
    ) -> bool:
        """Write a file with exact content and permissions."""

    @abstractmethod
    def upsert_ini_setting(
        self, path: str, section: str, key: str, value: str | None
    ) -> bool:
        """Set ``key`` in ``section`` of an ini file, or remove it when value is None."""

    @abstractmethod
    def detect_os_family(self) -> str:
        """Return the host's OS family fact."""
