"""Map an AgentConfig onto puppet.conf setting entries."""

from dataclasses import dataclass

from agentconf.config.models import AgentConfig, RunStyle


@dataclass(frozen=True)
class Present:
    """The setting must exist with this value."""

    value: str


@dataclass(frozen=True)
class Absent:
    """The setting must not exist."""


Ensure = Present | Absent


@dataclass(frozen=True)
class SettingEntry:
    """One logical puppet.conf line."""

    section: str
    key: str
    ensure: Ensure
    title: str = ""

    def __post_init__(self) -> None:
        if not self.title:
            object.__setattr__(self, "title", f"puppetagent{self.key}")

    @property
    def present(self) -> bool:
        return isinstance(self.ensure, Present)

    @property
    def value(self) -> str | None:
        if isinstance(self.ensure, Present):
            return self.ensure.value
        return None


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _optional(section: str, key: str, value: str | None) -> SettingEntry:
    """Present when value is set, absent otherwise."""
    if value is None or value == "":
        return SettingEntry(section, key, Absent())
    return SettingEntry(section, key, Present(value))


def resolve(cfg: AgentConfig) -> list[SettingEntry]:
    """Resolve the desired puppet.conf entries for a configuration.

    Settings that can be dropped by the caller are always declared, as absent
    when unset, so a value written by an earlier run gets removed.
    """
    entries = [
        SettingEntry("agent", "server", Present(cfg.puppet_server)),
        SettingEntry("agent", "masterport", Present(str(cfg.puppet_server_port))),
        SettingEntry("agent", "environment", Present(cfg.environment)),
    ]

    # The service honours runinterval; under cron the schedule drives runs.
    if cfg.puppet_run_style == RunStyle.SERVICE:
        entries.append(
            SettingEntry("agent", "runinterval", Present(str(cfg.puppet_run_interval * 60)))
        )
    else:
        entries.append(SettingEntry("agent", "runinterval", Absent()))

    if cfg.splay is not None:
        entries.append(SettingEntry("agent", "splay", Present(_bool(cfg.splay))))
    if cfg.splaylimit:
        entries.append(SettingEntry("agent", "splaylimit", Present(cfg.splaylimit)))

    entries.append(
        SettingEntry("agent", "use_srv_records", Present(_bool(cfg.use_srv_records)))
    )
    if cfg.use_srv_records and cfg.srv_domain:
        entries.append(SettingEntry("agent", "srv_domain", Present(cfg.srv_domain)))
    else:
        entries.append(SettingEntry("agent", "srv_domain", Absent()))

    entries.append(_optional("agent", "ordering", cfg.ordering))
    trusted = None if cfg.trusted_node_data is None else _bool(cfg.trusted_node_data)
    entries.append(_optional("agent", "trusted_node_data", trusted))
    entries.append(_optional("main", "templatedir", cfg.templatedir))
    entries.append(SettingEntry("agent", "configtimeout", Present(cfg.configtimeout)))

    if cfg.stringify_facts is not None:
        entries.append(
            SettingEntry(
                "agent",
                "stringify_facts",
                Present(_bool(cfg.stringify_facts)),
                title="puppetagentstringifyfacts",
            )
        )

    return entries
