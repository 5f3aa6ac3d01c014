"""Pydantic model for the Puppet agent desired state."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PUPPET_CONF = "/etc/puppet/puppet.conf"
DEFAULT_PUPPET_BINARY = "/usr/bin/puppet"
DEFAULT_CONFIGTIMEOUT = "2m"


class RunStyle(str, Enum):
    """How agent runs are triggered."""

    SERVICE = "service"
    CRON = "cron"


class AgentConfig(BaseModel):
    """Desired state of the Puppet agent on one host.

    Optional settings left as ``None`` are either omitted from puppet.conf or
    actively removed from it, depending on the setting.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    # Connection
    puppet_server: str = "puppet"
    puppet_server_port: int = Field(default=8140, ge=1, le=65535)
    environment: str = "production"

    # Package and service
    puppet_agent_package: str = "puppet"
    puppet_agent_service: str = "puppet"
    version: str = "present"  # package ensure: present, latest or a version

    # Scheduling
    puppet_run_style: RunStyle = RunStyle.SERVICE
    puppet_run_interval: int = Field(default=30, ge=1)  # minutes
    cron_hour: str | None = None
    cron_minute: str | None = None
    splay: bool | None = None
    splaylimit: str | None = None

    # Server discovery
    use_srv_records: bool = False
    srv_domain: str | None = None

    # Misc agent settings
    ordering: str | None = None
    trusted_node_data: bool | None = None
    templatedir: str | None = None
    configtimeout: str = DEFAULT_CONFIGTIMEOUT
    stringify_facts: bool | None = None

    # Paths
    puppet_conf: str = DEFAULT_PUPPET_CONF
    puppet_binary: str = DEFAULT_PUPPET_BINARY

    @field_validator(
        "puppet_server",
        "environment",
        "puppet_agent_package",
        "puppet_agent_service",
        "version",
        "cron_hour",
        "cron_minute",
        "splaylimit",
        "srv_domain",
        "ordering",
        "templatedir",
        "configtimeout",
        "puppet_conf",
        "puppet_binary",
        mode="before",
    )
    @classmethod
    def _single_line(cls, value: Any) -> Any:
        # Values become one "key = value" line; ini readers strip the ends
        if not isinstance(value, str):
            return value
        if "\n" in value or "\r" in value:
            raise ValueError("value must be a single line")
        return value.strip()

    @field_validator("cron_hour", "cron_minute", mode="before")
    @classmethod
    def _stringify_schedule(cls, value: Any) -> Any:
        # YAML and CLI callers pass hours as ints (cron_hour: 5)
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("configtimeout", mode="before")
    @classmethod
    def _default_configtimeout(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_CONFIGTIMEOUT
        return value
