"""Exception hierarchy for agentconf."""

from typing import Any


class AgentConfError(Exception):
    """Base class for all agentconf failures."""


class ConfigError(AgentConfError):
    """Raised when configuration loading or schema validation fails."""


class ValidationError(AgentConfError):
    """Raised when parameters contradict each other.

    Attributes:
        attributes: The offending attribute pair, e.g. ("splaylimit", "splay").
    """

    def __init__(self, message: str, attributes: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.attributes = attributes


class UnsupportedPlatformError(AgentConfError):
    """Raised for an OS family with no platform profile."""

    def __init__(self, os_family: str) -> None:
        super().__init__(f"Unsupported OS family: {os_family!r}")
        self.os_family = os_family


class ReconciliationError(AgentConfError):
    """Raised when applying a single intent fails.

    Attributes:
        intent: The intent that failed.
        target: Path or resource name the intent was acting on.
    """

    def __init__(self, intent: Any, target: str, cause: BaseException | None = None) -> None:
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to apply {intent.describe()} ({target}){detail}")
        self.intent = intent
        self.target = target
        self.cause = cause
