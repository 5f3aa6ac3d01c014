"""Agent configuration model and loading."""

from .loader import load_agent_config, load_yaml
from .models import AgentConfig, RunStyle

__all__ = ["AgentConfig", "RunStyle", "load_agent_config", "load_yaml"]
