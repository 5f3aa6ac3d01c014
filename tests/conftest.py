"""Shared fixtures."""

import pytest

from agentconf.config.models import AgentConfig


@pytest.fixture
def base_params():
    """Parameters shared by most agent scenarios."""
    return {
        "puppet_server": "test.exaple.com",
        "puppet_agent_service": "puppet",
        "puppet_agent_package": "puppet",
        "version": "present",
        "splay": "true",
        "environment": "production",
        "puppet_run_interval": 30,
        "puppet_server_port": 8140,
    }


@pytest.fixture
def make_config(base_params):
    def _make(**overrides):
        params = {**base_params, **overrides}
        return AgentConfig(**params)

    return _make
