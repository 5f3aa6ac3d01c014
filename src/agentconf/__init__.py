"""agentconf - converge a host's Puppet agent install and configuration."""

__version__ = "0.4.0"
