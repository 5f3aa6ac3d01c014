"""Tests for applying plans to a host."""

from unittest.mock import MagicMock, patch

import pytest

from agentconf.errors import ReconciliationError
from agentconf.host.apply import apply
from agentconf.host.base import HostCapabilities
from agentconf.host.local import LocalHost
from agentconf.host.memory import MemoryHost
from agentconf.planner.intents import FileIntent, IniSettingIntent, PackageIntent
from agentconf.planner.plan import build_plan

PUPPET_CONF = "/etc/puppet/puppet.conf"


class TestApplyToMemoryHost:
    def test_fresh_host_converges(self, make_config):
        config = make_config(puppet_run_style="cron", cron_hour=5, cron_minute="*/30")
        plan = build_plan(config, "Debian", fqdn="node1")
        host = MemoryHost("Debian")

        report = apply(plan, host)

        assert host.packages == {"puppet": "installed"}
        assert host.services["puppet"] == ("stopped", False)
        assert host.crons["puppet-client"].schedule == "*/30 5 * * *"
        assert "START=no" in host.read("/etc/default/puppet")
        conf = host.read(PUPPET_CONF)
        assert "[agent]" in conf
        assert "server = test.exaple.com" in conf
        assert "splay = true" in conf
        assert "configtimeout = 2m" in conf
        assert "ordering" not in conf
        assert report.changed

    def test_second_apply_changes_nothing(self, make_config):
        plan = build_plan(make_config(puppet_run_style="service"), "RedHat", fqdn="node1")
        host = MemoryHost("RedHat")
        apply(plan, host)

        report = apply(plan, host)
        assert report.changed == []
        assert len(report.unchanged) == len(plan)

    def test_removes_previously_set_values(self, make_config):
        host = MemoryHost(
            "Debian",
            files={
                PUPPET_CONF: "[main]\ntemplatedir = /old\n\n[agent]\nordering = manifest\n"
                "srv_domain = stale.example.com\n"
            },
        )
        apply(build_plan(make_config(), "Debian", fqdn="node1"), host)

        conf = host.read(PUPPET_CONF)
        assert "templatedir" not in conf
        assert "ordering" not in conf
        assert "srv_domain" not in conf
        assert "[main]" in conf

    def test_switch_from_cron_to_service_removes_job(self, make_config):
        host = MemoryHost("RedHat")
        apply(build_plan(make_config(puppet_run_style="cron"), "RedHat", fqdn="n"), host)
        assert "puppet-client" in host.crons

        apply(build_plan(make_config(puppet_run_style="service"), "RedHat", fqdn="n"), host)
        assert "puppet-client" not in host.crons
        assert host.services["puppet"] == ("running", True)


class TestApplyFailures:
    def test_first_failure_aborts_remaining(self, make_config):
        plan = build_plan(make_config(), "Debian", fqdn="node1")
        host = MagicMock(spec=HostCapabilities)
        host.ensure_package_installed.return_value = True
        host.upsert_ini_setting.return_value = False
        host.write_file.side_effect = PermissionError("read-only filesystem")

        with pytest.raises(ReconciliationError) as exc:
            apply(plan, host)

        assert isinstance(exc.value.intent, FileIntent)
        assert exc.value.target == "/etc/default/puppet"
        assert isinstance(exc.value.cause, PermissionError)
        assert "File[/etc/default/puppet]" in str(exc.value)
        host.ensure_service_state.assert_not_called()
        host.ensure_cron_job.assert_not_called()

    def test_package_failure_stops_everything(self, make_config):
        import subprocess

        plan = build_plan(make_config(), "RedHat", fqdn="node1")
        host = MagicMock(spec=HostCapabilities)
        host.ensure_package_installed.side_effect = subprocess.CalledProcessError(
            100, ["yum", "install", "-y", "puppet"]
        )

        with pytest.raises(ReconciliationError) as exc:
            apply(plan, host)
        assert isinstance(exc.value.intent, PackageIntent)
        assert exc.value.target == "puppet"
        host.upsert_ini_setting.assert_not_called()

    def test_undecodable_puppet_conf(self, make_config, tmp_path):
        conf = tmp_path / "etc" / "puppet" / "puppet.conf"
        conf.parent.mkdir(parents=True)
        conf.write_bytes(b"[agent]\nserver = caf\xe9\n")
        host = LocalHost(root=tmp_path, dry_run=True)

        with patch.object(LocalHost, "ensure_package_installed", return_value=False):
            with pytest.raises(ReconciliationError) as exc:
                apply(build_plan(make_config(), "Debian", fqdn="node1"), host)

        assert isinstance(exc.value.intent, IniSettingIntent)
        assert isinstance(exc.value.cause, UnicodeDecodeError)
        assert "Failed to apply Ini_setting[puppetagentserver]" in str(exc.value)
