"""Tests for ini-style settings reconciliation."""

import pytest

from agentconf.settings.ini import IniFile, reconcile
from agentconf.settings.resolver import Absent, Present, SettingEntry

PATH = "/etc/puppet/puppet.conf"

EXISTING = """\
[main]
# Where logs go
logdir = /var/log/puppet
vardir = /var/lib/puppet

[agent]
server = old.example.com
splay = false

[master]
certname = puppet
"""


class TestReconcilePresent:
    def test_empty_file_creates_section(self):
        result = reconcile(PATH, [SettingEntry("agent", "splay", Present("true"))], "")
        assert result.content == "[agent]\nsplay = true\n"
        assert [e.action for e in result.edits] == ["add"]

    def test_changes_value_in_place(self):
        result = reconcile(PATH, [SettingEntry("agent", "server", Present("new.example.com"))], EXISTING)
        assert "server = new.example.com" in result.content
        assert "old.example.com" not in result.content
        edit = result.edits[0]
        assert edit.action == "change"
        assert edit.old_value == "old.example.com"
        assert edit.new_value == "new.example.com"
        assert edit.path == PATH

    def test_adds_after_last_setting_of_section(self):
        result = reconcile(PATH, [SettingEntry("agent", "splaylimit", Present("300s"))], EXISTING)
        lines = result.content.splitlines()
        idx = lines.index("splaylimit = 300s")
        assert lines[idx - 1] == "splay = false"
        assert lines[idx + 1] == ""
        assert lines[idx + 2] == "[master]"

    def test_new_section_appended_once(self):
        desired = [
            SettingEntry("user", "a", Present("1")),
            SettingEntry("user", "b", Present("2")),
        ]
        result = reconcile(PATH, desired, EXISTING)
        assert result.content.count("[user]") == 1
        assert result.content.endswith("[user]\na = 1\nb = 2\n")

    def test_insertion_order_not_alphabetical(self):
        desired = [
            SettingEntry("agent", "zeta", Present("1")),
            SettingEntry("agent", "alpha", Present("2")),
        ]
        content = reconcile(PATH, desired, "").content
        assert content.index("zeta") < content.index("alpha")

    def test_unrelated_lines_preserved(self):
        result = reconcile(PATH, [SettingEntry("agent", "splay", Present("true"))], EXISTING)
        assert result.content == EXISTING.replace("splay = false", "splay = true")

    def test_keeps_indentation(self):
        content = "[agent]\n    splay = false\n"
        result = reconcile(PATH, [SettingEntry("agent", "splay", Present("true"))], content)
        assert result.content == "[agent]\n    splay = true\n"

    def test_duplicate_keys_collapsed(self):
        content = "[agent]\nsplay = false\nsplay = maybe\n"
        result = reconcile(PATH, [SettingEntry("agent", "splay", Present("true"))], content)
        assert result.content == "[agent]\nsplay = true\n"
        assert [e.action for e in result.edits] == ["change", "remove"]

    def test_same_key_other_section_untouched(self):
        content = "[main]\nserver = a\n\n[agent]\nserver = b\n"
        result = reconcile(PATH, [SettingEntry("agent", "server", Present("c"))], content)
        assert result.content == "[main]\nserver = a\n\n[agent]\nserver = c\n"

    def test_global_section(self):
        content = "top = 1\n[agent]\nsplay = true\n"
        result = reconcile(PATH, [SettingEntry("", "other", Present("2"))], content)
        assert result.content == "top = 1\nother = 2\n[agent]\nsplay = true\n"


class TestReconcileAbsent:
    def test_removes_line(self):
        result = reconcile(PATH, [SettingEntry("agent", "splay", Absent())], EXISTING)
        assert "splay" not in result.content
        assert result.edits[0].action == "remove"
        assert result.edits[0].old_value == "false"

    def test_absent_and_missing_is_noop(self):
        result = reconcile(PATH, [SettingEntry("agent", "ordering", Absent())], EXISTING)
        assert result.edits == []
        assert result.content == EXISTING
        assert result.changed is False

    def test_absent_in_missing_section_is_noop(self):
        result = reconcile(PATH, [SettingEntry("user", "x", Absent())], EXISTING)
        assert result.edits == []


class TestIdempotence:
    def test_second_pass_has_no_edits(self):
        desired = [
            SettingEntry("agent", "server", Present("puppet.example.com")),
            SettingEntry("agent", "splay", Absent()),
            SettingEntry("agent", "ordering", Present("manifest")),
            SettingEntry("main", "templatedir", Present("$confdir/templates")),
            SettingEntry("user", "x", Present("1")),
        ]
        first = reconcile(PATH, desired, EXISTING)
        assert first.changed
        second = reconcile(PATH, desired, first.content)
        assert second.edits == []
        assert second.content == first.content

    def test_padded_value_settles_after_one_pass(self):
        desired = [SettingEntry("main", "templatedir", Present("/srv/tpl "))]
        first = reconcile(PATH, desired, EXISTING)
        assert first.edits[0].new_value == "/srv/tpl"
        assert reconcile(PATH, desired, first.content).edits == []

    def test_crlf_line_endings_kept(self):
        content = "[main]\r\nlogdir = /var/log/puppet\r\n\r\n[agent]\r\nsplay = false\r\n"
        result = reconcile(PATH, [SettingEntry("agent", "splay", Present("true"))], content)
        assert result.content == content.replace("splay = false", "splay = true")

    def test_no_edits_keeps_content_byte_for_byte(self):
        content = "[agent]\nsplay = true"
        result = reconcile(PATH, [SettingEntry("agent", "splay", Present("true"))], content)
        assert result.content == content


class TestIniFile:
    def test_get_and_sections(self):
        doc = IniFile(EXISTING)
        assert doc.sections() == ["main", "agent", "master"]
        assert doc.get("agent", "server") == "old.example.com"
        assert doc.get("agent", "missing") is None

    def test_comment_lines_are_not_settings(self):
        doc = IniFile("[main]\n# server = commented\n; splay = x\n")
        assert doc.get("main", "server") is None
        assert doc.get("main", "splay") is None

    def test_describe_edits(self):
        edits = IniFile("[agent]\nsplay = false\n").set("agent", "splay", "true")
        assert edits[0].describe() == "change [agent] splay: false -> true"

    def test_multiline_value_rejected(self):
        doc = IniFile(EXISTING)
        with pytest.raises(ValueError, match="single line"):
            doc.set("agent", "server", "a\nserver = evil")
        assert doc.get("agent", "server") == "old.example.com"
