"""Line-preserving reconciliation of ini-style settings files."""

import logging
import re
from dataclasses import dataclass, field

from .resolver import Absent, Present, SettingEntry

logger = logging.getLogger(__name__)

_SECTION_RE = re.compile(r"^\s*\[([^\]]+)\]\s*$")
_SETTING_RE = re.compile(r"^(\s*)([^\s=#;\[][^=]*?)\s*=\s*(.*?)\s*$")

# Settings above the first section header
GLOBAL_SECTION = ""


@dataclass(frozen=True)
class IniEdit:
    """A single change made to an ini file."""

    action: str  # "add", "change" or "remove"
    section: str
    key: str
    old_value: str | None = None
    new_value: str | None = None
    path: str = ""

    def describe(self) -> str:
        where = f"[{self.section}] {self.key}" if self.section else self.key
        if self.action == "add":
            return f"add {where} = {self.new_value}"
        if self.action == "change":
            return f"change {where}: {self.old_value} -> {self.new_value}"
        return f"remove {where} (was {self.old_value})"


@dataclass
class IniReconciliation:
    """Outcome of reconciling desired entries against file content."""

    path: str
    edits: list[IniEdit] = field(default_factory=list)
    content: str = ""

    @property
    def changed(self) -> bool:
        return bool(self.edits)


class IniFile:
    """In-memory ini document that keeps unrelated lines verbatim."""

    def __init__(self, content: str = "", path: str = "") -> None:
        self.path = path
        self._original = content
        self.newline = "\r\n" if "\r\n" in content else "\n"
        self.lines = content.splitlines()
        self._dirty = False

    def sections(self) -> list[str]:
        names = []
        for line in self.lines:
            m = _SECTION_RE.match(line)
            if m and m.group(1).strip() not in names:
                names.append(m.group(1).strip())
        return names

    def _bounds(self, section: str) -> tuple[int | None, int, int]:
        """Locate a section.

        Returns:
            (header_index, body_start, body_end). header_index is None when the
            section has no header; body_end is exclusive.
        """
        headers = [
            (i, m.group(1).strip())
            for i, m in ((i, _SECTION_RE.match(line)) for i, line in enumerate(self.lines))
            if m
        ]

        if section == GLOBAL_SECTION:
            end = headers[0][0] if headers else len(self.lines)
            return None, 0, end

        for pos, (idx, name) in enumerate(headers):
            if name == section:
                end = headers[pos + 1][0] if pos + 1 < len(headers) else len(self.lines)
                return idx, idx + 1, end
        return None, len(self.lines), len(self.lines)

    def _occurrences(self, section: str, key: str) -> list[tuple[int, str, str]]:
        header, start, end = self._bounds(section)
        if header is None and section != GLOBAL_SECTION:
            return []
        found = []
        for i in range(start, end):
            m = _SETTING_RE.match(self.lines[i])
            if m and m.group(2) == key:
                found.append((i, m.group(1), m.group(3)))
        return found

    def get(self, section: str, key: str) -> str | None:
        occurrences = self._occurrences(section, key)
        return occurrences[0][2] if occurrences else None

    def set(self, section: str, key: str, value: str) -> list[IniEdit]:
        """Ensure ``key = value`` exists in ``section``."""
        if "\n" in value or "\r" in value:
            raise ValueError(f"{key}: value must be a single line, got {value!r}")
        value = value.strip()
        edits: list[IniEdit] = []
        occurrences = self._occurrences(section, key)

        if occurrences:
            idx, indent, old = occurrences[0]
            if old != value:
                self.lines[idx] = f"{indent}{key} = {value}"
                edits.append(IniEdit("change", section, key, old, value, self.path))
            for dup_idx, _, dup_old in reversed(occurrences[1:]):
                del self.lines[dup_idx]
                edits.append(IniEdit("remove", section, key, dup_old, None, self.path))
        else:
            header, start, end = self._bounds(section)
            line = f"{key} = {value}"
            if header is None and section != GLOBAL_SECTION:
                if self.lines and self.lines[-1].strip():
                    self.lines.append("")
                self.lines.append(f"[{section}]")
                self.lines.append(line)
            else:
                insert_at = start
                for i in range(start, end):
                    if self.lines[i].strip():
                        insert_at = i + 1
                self.lines.insert(insert_at, line)
            edits.append(IniEdit("add", section, key, None, value, self.path))

        if edits:
            self._dirty = True
        return edits

    def remove(self, section: str, key: str) -> list[IniEdit]:
        """Ensure ``key`` does not exist in ``section``."""
        edits = []
        for idx, _, old in reversed(self._occurrences(section, key)):
            del self.lines[idx]
            edits.append(IniEdit("remove", section, key, old, None, self.path))
        if edits:
            self._dirty = True
        return edits

    def apply(self, entry: SettingEntry) -> list[IniEdit]:
        ensure = entry.ensure
        if isinstance(ensure, Present):
            return self.set(entry.section, entry.key, ensure.value)
        if isinstance(ensure, Absent):
            return self.remove(entry.section, entry.key)
        raise TypeError(f"Unknown ensure state: {ensure!r}")

    def render(self) -> str:
        if not self._dirty:
            return self._original
        if not self.lines:
            return ""
        body = self.newline.join(self.lines)
        if self._original and not self._original.endswith("\n"):
            return body
        return body + self.newline


def reconcile(path: str, desired: list[SettingEntry], current: str) -> IniReconciliation:
    """Compute the edits that bring ``current`` in line with ``desired``.

    Entries are applied in order, so new keys land in a section in the order
    they were first written. Reconciling the returned content again produces
    no edits.
    """
    doc = IniFile(current, path=path)
    edits: list[IniEdit] = []
    for entry in desired:
        edits.extend(doc.apply(entry))

    for edit in edits:
        logger.debug(f"{path}: {edit.describe()}")

    return IniReconciliation(path=path, edits=edits, content=doc.render())
