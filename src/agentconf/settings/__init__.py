"""puppet.conf setting resolution and ini reconciliation."""

from .ini import IniEdit, IniReconciliation, reconcile
from .resolver import Absent, Present, SettingEntry, resolve

__all__ = [
    "Absent",
    "IniEdit",
    "IniReconciliation",
    "Present",
    "SettingEntry",
    "reconcile",
    "resolve",
]
