from __future__ import annotations

from enum import Enum, IntEnum


class Weekday(IntEnum):
    """ISO day of week (Monday=1 ... Sunday=7)."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


class AuditAction(str, Enum):
    """Action names written to the audit log."""

    TEMPLATE_CREATE = "template.create"
    TEMPLATE_UPDATE = "template.update"
    TEMPLATE_UPDATE_RULES = "template.update.rules"
    TEMPLATE_DELETE = "template.delete"
    ASSIGNMENT_CREATE = "assignment.create"
