from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import Optional, Sequence, Union

from ..common.datetime_utils import format_time


@dataclass(frozen=True)
class GlobalScope:
    """Template not bound to any site."""

    @property
    def site_id(self) -> None:
        return None


@dataclass(frozen=True)
class SiteScope:
    """Template bound to exactly one site."""

    site_id: int


Scope = Union[GlobalScope, SiteScope]

GLOBAL = GlobalScope()


def scope_from_site_id(site_id: Optional[int]) -> Scope:
    """Storage/API mapping: only a positive site id binds the template to a site."""
    if site_id is not None and int(site_id) > 0:
        return SiteScope(site_id=int(site_id))
    return GLOBAL


@dataclass(frozen=True)
class ScheduleTemplate:
    """Named weekly schedule definition."""

    template_id: int
    name: str
    active: bool
    scope: Scope
    site_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.template_id,
            "name": self.name,
            "active": self.active,
            "site_id": self.scope.site_id,
            "site_name": self.site_name,
        }


@dataclass(frozen=True)
class DayRuleDraft:
    """Day rule as submitted by the caller, before validation."""

    weekday: int
    working: bool = True
    entry_time: Optional[time] = None
    exit_time: Optional[time] = None
    tolerance_minutes: int = 0
    rounding_minutes: int = 0
    break_minutes: int = 0


@dataclass(frozen=True)
class DayRule:
    """Validated rule for one weekday of a template."""

    weekday: int
    working: bool
    entry_time: Optional[time]
    exit_time: Optional[time]
    tolerance_minutes: int = 0
    rounding_minutes: int = 0
    break_minutes: int = 0
    rule_id: Optional[int] = None
    template_id: Optional[int] = None

    @property
    def has_window(self) -> bool:
        return self.working and self.entry_time is not None and self.exit_time is not None

    def to_dict(self) -> dict:
        return {
            "id": self.rule_id,
            "weekday": self.weekday,
            "working": self.working,
            "entry_time": format_time(self.entry_time),
            "exit_time": format_time(self.exit_time),
            "tolerance_minutes": self.tolerance_minutes,
            "rounding_minutes": self.rounding_minutes,
            "break_minutes": self.break_minutes,
        }


@dataclass(frozen=True)
class TemplateDetail:
    template: ScheduleTemplate
    rules: Sequence[DayRule] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        data = self.template.to_dict()
        data["rules"] = [r.to_dict() for r in self.rules]
        return data


@dataclass(frozen=True)
class ResolvableRule:
    """Day rule joined with its template's label and site name."""

    template_id: int
    template_name: str
    site_name: Optional[str]
    rule: DayRule
