from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import day_number, format_date, format_time


@dataclass(frozen=True)
class ResolvedDay:
    """Expected attendance window for one calendar date."""

    date: date
    entry_time: time
    exit_time: time
    template_id: int
    template_name: str
    site_name: Optional[str] = None
    tolerance_minutes: int = 0
    rounding_minutes: int = 0
    break_minutes: int = 0

    def to_dict(self) -> dict:
        return {
            "id": day_number(self.date),
            "date": format_date(self.date),
            "entryTime": format_time(self.entry_time),
            "exitTime": format_time(self.exit_time),
            "siteName": self.site_name,
            "templateName": self.template_name,
            "toleranceMinutes": self.tolerance_minutes,
            "roundingMinutes": self.rounding_minutes,
            "breakMinutes": self.break_minutes,
        }
