"""Structural checks for a day rule set submitted as a whole.

Checks run in a fixed order and stop at the first failure:
weekday range, then duplicate weekdays, then the time window of each working day.
Minutes fields are never rejected, only clamped to zero.
"""

from __future__ import annotations

from typing import List, Sequence

from ..common.validators import clamp_non_negative
from ..core.enums import Weekday
from ..core.exceptions import ValidationError
from .model import DayRule, DayRuleDraft


def validate_day_rules(drafts: Sequence[DayRuleDraft]) -> List[DayRule]:
    drafts = list(drafts or [])

    for d in drafts:
        if not Weekday.MONDAY <= d.weekday <= Weekday.SUNDAY:
            raise ValidationError("Invalid weekday (1..7)")

    weekdays = [d.weekday for d in drafts]
    if len(set(weekdays)) != len(weekdays):
        raise ValidationError("Repeated weekdays in day rules")

    rules: List[DayRule] = []
    for d in drafts:
        if d.working:
            if d.entry_time is None or d.exit_time is None:
                raise ValidationError(f"Day {d.weekday}: entry_time and exit_time are required")
            if d.entry_time >= d.exit_time:
                raise ValidationError(f"Day {d.weekday}: entry_time must be earlier than exit_time")

        rules.append(
            DayRule(
                weekday=int(d.weekday),
                working=bool(d.working),
                entry_time=d.entry_time,
                exit_time=d.exit_time,
                tolerance_minutes=clamp_non_negative(d.tolerance_minutes),
                rounding_minutes=clamp_non_negative(d.rounding_minutes),
                break_minutes=clamp_non_negative(d.break_minutes),
            )
        )

    return rules
