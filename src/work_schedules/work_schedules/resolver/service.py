from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..assignments.model import Assignment
from ..assignments.repository import AssignmentRepository
from ..common.datetime_utils import iso_weekday, iter_days, parse_iso_date
from ..core.exceptions import ValidationError
from ..templates.model import ResolvableRule
from ..templates.repository import TemplateRepository
from .model import ResolvedDay

logger = logging.getLogger(__name__)


def pick_assignment(assignments: Sequence[Assignment], day: date) -> Optional[Assignment]:
    """Earliest-starting assignment covering `day` wins; ties go to the lower id."""
    covering = [a for a in assignments if a.covers(day)]
    if not covering:
        return None
    return min(covering, key=lambda a: (a.effective_from, a.assignment_id))


class ScheduleResolver:
    """Turns an employee's assignments into a day-by-day list of schedule windows.

    Stateless: every call reads storage again.
    """

    def __init__(self, assignments: AssignmentRepository, templates: TemplateRepository):
        self._assignments = assignments
        self._templates = templates

    def resolve_week(self, employee_id: int, range_start: date | str, range_end: date | str) -> List[ResolvedDay]:
        start = parse_iso_date(range_start)
        end = parse_iso_date(range_end)
        if start > end:
            raise ValidationError("Range start must be on or before range end")

        return list(self.iter_resolved(int(employee_id), start, end))

    def iter_resolved(self, employee_id: int, start: date, end: date) -> Iterator[ResolvedDay]:
        assignments = self._assignments.list_effective(employee_id=employee_id, range_start=start, range_end=end)
        if not assignments:
            logger.debug("Employee %s has no assignments between %s and %s", employee_id, start, end)
            return

        days = list(iter_days(start, end))
        lookup = self._rule_lookup(assignments, days)

        for day in days:
            assignment = pick_assignment(assignments, day)
            if assignment is None:
                continue

            entry = lookup.get((assignment.template_id, iso_weekday(day)))
            if entry is None or not entry.rule.has_window:
                continue

            rule = entry.rule
            yield ResolvedDay(
                date=day,
                entry_time=rule.entry_time,
                exit_time=rule.exit_time,
                template_id=entry.template_id,
                template_name=entry.template_name,
                site_name=entry.site_name,
                tolerance_minutes=rule.tolerance_minutes,
                rounding_minutes=rule.rounding_minutes,
                break_minutes=rule.break_minutes,
            )

    def _rule_lookup(
        self, assignments: Sequence[Assignment], days: Sequence[date]
    ) -> Dict[Tuple[int, int], ResolvableRule]:
        rows = self._templates.list_rules_for_resolution(
            template_ids={a.template_id for a in assignments},
            weekdays={iso_weekday(d) for d in days},
        )
        lookup: Dict[Tuple[int, int], ResolvableRule] = {}
        for row in rows:
            lookup.setdefault((row.template_id, row.rule.weekday), row)
        return lookup
