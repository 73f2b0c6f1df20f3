from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Assignment:
    """Binds an employee to a template over [effective_from, effective_to].

    `effective_to=None` means open-ended. Assignments of one employee may overlap.
    """

    assignment_id: int
    employee_id: int
    template_id: int
    effective_from: date
    effective_to: Optional[date] = None

    def covers(self, day: date) -> bool:
        return self.effective_from <= day and (self.effective_to is None or self.effective_to >= day)

    def intersects(self, start: date, end: date) -> bool:
        return self.effective_from <= end and (self.effective_to is None or self.effective_to >= start)

    def to_dict(self) -> dict:
        return {
            "id": self.assignment_id,
            "employee_id": self.employee_id,
            "template_id": self.template_id,
            "effective_from": self.effective_from.strftime("%Y-%m-%d"),
            "effective_to": self.effective_to.strftime("%Y-%m-%d") if self.effective_to else None,
        }
