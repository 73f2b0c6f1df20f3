from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Assignment


class AssignmentRepository(Protocol):
    def create(self, *, employee_id: int, template_id: int, effective_from: date, effective_to: Optional[date]) -> int:
        """Insert without any overlap check. Returns assignment_id."""

        raise NotImplementedError

    def list_effective(self, *, employee_id: int, range_start: date, range_end: date) -> Sequence[Assignment]:
        """Assignments intersecting [range_start, range_end], by effective_from then id."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[Assignment]:
        raise NotImplementedError

    def exists_for_template(self, template_id: int) -> bool:
        raise NotImplementedError
