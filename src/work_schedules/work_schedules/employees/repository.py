from __future__ import annotations

from typing import Protocol


class EmployeeDirectory(Protocol):
    """Read-only view of employees; they are managed elsewhere."""

    def exists(self, employee_id: int) -> bool:
        raise NotImplementedError
