from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..audit.model import AuditRecord
from ..audit.repository import AuditSink
from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_positive_id
from ..core.enums import AuditAction
from ..core.exceptions import NotFoundError, ValidationError
from ..core.principal import Principal
from ..employees.repository import EmployeeDirectory
from ..templates.access import require_readable
from ..templates.repository import TemplateRepository
from .model import Assignment
from .repository import AssignmentRepository

logger = logging.getLogger(__name__)

ENTITY_ASSIGNMENT = "Assignment"


class AssignmentService:
    """Use cases: bind employees to templates over date ranges."""

    def __init__(
        self,
        assignments: AssignmentRepository,
        templates: TemplateRepository,
        employees: EmployeeDirectory,
        audit: AuditSink,
    ):
        self._assignments = assignments
        self._templates = templates
        self._employees = employees
        self._audit = audit

    def assign(
        self,
        principal: Principal,
        *,
        employee_id: int,
        template_id: int,
        effective_from: date | str,
        effective_to: Optional[date | str] = None,
    ) -> Assignment:
        employee_id = require_positive_id(employee_id, "Employee")
        template_id = require_positive_id(template_id, "Template")
        start = parse_iso_date(effective_from)
        end = parse_iso_date(effective_to) if effective_to else None
        if end is not None and start > end:
            raise ValidationError("effective_from must be on or before effective_to")

        if not self._employees.exists(employee_id):
            raise NotFoundError("Employee not found")
        template = self._templates.get_by_id(template_id)
        if not template:
            raise NotFoundError("Template not found")
        require_readable(principal, template)

        # Overlaps are allowed; the resolver decides which assignment wins per day.
        assignment_id = self._assignments.create(
            employee_id=employee_id,
            template_id=template_id,
            effective_from=start,
            effective_to=end,
        )
        assignment = Assignment(
            assignment_id=assignment_id,
            employee_id=employee_id,
            template_id=template_id,
            effective_from=start,
            effective_to=end,
        )
        self._audit.record(
            AuditRecord.build(
                actor_id=principal.user_id,
                action=AuditAction.ASSIGNMENT_CREATE,
                entity_type=ENTITY_ASSIGNMENT,
                entity_id=assignment_id,
                data=assignment.to_dict(),
            )
        )
        logger.info(
            "Template %s assigned to employee %s from %s to %s",
            template_id,
            employee_id,
            start,
            end or "open",
        )
        return assignment

    def list_effective(self, employee_id: int, range_start: date | str, range_end: date | str) -> Sequence[Assignment]:
        start = parse_iso_date(range_start)
        end = parse_iso_date(range_end)
        if start > end:
            raise ValidationError("Range start must be on or before range end")
        return self._assignments.list_effective(employee_id=int(employee_id), range_start=start, range_end=end)

    def list_for_employee(self, employee_id: int) -> Sequence[Assignment]:
        return self._assignments.list_for_employee(require_positive_id(employee_id, "Employee"))
