from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Assignment
from .repository import AssignmentRepository


def _to_assignment(r: dict) -> Assignment:
    return Assignment(
        assignment_id=int(r["assignment_id"]),
        employee_id=int(r["employee_id"]),
        template_id=int(r["template_id"]),
        effective_from=r["effective_from"],
        effective_to=r.get("effective_to"),
    )


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, employee_id: int, template_id: int, effective_from: date, effective_to: Optional[date]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedule_assignments(employee_id, template_id, effective_from, effective_to)
                VALUES(%s,%s,%s,%s)
                """,
                (int(employee_id), int(template_id), effective_from, effective_to),
            )
            return int(cur.lastrowid)

    def list_effective(self, *, employee_id: int, range_start: date, range_end: date) -> Sequence[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT assignment_id, employee_id, template_id, effective_from, effective_to
                FROM schedule_assignments
                WHERE employee_id=%s
                  AND effective_from <= %s
                  AND (effective_to IS NULL OR effective_to >= %s)
                ORDER BY effective_from ASC, assignment_id ASC
                """,
                (int(employee_id), range_end, range_start),
            )
            return [_to_assignment(r) for r in fetchall(cur)]

    def list_for_employee(self, employee_id: int) -> Sequence[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT assignment_id, employee_id, template_id, effective_from, effective_to
                FROM schedule_assignments
                WHERE employee_id=%s
                ORDER BY effective_from ASC, assignment_id ASC
                """,
                (int(employee_id),),
            )
            return [_to_assignment(r) for r in fetchall(cur)]

    def exists_for_template(self, template_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM schedule_assignments WHERE template_id=%s LIMIT 1",
                (int(template_id),),
            )
            return fetchone(cur) is not None
