from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, normalize_mysql_time
from .model import DayRule, ResolvableRule, ScheduleTemplate, scope_from_site_id
from .repository import TemplateRepository

_TEMPLATE_COLUMNS = """
    t.template_id, t.name, t.active, t.site_id, s.name AS site_name
"""

_RULE_COLUMNS = """
    r.rule_id, r.template_id, r.weekday, r.working, r.entry_time, r.exit_time,
    r.tolerance_minutes, r.rounding_minutes, r.break_minutes
"""


def _to_template(r: dict) -> ScheduleTemplate:
    return ScheduleTemplate(
        template_id=int(r["template_id"]),
        name=r["name"],
        active=bool(r["active"]),
        scope=scope_from_site_id(r.get("site_id")),
        site_name=r.get("site_name"),
    )


def _to_rule(r: dict) -> DayRule:
    return DayRule(
        rule_id=int(r["rule_id"]),
        template_id=int(r["template_id"]),
        weekday=int(r["weekday"]),
        working=bool(r["working"]),
        entry_time=normalize_mysql_time(r.get("entry_time")),
        exit_time=normalize_mysql_time(r.get("exit_time")),
        tolerance_minutes=int(r.get("tolerance_minutes") or 0),
        rounding_minutes=int(r.get("rounding_minutes") or 0),
        break_minutes=int(r.get("break_minutes") or 0),
    )


class MySQLTemplateRepository(TemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, template_id: int) -> Optional[ScheduleTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_TEMPLATE_COLUMNS}
                FROM schedule_templates t
                LEFT JOIN sites s ON s.site_id = t.site_id
                WHERE t.template_id=%s
                """,
                (int(template_id),),
            )
            r = fetchone(cur)
            return _to_template(r) if r else None

    def list_templates(self, *, site_id: Optional[int] = None, all_sites: bool = False) -> Sequence[ScheduleTemplate]:
        where = ""
        params: tuple = ()
        if not all_sites:
            where = "WHERE t.site_id IS NULL OR t.site_id=%s"
            params = (int(site_id or 0),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_TEMPLATE_COLUMNS}
                FROM schedule_templates t
                LEFT JOIN sites s ON s.site_id = t.site_id
                {where}
                ORDER BY t.name ASC, t.template_id ASC
                """,
                params,
            )
            return [_to_template(r) for r in fetchall(cur)]

    def create(self, *, name: str, active: bool, site_id: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO schedule_templates(name, active, site_id) VALUES(%s,%s,%s)",
                (name, 1 if active else 0, site_id),
            )
            return int(cur.lastrowid)

    def update(self, *, template_id: int, name: str, active: bool, site_id: Optional[int]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE schedule_templates SET name=%s, active=%s, site_id=%s WHERE template_id=%s",
                (name, 1 if active else 0, site_id, int(template_id)),
            )

    def delete(self, *, template_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM template_day_rules WHERE template_id=%s", (int(template_id),))
            cur.execute("DELETE FROM schedule_templates WHERE template_id=%s", (int(template_id),))
            return cur.rowcount > 0

    def list_day_rules(self, template_id: int) -> Sequence[DayRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RULE_COLUMNS}
                FROM template_day_rules r
                WHERE r.template_id=%s
                ORDER BY r.weekday ASC
                """,
                (int(template_id),),
            )
            return [_to_rule(r) for r in fetchall(cur)]

    def replace_day_rules(self, *, template_id: int, rules: Sequence[DayRule]) -> None:
        # Single unit of work: readers never see a half-replaced rule set.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM template_day_rules WHERE template_id=%s", (int(template_id),))
            if not rules:
                return
            cur.executemany(
                """
                INSERT INTO template_day_rules(
                    template_id, weekday, working, entry_time, exit_time,
                    tolerance_minutes, rounding_minutes, break_minutes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                [
                    (
                        int(template_id),
                        int(r.weekday),
                        1 if r.working else 0,
                        r.entry_time,
                        r.exit_time,
                        int(r.tolerance_minutes),
                        int(r.rounding_minutes),
                        int(r.break_minutes),
                    )
                    for r in rules
                ],
            )

    def list_rules_for_resolution(
        self, *, template_ids: Iterable[int], weekdays: Iterable[int]
    ) -> Sequence[ResolvableRule]:
        template_ids = sorted({int(t) for t in template_ids})
        weekdays = sorted({int(w) for w in weekdays})
        if not template_ids or not weekdays:
            return []

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RULE_COLUMNS}, t.name AS template_name, s.name AS site_name
                FROM template_day_rules r
                JOIN schedule_templates t ON t.template_id = r.template_id
                LEFT JOIN sites s ON s.site_id = t.site_id
                WHERE r.template_id IN ({in_clause(template_ids)})
                  AND r.weekday IN ({in_clause(weekdays)})
                """,
                (*template_ids, *weekdays),
            )
            return [
                ResolvableRule(
                    template_id=int(r["template_id"]),
                    template_name=r["template_name"],
                    site_name=r.get("site_name"),
                    rule=_to_rule(r),
                )
                for r in fetchall(cur)
            ]
