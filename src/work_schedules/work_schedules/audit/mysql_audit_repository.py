from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import AuditRecord
from .repository import AuditSink


class MySQLAuditSink(AuditSink):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record(self, entry: AuditRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO audit_log(actor_id, action, entity_type, entity_id, payload)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (entry.actor_id, entry.action.value, entry.entity_type, entry.entity_id, entry.payload),
            )
