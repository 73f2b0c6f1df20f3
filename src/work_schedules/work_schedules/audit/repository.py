from __future__ import annotations

from typing import Protocol

from .model import AuditRecord


class AuditSink(Protocol):
    def record(self, entry: AuditRecord) -> None:
        raise NotImplementedError
