from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import AuditAction


@dataclass(frozen=True)
class AuditRecord:
    actor_id: int
    action: AuditAction
    entity_type: str
    entity_id: Optional[int]
    payload: str

    @classmethod
    def build(cls, *, actor_id: int, action: AuditAction, entity_type: str, entity_id: Optional[int], data: Any) -> "AuditRecord":
        return cls(
            actor_id=int(actor_id),
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            payload=json.dumps(data, default=str, ensure_ascii=False, sort_keys=True),
        )
