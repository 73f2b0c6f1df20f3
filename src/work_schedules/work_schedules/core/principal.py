from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Principal:
    """Capability of the caller, supplied by the authentication layer.

    The engine never looks at roles directly: it only consumes these fields.
    """

    user_id: int
    is_super_admin: bool = False
    site_id: Optional[int] = None

    @property
    def has_site(self) -> bool:
        return self.site_id is not None and self.site_id > 0
