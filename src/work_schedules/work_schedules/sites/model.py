from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Site:
    """A physical work location a template can be bound to."""

    site_id: int
    name: str
