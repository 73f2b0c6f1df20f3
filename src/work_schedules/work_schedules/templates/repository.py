from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import DayRule, ResolvableRule, ScheduleTemplate


class TemplateRepository(Protocol):
    """Storage for templates and their day rules.

    Implementations own the atomicity of `replace_day_rules` and `delete`.
    """

    def get_by_id(self, template_id: int) -> Optional[ScheduleTemplate]:
        raise NotImplementedError

    def list_templates(self, *, site_id: Optional[int] = None, all_sites: bool = False) -> Sequence[ScheduleTemplate]:
        """Ordered by name.

        `all_sites=True` returns everything; otherwise Global templates plus
        those of `site_id`.
        """

        raise NotImplementedError

    def create(self, *, name: str, active: bool, site_id: Optional[int]) -> int:
        raise NotImplementedError

    def update(self, *, template_id: int, name: str, active: bool, site_id: Optional[int]) -> None:
        raise NotImplementedError

    def delete(self, *, template_id: int) -> bool:
        """Remove the template together with its day rules."""

        raise NotImplementedError

    def list_day_rules(self, template_id: int) -> Sequence[DayRule]:
        """Ordered by weekday."""

        raise NotImplementedError

    def replace_day_rules(self, *, template_id: int, rules: Sequence[DayRule]) -> None:
        """Delete every rule of the template and insert `rules`, all or nothing."""

        raise NotImplementedError

    def list_rules_for_resolution(
        self, *, template_ids: Iterable[int], weekdays: Iterable[int]
    ) -> Sequence[ResolvableRule]:
        raise NotImplementedError
