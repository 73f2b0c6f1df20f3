from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..assignments.repository import AssignmentRepository
from ..audit.model import AuditRecord
from ..audit.repository import AuditSink
from ..common.validators import require_max_length, require_non_empty
from ..core.constants import TEMPLATE_NAME_MAX_LENGTH
from ..core.enums import AuditAction
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.principal import Principal
from ..sites.repository import SiteRepository
from .access import require_readable, require_writable, scope_for_create, scope_for_update
from .model import DayRule, DayRuleDraft, Scope, ScheduleTemplate, SiteScope, TemplateDetail
from .repository import TemplateRepository
from .validator import validate_day_rules

logger = logging.getLogger(__name__)

ENTITY_TEMPLATE = "Template"


class TemplateService:
    """Use cases: manage schedule templates and their day rules."""

    def __init__(
        self,
        templates: TemplateRepository,
        assignments: AssignmentRepository,
        sites: SiteRepository,
        audit: AuditSink,
    ):
        self._templates = templates
        self._assignments = assignments
        self._sites = sites
        self._audit = audit

    # -------- Reads --------
    def list_templates(self, principal: Principal) -> Sequence[ScheduleTemplate]:
        if principal.is_super_admin:
            return self._templates.list_templates(all_sites=True)
        return self._templates.list_templates(site_id=principal.site_id if principal.has_site else None)

    def get_template(self, principal: Principal, template_id: int) -> TemplateDetail:
        template = self._require_template(template_id)
        require_readable(principal, template)
        rules = sorted(self._templates.list_day_rules(template.template_id), key=lambda r: r.weekday)
        return TemplateDetail(template=template, rules=tuple(rules))

    # -------- Writes --------
    def create_template(
        self,
        principal: Principal,
        *,
        name: str,
        active: bool = True,
        scope: Optional[Scope] = None,
    ) -> ScheduleTemplate:
        scope = scope_for_create(principal, scope)
        name = self._clean_name(name)
        site_name = self._site_name_for(scope)

        template_id = self._templates.create(name=name, active=bool(active), site_id=scope.site_id)
        self._record(
            principal,
            AuditAction.TEMPLATE_CREATE,
            template_id,
            {"name": name, "active": bool(active), "site_id": scope.site_id},
        )
        logger.info("Template %s created by user %s (site=%s)", template_id, principal.user_id, scope.site_id)
        return ScheduleTemplate(
            template_id=template_id,
            name=name,
            active=bool(active),
            scope=scope,
            site_name=site_name,
        )

    def update_template(
        self,
        principal: Principal,
        template_id: int,
        *,
        name: str,
        active: bool = True,
        scope: Optional[Scope] = None,
    ) -> ScheduleTemplate:
        current = self._require_template(template_id)
        require_writable(principal, current)
        scope = scope_for_update(principal, current.scope, scope)
        name = self._clean_name(name)
        site_name = self._site_name_for(scope)

        self._templates.update(
            template_id=current.template_id,
            name=name,
            active=bool(active),
            site_id=scope.site_id,
        )
        self._record(
            principal,
            AuditAction.TEMPLATE_UPDATE,
            current.template_id,
            {"name": name, "active": bool(active), "site_id": scope.site_id},
        )
        logger.info("Template %s updated by user %s", current.template_id, principal.user_id)
        return ScheduleTemplate(
            template_id=current.template_id,
            name=name,
            active=bool(active),
            scope=scope,
            site_name=site_name,
        )

    def replace_day_rules(
        self,
        principal: Principal,
        template_id: int,
        rules: Sequence[DayRuleDraft],
    ) -> Sequence[DayRule]:
        """Full replace of the template's rule set.

        Everything is validated before storage is touched, so a rejected rule set
        leaves the stored one as it was.
        """

        template = self._require_template(template_id)
        require_writable(principal, template)
        validated = validate_day_rules(rules)

        self._templates.replace_day_rules(template_id=template.template_id, rules=validated)
        self._record(
            principal,
            AuditAction.TEMPLATE_UPDATE_RULES,
            template.template_id,
            [r.to_dict() for r in validated],
        )
        logger.info(
            "Template %s rules replaced by user %s (%d rules)",
            template.template_id,
            principal.user_id,
            len(validated),
        )
        return validated

    def delete_template(self, principal: Principal, template_id: int) -> None:
        template = self._require_template(template_id)
        require_writable(principal, template)

        if self._assignments.exists_for_template(template.template_id):
            raise ConflictError("Cannot delete: employees have this template assigned")

        self._templates.delete(template_id=template.template_id)
        self._record(
            principal,
            AuditAction.TEMPLATE_DELETE,
            template.template_id,
            {"name": template.name, "site_id": template.scope.site_id},
        )
        logger.info("Template %s deleted by user %s", template.template_id, principal.user_id)

    # -------- Helpers --------
    def _require_template(self, template_id: int) -> ScheduleTemplate:
        template = self._templates.get_by_id(int(template_id))
        if not template:
            raise NotFoundError("Template not found")
        return template

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        name = require_non_empty(name, "Name")
        return require_max_length(name, "Name", TEMPLATE_NAME_MAX_LENGTH)

    def _site_name_for(self, scope: Scope) -> Optional[str]:
        if not isinstance(scope, SiteScope):
            return None
        site = self._sites.get_by_id(scope.site_id)
        if not site:
            raise ValidationError("The specified site does not exist")
        return site.name

    def _record(self, principal: Principal, action: AuditAction, entity_id: int, data) -> None:
        self._audit.record(
            AuditRecord.build(
                actor_id=principal.user_id,
                action=action,
                entity_type=ENTITY_TEMPLATE,
                entity_id=entity_id,
                data=data,
            )
        )
