from __future__ import annotations

from typing import Optional

from ..core.exceptions import AuthorizationError
from ..core.principal import Principal
from .model import GlobalScope, Scope, ScheduleTemplate, SiteScope


def can_read(principal: Principal, scope: Scope) -> bool:
    """Site admins see Global templates and their own site's."""
    if principal.is_super_admin:
        return True
    if isinstance(scope, GlobalScope):
        return True
    return principal.has_site and scope.site_id == principal.site_id


def can_write(principal: Principal, scope: Scope) -> bool:
    """Global templates are writable by super admins only."""
    if principal.is_super_admin:
        return True
    return principal.has_site and isinstance(scope, SiteScope) and scope.site_id == principal.site_id


def require_readable(principal: Principal, template: ScheduleTemplate) -> None:
    if not can_read(principal, template.scope):
        raise AuthorizationError("You cannot view templates of another site")


def require_writable(principal: Principal, template: ScheduleTemplate) -> None:
    if not can_write(principal, template.scope):
        raise AuthorizationError("You cannot modify global templates or templates of another site")


def scope_for_create(principal: Principal, requested: Optional[Scope]) -> Scope:
    """Site admins always create in their own site; None means 'use the default'."""
    if principal.is_super_admin:
        return requested if requested is not None else GlobalScope()

    if not principal.has_site:
        raise AuthorizationError("Your administrator account is not assigned to a site")

    own = SiteScope(site_id=int(principal.site_id))
    if requested is not None and requested != own:
        raise AuthorizationError("You can only create templates for your own site")
    return own


def scope_for_update(principal: Principal, current: Scope, requested: Optional[Scope]) -> Scope:
    if principal.is_super_admin:
        return requested if requested is not None else current

    if requested is not None and requested != current:
        raise AuthorizationError("You cannot change the site of a template")
    return current
