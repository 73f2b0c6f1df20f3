from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify

from ..common.datetime_utils import parse_time_of_day
from ..common.http import admin_required, error_response, json_body
from ..core.exceptions import ValidationError
from ..container import Container
from .model import DayRuleDraft, Scope, scope_from_site_id


def _scope_from_payload(data: dict) -> Optional[Scope]:
    # Missing key keeps the default; null/0 explicitly means Global.
    if "site_id" not in data:
        return None
    try:
        return scope_from_site_id(data.get("site_id"))
    except (TypeError, ValueError):
        raise ValidationError("site_id must be an integer")


def _int_field(item: dict, key: str, default: int = 0) -> int:
    value = item.get(key, default)
    if value is None:
        return default
    # JSON true/false and 1.5 must not turn into valid weekdays or minutes.
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be an integer")


def _bool_field(item: dict, key: str, default: bool) -> bool:
    value = item.get(key, default)
    if not isinstance(value, bool):
        raise ValidationError(f"{key} must be a boolean")
    return value


def _draft_from_payload(item) -> DayRuleDraft:
    if not isinstance(item, dict):
        raise ValidationError("Each rule must be a JSON object")
    return DayRuleDraft(
        weekday=_int_field(item, "weekday"),
        working=_bool_field(item, "working", True),
        entry_time=parse_time_of_day(item.get("entry_time")),
        exit_time=parse_time_of_day(item.get("exit_time")),
        tolerance_minutes=_int_field(item, "tolerance_minutes"),
        rounding_minutes=_int_field(item, "rounding_minutes"),
        break_minutes=_int_field(item, "break_minutes"),
    )


def register(app: Flask, container: Container) -> None:
    service = container.template_service

    @app.route("/api/templates", methods=["GET"], endpoint="api_templates_list")
    @admin_required
    def api_templates_list(principal):
        try:
            items = service.list_templates(principal)
            return jsonify({"success": True, "items": [t.to_dict() for t in items]})
        except Exception as e:
            return error_response(e)

    @app.route("/api/templates/<int:template_id>", methods=["GET"], endpoint="api_templates_get")
    @admin_required
    def api_templates_get(principal, template_id: int):
        try:
            detail = service.get_template(principal, template_id)
            return jsonify({"success": True, "item": detail.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/api/templates", methods=["POST"], endpoint="api_templates_create")
    @admin_required
    def api_templates_create(principal):
        try:
            data = json_body()
            template = service.create_template(
                principal,
                name=data.get("name") or "",
                active=_bool_field(data, "active", True),
                scope=_scope_from_payload(data),
            )
            return jsonify({"success": True, "item": template.to_dict()}), 201
        except Exception as e:
            return error_response(e)

    @app.route("/api/templates/<int:template_id>", methods=["PUT"], endpoint="api_templates_update")
    @admin_required
    def api_templates_update(principal, template_id: int):
        try:
            data = json_body()
            template = service.update_template(
                principal,
                template_id,
                name=data.get("name") or "",
                active=_bool_field(data, "active", True),
                scope=_scope_from_payload(data),
            )
            return jsonify({"success": True, "item": template.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/api/templates/<int:template_id>/rules", methods=["PUT"], endpoint="api_templates_rules")
    @admin_required
    def api_templates_rules(principal, template_id: int):
        try:
            data = json_body()
            items = data.get("rules")
            if not isinstance(items, list):
                raise ValidationError("rules must be a list")
            rules = service.replace_day_rules(principal, template_id, [_draft_from_payload(i) for i in items])
            return jsonify({"success": True, "rules": [r.to_dict() for r in rules]})
        except Exception as e:
            return error_response(e)

    @app.route("/api/templates/<int:template_id>", methods=["DELETE"], endpoint="api_templates_delete")
    @admin_required
    def api_templates_delete(principal, template_id: int):
        try:
            service.delete_template(principal, template_id)
            return jsonify({"success": True, "message": "Template deleted"})
        except Exception as e:
            return error_response(e)
