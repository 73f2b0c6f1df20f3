from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, error_response, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.assignment_service

    @app.route("/api/assignments", methods=["POST"], endpoint="api_assignments_create")
    @admin_required
    def api_assignments_create(principal):
        try:
            data = json_body()
            assignment = service.assign(
                principal,
                employee_id=data.get("employee_id"),
                template_id=data.get("template_id"),
                effective_from=data.get("effective_from") or "",
                effective_to=data.get("effective_to") or None,
            )
            return jsonify({"success": True, "item": assignment.to_dict()}), 201
        except Exception as e:
            return error_response(e)

    @app.route(
        "/api/employees/<int:employee_id>/assignments",
        methods=["GET"],
        endpoint="api_employee_assignments",
    )
    @admin_required
    def api_employee_assignments(principal, employee_id: int):
        try:
            items = service.list_for_employee(employee_id)
            return jsonify({"success": True, "items": [a.to_dict() for a in items]})
        except Exception as e:
            return error_response(e)
