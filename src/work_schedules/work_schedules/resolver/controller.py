from __future__ import annotations

from datetime import date, timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_date
from ..common.http import error_response, login_required
from ..container import Container
from ..core.constants import DEFAULT_RANGE_DAYS


def register(app: Flask, container: Container) -> None:
    resolver = container.schedule_resolver

    @app.route("/api/schedules/week", methods=["GET"], endpoint="api_schedules_week")
    @login_required
    def api_schedules_week(principal):
        """Expected schedule of the signed-in employee, one item per working day."""
        today = date.today()
        start_s = request.args.get("from") or format_date(today)
        end_s = request.args.get("to") or format_date(today + timedelta(days=DEFAULT_RANGE_DAYS - 1))
        try:
            items = resolver.resolve_week(principal.user_id, start_s, end_s)
            return jsonify({"items": [i.to_dict() for i in items]})
        except Exception as e:
            return error_response(e)
