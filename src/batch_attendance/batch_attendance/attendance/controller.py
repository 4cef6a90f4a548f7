from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http_errors import error_response
from ..common.validators import require_positive_id
from ..core.constants import DAY_KEY_FORMAT
from ..core.enums import ScanAction
from ..core.exceptions import DomainError, ScheduleConfigurationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _member_id() -> int:
        payload = request.get_json(silent=True) or {}
        return require_positive_id(payload.get("member_id"), "member_id")

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_list")
    def api_attendance_list():
        day = request.args.get("date") or container.ledger.day_for()
        try:
            day = parse_iso_date(day).strftime(DAY_KEY_FORMAT)
        except ValueError:
            return jsonify({"success": False, "error": "date must be YYYY-MM-DD"}), 400

        records = container.ledger.records_for_day(day)
        return jsonify({"success": True, "date": day, "attendance": [r.to_dict() for r in records]}), 200

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="api_checkin")
    def api_checkin():
        try:
            record = container.ledger.check_in(_member_id())
        except (DomainError, ScheduleConfigurationError) as e:
            return error_response(e)
        return jsonify({"success": True, "attendance": record.to_dict(), "message": "Checked in successfully"}), 200

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="api_checkout")
    def api_checkout():
        try:
            record = container.ledger.check_out(_member_id())
        except (DomainError, ScheduleConfigurationError) as e:
            return error_response(e)
        return jsonify({"success": True, "attendance": record.to_dict(), "message": "Checked out successfully"}), 200

    @app.route("/api/attendance/scan", methods=["POST"], endpoint="api_scan")
    def api_scan():
        """Token scan: the token carries the member id; IN/OUT is decided by today's record."""
        try:
            result = container.ledger.scan(_member_id())
        except (DomainError, ScheduleConfigurationError) as e:
            return error_response(e)

        message = "Checked in successfully" if result.action == ScanAction.CHECK_IN else "Checked out successfully"
        return jsonify(
            {
                "success": True,
                "action": result.action.value,
                "attendance": result.record.to_dict(),
                "message": message,
            }
        ), 200
