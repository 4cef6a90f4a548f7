from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.constants import DAY_KEY_FORMAT
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _authorized() -> bool:
        secret = app.config.get("CRON_SECRET")
        if not secret:
            return True
        return request.headers.get("Authorization") == f"Bearer {secret}"

    @app.route("/api/cron/check-absence", methods=["GET", "POST"], endpoint="api_check_absence")
    def api_check_absence():
        """Daily trigger for the absence sweep (cron or manual)."""
        if not _authorized():
            return jsonify({"success": False, "error": "Unauthorized"}), 401

        day = request.args.get("date")
        if day:
            try:
                day = parse_iso_date(day).strftime(DAY_KEY_FORMAT)
            except ValueError:
                return jsonify({"success": False, "error": "date must be YYYY-MM-DD"}), 400

        summary = container.sweep.run(day)
        return jsonify(
            {
                "success": True,
                "date": summary.day,
                "results": summary.to_dict(),
                "message": (
                    f"Checked {summary.checked} members. Sent {summary.warnings_sent} warnings and "
                    f"{summary.blocks_applied} block notifications. "
                    f"Finalized hours for {summary.hours_finalized} records."
                ),
            }
        ), 200
