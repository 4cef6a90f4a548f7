from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import (
    AlreadyCheckedOut,
    DomainError,
    MemberBlocked,
    MemberNotFound,
    ScheduleConfigurationError,
)

logger = logging.getLogger(__name__)


def status_for(exc: Exception) -> int:
    if isinstance(exc, MemberNotFound):
        return 404
    if isinstance(exc, MemberBlocked):
        return 403
    if isinstance(exc, AlreadyCheckedOut):
        return 409
    if isinstance(exc, DomainError):
        return 400
    return 500


def error_response(exc: Exception):
    """JSON body for an expected domain outcome or a schedule misconfiguration."""
    if isinstance(exc, ScheduleConfigurationError):
        logger.error("Schedule misconfigured: %s", exc, exc_info=exc)
        return jsonify({"success": False, "error": "Course schedule is misconfigured", "detail": str(exc)}), 500
    return jsonify({"success": False, "error": str(exc)}), status_for(exc)
