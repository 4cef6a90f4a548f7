from __future__ import annotations

import logging

from flask import Flask
from flask_mail import Mail, Message

from ..members.model import Member
from .sender import NotificationSender

logger = logging.getLogger(__name__)

WARNING_SUBJECT = "Attendance Warning - Action Required"
BLOCK_SUBJECT = "Account Blocked - Attendance Violation"


def warning_body(member: Member, streak: int) -> str:
    return (
        f"Hello {member.full_name},\n\n"
        f"You have been absent for {streak} consecutive days.\n"
        "Please attend your next session. Continued absence will block your "
        "access to attendance.\n"
    )


def block_body(member: Member) -> str:
    return (
        f"Hello {member.full_name},\n\n"
        "Your account has been blocked because of repeated absences.\n"
        "Please contact the administration to restore access.\n"
    )


class FlaskMailNotificationSender(NotificationSender):
    """Sends sweep notifications synchronously through Flask-Mail."""

    def __init__(self, app: Flask, mail: Mail, *, sender: str | None = None):
        self._app = app
        self._mail = mail
        self._sender = sender

    def _send(self, subject: str, recipient: str, body: str) -> None:
        with self._app.app_context():
            msg = Message(subject, sender=self._sender, recipients=[recipient])
            msg.body = body
            self._mail.send(msg)
        logger.info("Email '%s' sent to %s", subject, recipient)

    def send_warning(self, member: Member, streak: int) -> None:
        self._send(WARNING_SUBJECT, member.email, warning_body(member, streak))

    def send_block(self, member: Member) -> None:
        self._send(BLOCK_SUBJECT, member.email, block_body(member))
