from __future__ import annotations

from typing import Protocol

from ..members.model import Member


class NotificationSender(Protocol):
    """Outbound messages raised by the absence sweep.

    Implementations may raise; the sweep catches and counts failures.
    """

    def send_warning(self, member: Member, streak: int) -> None:
        raise NotImplementedError

    def send_block(self, member: Member) -> None:
        raise NotImplementedError
