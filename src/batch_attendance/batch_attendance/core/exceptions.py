class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MemberNotFound(ValidationError):
    """Raised when the scanned member id does not exist."""


class PolicyDenied(DomainError):
    """An expected, user-facing refusal of a check-in."""


class MemberBlocked(PolicyDenied):
    """Raised when a blocked member tries to check in."""

    def __init__(self, member_id: int):
        super().__init__("Member is blocked from attendance")
        self.member_id = member_id


class OutsideWindow(PolicyDenied):
    """Raised when a first check-in falls outside the session window."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class StateConflict(DomainError):
    """The request does not fit the current state of today's record."""


class NoActiveSession(StateConflict):
    def __init__(self, message: str = "No check-in found for today"):
        super().__init__(message)


class AlreadyCheckedOut(StateConflict):
    def __init__(self, message: str = "Already checked out for today"):
        super().__init__(message)


class ScheduleConfigurationError(Exception):
    """Raised when a course schedule cannot be turned into a session window.

    Intentionally not a DomainError: this is an operator problem, not a
    member-correctable outcome.
    """
