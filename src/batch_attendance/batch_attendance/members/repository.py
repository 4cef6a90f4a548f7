from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Member


class MemberRepository(Protocol):
    """Repository interface for Member.

    Counters are mutated by several processes at once, so the write methods
    are expected to be single atomic statements at the storage layer.
    """

    def get_by_id(self, member_id: int) -> Optional[Member]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Member]:
        """All members in registration order."""

        raise NotImplementedError

    def reset_absence_streak(self, member_id: int) -> None:
        raise NotImplementedError

    def increment_absence_streak(self, member_id: int, *, day: str) -> Optional[int]:
        """Add one absent day unless `day` was already counted for this member.

        Returns the new streak, or None when the member was already swept
        for `day`.
        """

        raise NotImplementedError

    def set_blocked(self, member_id: int) -> bool:
        """Flip is_blocked false -> true. Returns False if it was already set."""

        raise NotImplementedError

    def set_total_hours(self, member_id: int, total_hours: float) -> None:
        raise NotImplementedError

    def set_rank(self, member_id: int, rank: int) -> None:
        raise NotImplementedError
