from dataclasses import dataclass

from .errors import AlreadyOpen, InvalidTimeUpdate, NotOpen
from .store import Store


@dataclass(frozen=True)
class ElectionStatus:
    is_open: bool
    end_time: int


class ElectionClock:
    """Open/closed flag plus a deadline that can only move forward.

    Re-opening a closed election is allowed; the flag is a plain toggle and
    voting additionally requires ``now <= end_time``.
    """

    def __init__(self, store: Store):
        self._store = store

    @property
    def _meta(self):
        return self._store.table("election")

    @property
    def is_open(self) -> bool:
        return self._meta.get("is_open", False)

    @property
    def end_time(self) -> int:
        return self._meta["end_time"]

    def status(self) -> ElectionStatus:
        return ElectionStatus(is_open=self.is_open, end_time=self.end_time)

    def open(self) -> None:
        if self.is_open:
            raise AlreadyOpen("election is already open")
        self._meta["is_open"] = True

    def close(self) -> None:
        if not self.is_open:
            raise NotOpen("election is not open")
        self._meta["is_open"] = False

    def extend_end_time(self, new_end_time: int, now: int) -> None:
        if new_end_time <= now:
            raise InvalidTimeUpdate(f"end time {new_end_time} is not in the future")
        if new_end_time <= self.end_time:
            raise InvalidTimeUpdate(
                f"end time {new_end_time} does not extend current end {self.end_time}"
            )
        self._meta["end_time"] = new_end_time

    def remaining_time(self, now: int) -> int:
        return max(0, self.end_time - now)

    def has_ended(self, now: int) -> bool:
        return now > self.end_time
