"""Access checks consulted at the top of every mutating operation.

Each check returns a ``Check`` instead of raising, so operations can compose
several of them and surface whichever one failed with its own error kind.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import AlreadyVoted, ElectionClosed, ElectionError, NotRegistered, Unauthorized


@dataclass(frozen=True)
class Check:
    ok: bool
    error: Optional[ElectionError] = None


PASSED = Check(ok=True)


def require_admin(admin: str, caller: str) -> Check:
    if caller != admin:
        return Check(False, Unauthorized(f"{caller!r} is not the election admin"))
    return PASSED


def require_unvoted_voter(voters, caller: str) -> Check:
    if voters.has_voted(caller):
        return Check(False, AlreadyVoted(f"{caller!r} has already voted"))
    return PASSED


def require_registered_voter(voters, caller: str) -> Check:
    if voters.get(caller) is None:
        return Check(False, NotRegistered(f"{caller!r} has not logged in as a voter"))
    return PASSED


def require_election_open(clock, now: int) -> Check:
    if not clock.is_open:
        return Check(False, ElectionClosed("election is not open"))
    if now > clock.end_time:
        return Check(False, ElectionClosed(f"election ended at {clock.end_time}"))
    return PASSED


def enforce(*checks: Check) -> None:
    """Raise the error of the first failed check, in the order given."""
    for check in checks:
        if not check.ok:
            raise check.error
