import logging
from dataclasses import dataclass, replace
from typing import Optional

from . import matriculation
from .errors import InvalidInput, InvalidMatriculation
from .store import Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Voter:
    has_voted: bool
    department: str


class VoterRegistry:
    """Voter records keyed by caller identity. Records are never deleted."""

    def __init__(self, store: Store):
        self._store = store

    @property
    def _rows(self):
        return self._store.table("voters")

    def get(self, identity: str) -> Optional[Voter]:
        return self._rows.get(identity)

    def has_voted(self, identity: str) -> bool:
        voter = self._rows.get(identity)
        return voter is not None and voter.has_voted

    def login(self, caller: str, department: str, matriculation_number: str) -> Voter:
        """Create or replace the caller's voter record.

        Replacement is unconditional: a caller who already voted gets a fresh
        record with ``has_voted=False`` and can vote again.
        """
        if not department:
            raise InvalidInput("department must not be empty")
        if not matriculation.is_valid(department, matriculation_number):
            raise InvalidMatriculation(
                f"{matriculation_number!r} is not eligible for {department!r}"
            )
        if self.has_voted(caller):
            # TODO: decide whether re-login after voting should be rejected with AlreadyVoted
            logger.warning("login by %s resets a voter who has already voted", caller)
        voter = Voter(has_voted=False, department=department)
        self._rows[caller] = voter
        code = matriculation.department_code(department)
        logger.info("voter %s logged in (department %s)", caller, matriculation.department_for(code))
        return voter

    def mark_voted(self, caller: str) -> None:
        # callers must have logged in first; a missing record is a bug upstream
        voter = self._rows[caller]
        self._rows[caller] = replace(voter, has_voted=True)
