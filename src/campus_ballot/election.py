"""Election facade: every public operation of the election core.

Each mutating method runs as one transaction on the store. Guards are checked
first, then exactly one component is mutated. Any exception rolls the store
back to where it was before the call. The caller identity and the current
time are supplied by the host and trusted as given.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

from . import guards
from .candidates import Candidate, CandidateRegistry
from .clock import ElectionClock, ElectionStatus
from .errors import ElectionError
from .ledger import VoteCast, VoteLedger
from .store import Store
from .voters import Voter, VoterRegistry

logger = logging.getLogger(__name__)


class Election:
    def __init__(self, admin: str, end_time: int, store: Optional[Store] = None):
        if not admin:
            raise ValueError("admin identity must not be empty")
        self.store = store if store is not None else Store()
        meta = self.store.table("election")
        # an existing store keeps its admin and schedule
        meta.setdefault("admin", admin)
        meta.setdefault("end_time", int(end_time))
        meta.setdefault("is_open", False)
        meta.setdefault("candidate_count", 0)

        self.candidates = CandidateRegistry(self.store)
        self.voters = VoterRegistry(self.store)
        self.clock = ElectionClock(self.store)
        self.ledger = VoteLedger(self.store, self.candidates, self.voters)

    @property
    def admin(self) -> str:
        return self.store.table("election")["admin"]

    @property
    def events(self) -> List[Any]:
        return list(self.store.events)

    def subscribe(self, callback: Callable[[VoteCast], None]) -> None:
        self.store.subscribe(callback)

    def _admin_op(self, caller: str, action: str) -> None:
        try:
            guards.enforce(guards.require_admin(self.admin, caller))
        except ElectionError:
            logger.warning("%s rejected: %s is not admin", action, caller)
            raise

    ## --- candidates ------------------------------------------------------

    def register_candidate(
        self,
        caller: str,
        name: str,
        matriculation_number: str,
        department: str,
        position: str,
    ) -> int:
        with self.store.transaction():
            self._admin_op(caller, "register_candidate")
            candidate_id = self.candidates.register(
                name, matriculation_number, department, position
            )
        logger.info("registered candidate %d (%s) for %s", candidate_id, name, position)
        return candidate_id

    def get_candidate(self, candidate_id: int) -> Candidate:
        return self.candidates.get(candidate_id)

    def get_candidate_count(self) -> int:
        return self.candidates.count()

    def list_candidates(self) -> List[Candidate]:
        return self.candidates.all()

    def set_vote_count_for_candidates(
        self, caller: str, ids: Sequence[int], counts: Sequence[int]
    ) -> None:
        with self.store.transaction():
            self._admin_op(caller, "set_vote_count_for_candidates")
            self.candidates.bulk_set_vote_counts(ids, counts)
        logger.info("vote counts overwritten for candidates %s", list(ids))

    ## --- voters ----------------------------------------------------------

    def login_voter(self, caller: str, department: str, matriculation_number: str) -> Voter:
        with self.store.transaction():
            return self.voters.login(caller, department, matriculation_number)

    def has_voted(self, identity: str) -> bool:
        return self.voters.has_voted(identity)

    def get_vote_timestamp(self, identity: str) -> Optional[int]:
        return self.ledger.vote_timestamp(identity)

    def vote(self, caller: str, candidate_id: int, now: int) -> VoteCast:
        with self.store.transaction() as txn:
            try:
                guards.enforce(
                    guards.require_unvoted_voter(self.voters, caller),
                    guards.require_election_open(self.clock, now),
                    guards.require_registered_voter(self.voters, caller),
                )
                self.candidates.check_id(candidate_id)
            except ElectionError as e:
                logger.warning("vote by %s rejected: %s", caller, e.code)
                raise
            event = self.ledger.cast_vote(txn, caller, candidate_id, now)
        logger.info("vote cast for candidate %d (count %d)", event.candidate_id, event.vote_count)
        return event

    ## --- lifecycle -------------------------------------------------------

    def get_election_status(self) -> ElectionStatus:
        return self.clock.status()

    def open_election(self, caller: str) -> None:
        with self.store.transaction():
            self._admin_op(caller, "open_election")
            self.clock.open()
        logger.info("election opened")

    def close_election(self, caller: str) -> None:
        with self.store.transaction():
            self._admin_op(caller, "close_election")
            self.clock.close()
        logger.info("election closed")

    def update_election_end_time(self, caller: str, new_end_time: int, now: int) -> None:
        with self.store.transaction():
            self._admin_op(caller, "update_election_end_time")
            self.clock.extend_end_time(new_end_time, now)
        logger.info("election end time extended to %d", new_end_time)

    def remaining_time(self, now: int) -> int:
        return self.clock.remaining_time(now)

    def has_voting_ended(self, now: int) -> bool:
        return self.clock.has_ended(now)
