from dataclasses import dataclass
from typing import Optional

from .candidates import CandidateRegistry
from .store import Store, Transaction
from .voters import VoterRegistry


@dataclass(frozen=True)
class VoteCast:
    """Notification published after a vote commits."""

    candidate_id: int
    vote_count: int


class VoteLedger:
    def __init__(self, store: Store, candidates: CandidateRegistry, voters: VoterRegistry):
        self._store = store
        self._candidates = candidates
        self._voters = voters

    @property
    def _timestamps(self):
        return self._store.table("vote_timestamps")

    def cast_vote(self, txn: Transaction, caller: str, candidate_id: int, now: int) -> VoteCast:
        """Apply a vote. Eligibility and the election window are checked by the caller."""
        vote_count = self._candidates.increment(candidate_id)
        self._voters.mark_voted(caller)
        self._timestamps[caller] = now
        event = VoteCast(candidate_id=candidate_id, vote_count=vote_count)
        txn.emit(event)
        return event

    def vote_timestamp(self, identity: str) -> Optional[int]:
        return self._timestamps.get(identity)
