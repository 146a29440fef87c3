from dataclasses import dataclass, replace
from typing import List, Sequence

from .errors import InvalidCandidateId, InvalidInput, LengthMismatch
from .store import Store


@dataclass(frozen=True)
class Candidate:
    id: int
    name: str
    matriculation_number: str
    department: str
    position: str
    vote_count: int = 0


class CandidateRegistry:
    """Candidates keyed by sequential id, starting at 1 with no gaps."""

    def __init__(self, store: Store):
        self._store = store

    @property
    def _rows(self):
        return self._store.table("candidates")

    @property
    def _meta(self):
        return self._store.table("election")

    def count(self) -> int:
        return self._meta.get("candidate_count", 0)

    def register(
        self, name: str, matriculation_number: str, department: str, position: str
    ) -> int:
        fields = {
            "name": name,
            "matriculation_number": matriculation_number,
            "department": department,
            "position": position,
        }
        for field, value in fields.items():
            if not value:
                raise InvalidInput(f"candidate {field} must not be empty")
        candidate_id = self.count() + 1
        self._rows[candidate_id] = Candidate(id=candidate_id, **fields)
        self._meta["candidate_count"] = candidate_id
        return candidate_id

    def check_id(self, candidate_id: int) -> None:
        if not 1 <= candidate_id <= self.count():
            raise InvalidCandidateId(f"no candidate with id {candidate_id}")

    def get(self, candidate_id: int) -> Candidate:
        self.check_id(candidate_id)
        return self._rows[candidate_id]

    def all(self) -> List[Candidate]:
        return [self._rows[i] for i in range(1, self.count() + 1)]

    def increment(self, candidate_id: int) -> int:
        candidate = self.get(candidate_id)
        updated = replace(candidate, vote_count=candidate.vote_count + 1)
        self._rows[candidate_id] = updated
        return updated.vote_count

    def bulk_set_vote_counts(self, ids: Sequence[int], counts: Sequence[int]) -> None:
        """Overwrite vote counts directly; must run inside a transaction.

        Rows are written as the batch is walked, so an invalid id late in the
        batch relies on the enclosing transaction to undo the earlier writes.
        """
        if len(ids) != len(counts):
            raise LengthMismatch(f"{len(ids)} ids but {len(counts)} counts")
        for candidate_id, count in zip(ids, counts):
            candidate = self.get(candidate_id)
            if count < 0:
                raise InvalidInput(f"vote count for {candidate_id} must not be negative")
            self._rows[candidate_id] = replace(candidate, vote_count=count)
