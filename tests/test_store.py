import threading

import pytest

from campus_ballot import errors
from campus_ballot.store import Store

from conftest import ADMIN


def test_transaction_commits_rows_and_events():
    store = Store()
    with store.transaction() as txn:
        store.table("voters")["alice"] = "record"
        txn.emit("cast")
    assert store.table("voters") == {"alice": "record"}
    assert store.events == ["cast"]


def test_transaction_rolls_back_on_error():
    store = Store()
    store.table("election")["end_time"] = 10
    seen = []
    store.subscribe(seen.append)
    with pytest.raises(RuntimeError):
        with store.transaction() as txn:
            store.table("election")["end_time"] = 20
            store.table("candidates")[1] = "ada"
            txn.emit("cast")
            raise RuntimeError("abort")
    assert store.table("election") == {"end_time": 10}
    assert store.table("candidates") == {}
    assert store.events == []
    assert seen == []


def test_transaction_rolls_back_on_keyboard_interrupt():
    store = Store()
    store.table("election")["is_open"] = False
    with pytest.raises(KeyboardInterrupt):
        with store.transaction():
            store.table("election")["is_open"] = True
            raise KeyboardInterrupt
    assert store.table("election") == {"is_open": False}
    # the lock was released and the store is usable again
    with store.transaction():
        store.table("election")["is_open"] = True
    assert store.table("election") == {"is_open": True}


def test_nested_transaction_merges_into_outer():
    store = Store()
    with store.transaction() as outer:
        with store.transaction() as inner:
            store.table("voters")["alice"] = "record"
            inner.emit("inner")
        assert store.table("voters") == {"alice": "record"}
        with pytest.raises(RuntimeError):
            with store.transaction():
                store.table("voters")["bob"] = "record"
                raise RuntimeError("abort")
        assert "bob" not in store.table("voters")
        outer.emit("outer")
    assert store.table("voters") == {"alice": "record"}
    assert store.events == ["inner", "outer"]


def test_other_threads_see_committed_rows_only():
    store = Store()
    store.table("candidates")[1] = "before"
    writing = threading.Event()
    release = threading.Event()
    seen = []

    def writer():
        with store.transaction():
            store.table("candidates")[1] = "after"
            writing.set()
            release.wait(5)

    t = threading.Thread(target=writer)
    t.start()
    assert writing.wait(5)
    seen.append(store.table("candidates")[1])
    release.set()
    t.join(5)
    assert seen == ["before"]
    assert store.table("candidates")[1] == "after"


class PausingIds:
    """Sequence of candidate ids that blocks before handing out its last id."""

    def __init__(self, ids):
        self.ids = ids
        self.reached_last = threading.Event()
        self.resume = threading.Event()

    def __len__(self):
        return len(self.ids)

    def __iter__(self):
        for i, candidate_id in enumerate(self.ids):
            if i == len(self.ids) - 1:
                self.reached_last.set()
                self.resume.wait(5)
            yield candidate_id


def test_bulk_override_in_progress_is_invisible_to_readers(open_election):
    ids = PausingIds([1, 2, 999])
    outcome = []

    def writer():
        try:
            open_election.set_vote_count_for_candidates(ADMIN, ids, [5, 5, 5])
        except errors.InvalidCandidateId as e:
            outcome.append(e)

    t = threading.Thread(target=writer)
    t.start()
    assert ids.reached_last.wait(5)
    during = [c.vote_count for c in open_election.list_candidates()]
    ids.resume.set()
    t.join(5)

    assert during == [0, 0]
    assert len(outcome) == 1
    assert [c.vote_count for c in open_election.list_candidates()] == [0, 0]
