"""Scripted walk-through of an election against the in-process core.

Run with ``python -m campus_ballot.demo``.
"""

import time

from .election import Election
from .errors import ElectionError

ADMIN = "registrar"


def _print_heading(msg: str):
    print()
    print(msg)


def _print_kv(key: str, value):
    print(f"  {key}: {value}")


def main(now=None):
    now = int(time.time()) if now is None else now
    election = Election(ADMIN, now + 3600)
    election.subscribe(lambda e: _print_kv("notification", f"candidate {e.candidate_id} -> {e.vote_count}"))

    _print_heading("[Setup] Registering candidates")
    for name, matric, dept, position in (
        ("Ada Obi", "01234567", "XS209AB", "President"),
        ("Bola Ade", "98015555", "XC212CD", "President"),
    ):
        cid = election.register_candidate(ADMIN, name, matric, dept, position)
        _print_kv(f"candidate {cid}", name)

    _print_heading("[Login] Checking voter eligibility")
    voters = {
        "alice": ("XS209AB", "01234567"),
        "bob": ("XM210ZZ", "12301111"),
        "carol": ("XF2AAQQ", "77390000"),
    }
    for identity, (dept, matric) in voters.items():
        election.login_voter(identity, dept, matric)
        _print_kv(identity, "eligible")
    try:
        election.login_voter("mallory", "XS208AB", "01234567")
    except ElectionError as e:
        _print_kv("mallory", f"rejected ({e.code})")

    _print_heading("[Vote] Opening the election")
    election.open_election(ADMIN)
    for identity, choice in (("alice", 1), ("bob", 2), ("carol", 1)):
        election.vote(identity, choice, now)
        _print_kv(identity, f"voted for {choice}")
    try:
        election.vote("alice", 2, now)
    except ElectionError as e:
        _print_kv("alice again", f"rejected ({e.code})")

    _print_heading("[Override] Bulk set with an unknown id")
    try:
        election.set_vote_count_for_candidates(ADMIN, [1, 2, 999], [5, 5, 5])
    except ElectionError as e:
        _print_kv("override", f"rejected ({e.code}), nothing applied")

    election.close_election(ADMIN)
    _print_heading("[Result] Running counts")
    results = {}
    for c in election.list_candidates():
        results[c.name] = c.vote_count
        _print_kv(c.name, c.vote_count)
    return results


if __name__ == "__main__":
    main()
