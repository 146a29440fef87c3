import os
import sys

import pytest


# Ensure repository src directory is on sys.path for tests
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from campus_ballot.election import Election  # noqa: E402

ADMIN = "registrar"
NOW = 1_700_000_000
END = NOW + 3600


@pytest.fixture
def election():
    return Election(ADMIN, END)


@pytest.fixture
def open_election(election):
    election.register_candidate(ADMIN, "Ada Obi", "01234567", "XS209AB", "President")
    election.register_candidate(ADMIN, "Bola Ade", "98015555", "XC212CD", "President")
    election.open_election(ADMIN)
    return election
