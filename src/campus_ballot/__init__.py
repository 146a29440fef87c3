"""campus_ballot - election core for candidate registration and one-vote balloting

The ``Election`` facade exposes every operation; the component modules
(candidates, voters, clock, ledger) hold the state transitions and
``matriculation`` holds the voter eligibility parser.
"""

from . import errors, matriculation
from .election import Election

__all__ = ["Election", "errors", "matriculation"]
