"""Error taxonomy for the election core.

Every failure is a precondition violation raised synchronously to the caller;
the store rolls back whatever the failing operation had touched.
"""


class ElectionError(Exception):
    code = "election_error"


class Unauthorized(ElectionError):
    code = "unauthorized"


class AlreadyVoted(ElectionError):
    code = "already_voted"


class ElectionClosed(ElectionError):
    code = "election_closed"


class InvalidCandidateId(ElectionError):
    code = "invalid_candidate_id"


class InvalidInput(ElectionError):
    code = "invalid_input"


class InvalidMatriculation(ElectionError):
    code = "invalid_matriculation"


class InvalidTimeUpdate(ElectionError):
    code = "invalid_time_update"


class AlreadyOpen(ElectionError):
    code = "already_open"


class NotOpen(ElectionError):
    code = "not_open"


class LengthMismatch(ElectionError):
    code = "length_mismatch"


class NotRegistered(ElectionError):
    code = "not_registered"
