"""Flask JSON API over the election core.

Endpoints:
- GET  /election                 -> status {"is_open", "end_time", "remaining_time", "has_ended", "admin"}
- POST /election/open            -> admin opens the election
- POST /election/close           -> admin closes the election
- POST /election/end-time        -> admin extends the deadline {"end_time": ...}
- GET  /candidates               -> list of candidates
- GET  /candidates/count         -> {"count": ...}
- GET  /candidates/<id>          -> one candidate
- POST /candidates               -> admin registers a candidate
- POST /candidates/vote-counts   -> admin overwrites vote counts {"ids": [...], "counts": [...]}
- POST /voters/login             -> caller logs in {"department": ..., "matriculation_number": ...}
- GET  /voters/<identity>        -> {"has_voted": ..., "voted_at": ...}
- POST /vote                     -> caller votes {"candidate_id": ...}
- GET  /events                   -> committed vote notifications

The caller is identified by the ``X-Identity-Token`` header, issued by the host
identity provider (see ``identity.issue_identity_token``).
"""

import logging
import time
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional

from flask import Flask, jsonify, request

from .config import Settings, configure_logging, load_settings
from .election import Election
from .errors import (
    AlreadyOpen,
    AlreadyVoted,
    ElectionClosed,
    ElectionError,
    InvalidCandidateId,
    NotOpen,
    NotRegistered,
    Unauthorized,
)
from .identity import IDENTITY_HEADER, verify_identity_token

logger = logging.getLogger(__name__)

# anything not listed is an input error (400)
STATUS_CODES: Dict[type, int] = {
    Unauthorized: 403,
    AlreadyVoted: 403,
    ElectionClosed: 403,
    NotRegistered: 403,
    InvalidCandidateId: 404,
    AlreadyOpen: 409,
    NotOpen: 409,
}


class BadRequest(Exception):
    pass


class MissingIdentity(Exception):
    pass


def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise BadRequest("request body must be a JSON object")
    return data


def _int_field(data: Dict[str, Any], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise BadRequest(f"missing or invalid {key!r}")
    return value


def _str_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise BadRequest(f"invalid {key!r}")
    return value


def _int_list(data: Dict[str, Any], key: str) -> List[int]:
    values = data.get(key)
    if not isinstance(values, list) or any(
        isinstance(v, bool) or not isinstance(v, int) for v in values
    ):
        raise BadRequest(f"{key!r} must be a list of integers")
    return values


def create_app(
    election: Optional[Election] = None,
    settings: Optional[Settings] = None,
    clock: Optional[Callable[[], int]] = None,
) -> Flask:
    settings = settings or load_settings()
    now = clock or (lambda: int(time.time()))
    if election is None:
        election = Election(settings.admin, settings.end_time(now()))

    app = Flask(__name__)
    app.config["ELECTION"] = election
    app.config["SETTINGS"] = settings

    def caller() -> str:
        identity = verify_identity_token(
            settings.identity_key, request.headers.get(IDENTITY_HEADER, "")
        )
        if identity is None:
            raise MissingIdentity()
        return identity

    @app.errorhandler(ElectionError)
    def election_error(e: ElectionError):
        status = STATUS_CODES.get(type(e), 400)
        return jsonify({"error": e.code, "detail": str(e)}), status

    @app.errorhandler(BadRequest)
    def bad_request(e: BadRequest):
        return jsonify({"error": "bad_request", "detail": str(e)}), 400

    @app.errorhandler(MissingIdentity)
    def missing_identity(e: MissingIdentity):
        return jsonify({"error": "unauthenticated", "detail": "missing or invalid identity token"}), 401

    @app.route("/election", methods=["GET"])
    def election_status():
        ts = now()
        status = election.get_election_status()
        return jsonify(
            {
                "is_open": status.is_open,
                "end_time": status.end_time,
                "remaining_time": election.remaining_time(ts),
                "has_ended": election.has_voting_ended(ts),
                "admin": election.admin,
            }
        )

    @app.route("/election/open", methods=["POST"])
    def open_election():
        election.open_election(caller())
        return jsonify({"status": "open"})

    @app.route("/election/close", methods=["POST"])
    def close_election():
        election.close_election(caller())
        return jsonify({"status": "closed"})

    @app.route("/election/end-time", methods=["POST"])
    def update_end_time():
        identity = caller()
        end_time = _int_field(_body(), "end_time")
        election.update_election_end_time(identity, end_time, now())
        return jsonify({"end_time": election.get_election_status().end_time})

    @app.route("/candidates", methods=["GET"])
    def list_candidates():
        return jsonify({"candidates": [asdict(c) for c in election.list_candidates()]})

    @app.route("/candidates/count", methods=["GET"])
    def candidate_count():
        return jsonify({"count": election.get_candidate_count()})

    @app.route("/candidates/<int:candidate_id>", methods=["GET"])
    def get_candidate(candidate_id: int):
        return jsonify(asdict(election.get_candidate(candidate_id)))

    @app.route("/candidates", methods=["POST"])
    def register_candidate():
        identity = caller()
        data = _body()
        candidate_id = election.register_candidate(
            identity,
            _str_field(data, "name"),
            _str_field(data, "matriculation_number"),
            _str_field(data, "department"),
            _str_field(data, "position"),
        )
        return jsonify({"id": candidate_id}), 201

    @app.route("/candidates/vote-counts", methods=["POST"])
    def set_vote_counts():
        identity = caller()
        data = _body()
        ids = _int_list(data, "ids")
        counts = _int_list(data, "counts")
        election.set_vote_count_for_candidates(identity, ids, counts)
        return jsonify({"status": "ok"})

    @app.route("/voters/login", methods=["POST"])
    def login_voter():
        identity = caller()
        data = _body()
        voter = election.login_voter(
            identity,
            _str_field(data, "department"),
            _str_field(data, "matriculation_number"),
        )
        return jsonify({"identity": identity, "voter": asdict(voter)})

    @app.route("/voters/<identity>", methods=["GET"])
    def voter_status(identity: str):
        return jsonify(
            {
                "identity": identity,
                "has_voted": election.has_voted(identity),
                "voted_at": election.get_vote_timestamp(identity),
            }
        )

    @app.route("/vote", methods=["POST"])
    def vote():
        identity = caller()
        candidate_id = _int_field(_body(), "candidate_id")
        event = election.vote(identity, candidate_id, now())
        return jsonify({"status": "cast", "event": asdict(event)}), 201

    @app.route("/events", methods=["GET"])
    def events():
        return jsonify({"events": [asdict(e) for e in election.events]})

    return app


if __name__ == "__main__":
    _settings = load_settings()
    configure_logging(_settings)
    create_app(settings=_settings).run(debug=True)
