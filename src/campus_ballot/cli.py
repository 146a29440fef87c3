"""Small CLI for interacting with the election API server.

Usage examples:
    campus-ballot token --identity alice
    campus-ballot --token <token> login --department XS209AB --matric 01234567
    campus-ballot --token <token> vote --candidate 1
    campus-ballot status
"""

import argparse
import json
from typing import Any, Dict, Optional

import requests

from .config import load_settings
from .identity import IDENTITY_HEADER, issue_identity_token

TIMEOUT = 2


class Client:
    def __init__(self, base_url: str, token: Optional[str] = None):
        self.base_url = base_url
        self.token = token

    def _headers(self) -> Dict[str, str]:
        return {IDENTITY_HEADER: self.token} if self.token else {}

    def get(self, path: str) -> Any:
        r = requests.get(f"{self.base_url}{path}", headers=self._headers(), timeout=TIMEOUT)
        return r.json()

    def post(self, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        r = requests.post(
            f"{self.base_url}{path}", json=payload or {}, headers=self._headers(), timeout=TIMEOUT
        )
        return r.json()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="campus-ballot")
    p.add_argument("--url", help="API base URL (default: CAMPUS_BALLOT_URL)")
    p.add_argument("--token", help="identity token sent as " + IDENTITY_HEADER)
    sub = p.add_subparsers(dest="cmd")

    sub.add_parser("status")
    sub.add_parser("candidates")
    sub.add_parser("events")
    sub.add_parser("open")
    sub.add_parser("close")

    t = sub.add_parser("token")
    t.add_argument("--identity", required=True)

    r = sub.add_parser("register")
    r.add_argument("--name", required=True)
    r.add_argument("--matric", required=True)
    r.add_argument("--department", required=True)
    r.add_argument("--position", required=True)

    lg = sub.add_parser("login")
    lg.add_argument("--department", required=True)
    lg.add_argument("--matric", required=True)

    v = sub.add_parser("vote")
    v.add_argument("--candidate", type=int, required=True)

    e = sub.add_parser("extend")
    e.add_argument("--end-time", type=int, required=True)

    c = sub.add_parser("set-counts")
    c.add_argument("--ids", type=int, nargs="+", required=True)
    c.add_argument("--counts", type=int, nargs="+", required=True)
    return p


def run(args: argparse.Namespace) -> Any:
    settings = load_settings()
    if args.cmd == "token":
        return {"token": issue_identity_token(settings.identity_key, args.identity)}

    client = Client(args.url or settings.base_url, args.token)
    if args.cmd == "status":
        return client.get("/election")
    if args.cmd == "candidates":
        return client.get("/candidates")
    if args.cmd == "events":
        return client.get("/events")
    if args.cmd == "open":
        return client.post("/election/open")
    if args.cmd == "close":
        return client.post("/election/close")
    if args.cmd == "register":
        return client.post(
            "/candidates",
            {
                "name": args.name,
                "matriculation_number": args.matric,
                "department": args.department,
                "position": args.position,
            },
        )
    if args.cmd == "login":
        return client.post(
            "/voters/login",
            {"department": args.department, "matriculation_number": args.matric},
        )
    if args.cmd == "vote":
        return client.post("/vote", {"candidate_id": args.candidate})
    if args.cmd == "extend":
        return client.post("/election/end-time", {"end_time": args.end_time})
    if args.cmd == "set-counts":
        return client.post("/candidates/vote-counts", {"ids": args.ids, "counts": args.counts})
    return None


def main(argv=None):
    p = build_parser()
    args = p.parse_args(argv)
    result = run(args)
    if result is None:
        p.print_help()
        return
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
