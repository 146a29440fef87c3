from __future__ import annotations

import hashlib
import hmac
from typing import Optional

IDENTITY_HEADER = "X-Identity-Token"
SEPARATOR = "."


def _identity_mac(key: bytes, identity: str) -> str:
    if not isinstance(key, (bytes, bytearray)):
        raise TypeError("key must be bytes")
    return hmac.new(key, identity.encode("utf-8"), hashlib.sha256).hexdigest()


def issue_identity_token(key: bytes, identity: str) -> str:
    """Issue a token binding ``identity`` to the host's HMAC key

    Returns: "<identity>.<mac_hex>"
    """

    if not identity:
        raise ValueError("identity must not be empty")
    return f"{identity}{SEPARATOR}{_identity_mac(key, identity)}"


def verify_identity_token(key: bytes, token: str) -> Optional[str]:
    """Return the identity carried by a valid token, or None"""

    if not isinstance(token, str):
        return None
    identity, sep, mac_hex = token.rpartition(SEPARATOR)
    if not sep or not identity:
        return None
    expected = _identity_mac(key, identity)
    if not hmac.compare_digest(expected.encode(), mac_hex.encode("utf-8")):
        return None
    return identity
