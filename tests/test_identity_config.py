import pytest

from campus_ballot import identity
from campus_ballot.config import DEFAULT_DURATION, Settings, load_settings


def test_identity_token_roundtrip():
    key = b"k" * 32
    token = identity.issue_identity_token(key, "alice@uni.example")
    assert identity.verify_identity_token(key, token) == "alice@uni.example"


def test_identity_token_rejects_wrong_key_and_garbage():
    token = identity.issue_identity_token(b"right-key", "alice")
    assert identity.verify_identity_token(b"wrong-key", token) is None
    assert identity.verify_identity_token(b"right-key", "alice") is None
    assert identity.verify_identity_token(b"right-key", "") is None
    assert identity.verify_identity_token(b"right-key", None) is None


def test_identity_token_requires_bytes_key():
    with pytest.raises(TypeError):
        identity.issue_identity_token("not-bytes", "alice")


def test_load_settings_defaults():
    s = load_settings({})
    assert s == Settings()
    assert s.duration == DEFAULT_DURATION
    assert s.end_time(100) == 100 + DEFAULT_DURATION


def test_load_settings_from_environment():
    s = load_settings(
        {
            "CAMPUS_BALLOT_ADMIN": "registrar",
            "CAMPUS_BALLOT_DURATION": "60",
            "CAMPUS_BALLOT_IDENTITY_KEY": "secret",
            "CAMPUS_BALLOT_LOG_LEVEL": "debug",
            "CAMPUS_BALLOT_URL": "http://ballot.example/",
        }
    )
    assert s.admin == "registrar"
    assert s.duration == 60
    assert s.identity_key == b"secret"
    assert s.log_level == "DEBUG"
    assert s.base_url == "http://ballot.example"
