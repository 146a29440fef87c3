"""Environment-driven settings for the API server and the CLI."""

import logging
import os
import time
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_DURATION = 24 * 60 * 60
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


@dataclass(frozen=True)
class Settings:
    admin: str = "admin"
    duration: int = DEFAULT_DURATION
    identity_key: bytes = b"change-me-in-production"
    log_level: str = "INFO"
    base_url: str = "http://127.0.0.1:5000"

    def end_time(self, now: Optional[int] = None) -> int:
        if now is None:
            now = int(time.time())
        return now + self.duration


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    defaults = Settings()
    return Settings(
        admin=env.get("CAMPUS_BALLOT_ADMIN", defaults.admin),
        duration=int(env.get("CAMPUS_BALLOT_DURATION", defaults.duration)),
        identity_key=env.get(
            "CAMPUS_BALLOT_IDENTITY_KEY", defaults.identity_key.decode()
        ).encode("utf-8"),
        log_level=env.get("CAMPUS_BALLOT_LOG_LEVEL", defaults.log_level).upper(),
        base_url=env.get("CAMPUS_BALLOT_URL", defaults.base_url).rstrip("/"),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
