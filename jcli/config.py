"""
Connection settings for the Jenkins CLI.

Settings are read from the environment (and a local .env file) exactly once,
at startup, and then passed around as a Config value.  Nothing else in the
package reads os.environ.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

_DEFAULT_TIMEOUT = 30
_FALSY = ("false", "0", "no")


@dataclass(frozen=True)
class Config:
    url: str
    user: str
    token: str = ""
    verify_ssl: bool = True
    timeout: float = _DEFAULT_TIMEOUT
    log_level: str = "WARNING"

    @property
    def auth(self) -> tuple[str, str]:
        return (self.user, self.token)

    @classmethod
    def from_env(cls, environ: dict | None = None) -> "Config":
        """Build a Config from JENKINS_* variables.

        Raises EnvironmentError listing every missing required variable.
        JENKINS_TOKEN falls back to JENKINS_PW for older setups.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        url = environ.get("JENKINS_URL", "").rstrip("/")
        user = environ.get("JENKINS_USER", "")

        missing = [k for k, v in {
            "JENKINS_URL": url,
            "JENKINS_USER": user,
        }.items() if not v]

        if missing:
            raise EnvironmentError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Set them in your shell or in a .env file."
            )

        raw_timeout = environ.get("JENKINS_TIMEOUT", "")
        try:
            timeout = float(raw_timeout) if raw_timeout else _DEFAULT_TIMEOUT
        except ValueError:
            raise EnvironmentError(
                f"JENKINS_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            )

        log_level = environ.get("JENKINS_LOG_LEVEL", "WARNING").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise EnvironmentError(f"JENKINS_LOG_LEVEL is not a logging level: {log_level!r}")

        return cls(
            url=url,
            user=user,
            token=environ.get("JENKINS_TOKEN") or environ.get("JENKINS_PW", ""),
            verify_ssl=environ.get("JENKINS_VERIFY_SSL", "true").lower() not in _FALSY,
            timeout=timeout,
            log_level=log_level,
        )
