from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, cast

CredentialsMode = Literal["omit", "include"]

_CREDENTIALS_MODES: set[str] = {"omit", "include"}
_LOG_LEVELS: set[str] = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_choice(name: str, default: str, choices: set[str], *, upper: bool = False) -> str:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    normalized = value.strip().upper() if upper else value.strip()
    if normalized not in choices:
        raise ValueError(f"{name} must be one of {sorted(choices)}, got {value!r}.")
    return normalized


def _strip_trailing_slash(url: str) -> str:
    # Endpoints are appended verbatim and start with "/".
    return url.strip().rstrip("/")


@dataclass(frozen=True)
class APIKitConfig:
    APIKIT_API_NAME: str
    APIKIT_BASE_URL: str
    APIKIT_CREDENTIALS_MODE: CredentialsMode
    APIKIT_FAILURE_CODE: str
    APIKIT_FAILURE_MESSAGE: str
    APIKIT_LOG_LEVEL: str

    def failure_message(self) -> dict[str, str]:
        return {"code": self.APIKIT_FAILURE_CODE, "message": self.APIKIT_FAILURE_MESSAGE}


def load_config() -> APIKitConfig:
    credentials_mode = _getenv_choice("APIKIT_CREDENTIALS_MODE", "omit", _CREDENTIALS_MODES)
    log_level = _getenv_choice(
        "APIKIT_LOG_LEVEL",
        "INFO",
        _LOG_LEVELS,
        upper=True,
    )
    return APIKitConfig(
        APIKIT_API_NAME=_getenv_str("APIKIT_API_NAME", "API"),
        APIKIT_BASE_URL=_strip_trailing_slash(_getenv_str("APIKIT_BASE_URL", "")),
        APIKIT_CREDENTIALS_MODE=cast(CredentialsMode, credentials_mode),
        APIKIT_FAILURE_CODE=_getenv_str("APIKIT_FAILURE_CODE", "API_ERROR"),
        APIKIT_FAILURE_MESSAGE=_getenv_str(
            "APIKIT_FAILURE_MESSAGE", "An error occured while contacting the API."
        ),
        APIKIT_LOG_LEVEL=log_level,
    )
