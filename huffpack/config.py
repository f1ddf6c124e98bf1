from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional
import os

DEFAULT_SERVICE_URL = "http://localhost:8080"
DEFAULT_MAX_UPLOAD_BYTES = 16 * 1024 * 1024
DEFAULT_HTTP_TIMEOUT = 30.0


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Config:
    log_level: str = "WARNING"
    service_url: str = DEFAULT_SERVICE_URL
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Config:
        if environ is None:
            environ = os.environ
        return cls(
            log_level=environ.get("HUFFPACK_LOG_LEVEL", "WARNING").upper(),
            service_url=environ.get("HUFFPACK_SERVICE_URL", DEFAULT_SERVICE_URL).rstrip("/"),
            max_upload_bytes=_env_int(
                environ, "HUFFPACK_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES
            ),
            http_timeout=_env_float(environ, "HUFFPACK_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
        )
