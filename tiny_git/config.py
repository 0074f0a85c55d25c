"""Configuration loading from environment variables."""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import NamedTuple, Optional

from .errors import InvalidArguments

_TZ_RE = re.compile(r"^[+-]\d{4}$")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Identity(NamedTuple):
    name: str
    email: str
    timestamp: int
    tz: str

    def __str__(self) -> str:
        return f"{self.name} <{self.email}> {self.timestamp} {self.tz}"


@dataclass(frozen=True)
class Config:
    git_dir: str
    author: Identity
    committer: Identity
    workers: int = 1
    log_level: str = "WARNING"
    log_file: Optional[str] = None


def parse_int_env(
    name: str,
    default: int,
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    """Parse an integer environment variable with optional bounds."""
    try:
        value = int(os.getenv(name, str(default)))
    except ValueError:
        value = default
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def _load_identity(prefix: str, fallback: Optional[Identity] = None) -> Identity:
    name = os.getenv(f"{prefix}_NAME", fallback.name if fallback else "User")
    email = os.getenv(
        f"{prefix}_EMAIL", fallback.email if fallback else "user@example.com"
    )
    timestamp = parse_int_env(
        f"{prefix}_DATE", fallback.timestamp if fallback else 0, min_value=0
    )
    tz = os.getenv(f"{prefix}_TZ", fallback.tz if fallback else "+0000").strip()
    if not _TZ_RE.match(tz):
        raise InvalidArguments(f"{prefix}_TZ must look like +HHMM, got {tz!r}")
    if "<" in name or ">" in name or "\n" in name:
        raise InvalidArguments(f"{prefix}_NAME contains a forbidden character")
    if "<" in email or ">" in email or "\n" in email:
        raise InvalidArguments(f"{prefix}_EMAIL contains a forbidden character")
    return Identity(name, email, timestamp, tz)


def load_config() -> Config:
    author = _load_identity("TINY_GIT_AUTHOR")
    committer = _load_identity("TINY_GIT_COMMITTER", fallback=author)
    log_level = os.getenv("LOG_LEVEL", "WARNING").strip().upper()
    if log_level not in LOG_LEVELS:
        raise InvalidArguments(
            f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
        )
    return Config(
        git_dir=os.getenv("TINY_GIT_DIR", ".git"),
        author=author,
        committer=committer,
        workers=parse_int_env("TINY_GIT_WORKERS", 1, min_value=1, max_value=32),
        log_level=log_level,
        log_file=os.getenv("LOG_FILE") or None,
    )
