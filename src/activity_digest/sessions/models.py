"""Tagged record variants for one line of an agent transcript."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Union


@dataclass(frozen=True)
class SessionMeta:
    """Session-start metadata carrying the working directory."""

    cwd: str
    timestamp: datetime | None = None


@dataclass(frozen=True)
class UserTurn:
    text: str
    timestamp: datetime | None = None
    cwd: str | None = None


@dataclass(frozen=True)
class OtherTurn:
    """Assistant, tool or injected turns; never extracted."""

    role: str
    timestamp: datetime | None = None
    cwd: str | None = None


@dataclass(frozen=True)
class Skip:
    """A line that is not JSON or has no recognized shape."""

    reason: str


TranscriptRecord = Union[SessionMeta, UserTurn, OtherTurn, Skip]
