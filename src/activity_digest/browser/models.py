"""Data models for the browser history module."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class BrowserKind(str, Enum):
    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    SAFARI = "safari"


@dataclass(frozen=True)
class BrowserProfile:
    """One history database belonging to a browser profile."""

    browser: str  # "chrome" | "brave" | ... | "firefox" | "safari"
    kind: BrowserKind
    profile_dir: str  # "Default", "Profile 1", "abcd1234.default-release"
    history_path: Path

    @property
    def label(self) -> str:
        return f"{self.browser}:{self.profile_dir}"
