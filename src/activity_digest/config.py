"""Explicit pipeline configuration.

Every collector, sanitizer and orchestrator call receives one of these values;
nothing in the package reads environment variables or module-level settings.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from pathlib import Path
from typing import Any

import dateutil.parser

from activity_digest.exceptions import ConfigError


class SanitizationLevel(str, Enum):
    STANDARD = "standard"
    AGGRESSIVE = "aggressive"


class SensitivityAction(str, Enum):
    EXCLUDE = "exclude"
    REDACT = "redact"


class SensitivityCategory(str, Enum):
    ADULT = "adult"
    GAMBLING = "gambling"
    DATING = "dating"
    HEALTH = "health"
    FINANCE = "finance"
    DRUGS = "drugs"
    WEAPONS = "weapons"
    PIRACY = "piracy"
    VPN_PROXY = "vpn_proxy"
    JOB_SEARCH = "job_search"
    SOCIAL_PERSONAL = "social_personal"
    TRACKER = "tracker"
    AUTH = "auth"
    CUSTOM = "custom"


class CollectionMode(str, Enum):
    LIMITED = "limited"
    COMPLETE = "complete"


AGENT_SESSION_CAPS = {
    CollectionMode.LIMITED: 30,
    CollectionMode.COMPLETE: 300,
}

KNOWN_BROWSERS = (
    "chrome", "brave", "edge", "arc", "vivaldi", "opera", "opera-gx",
    "chromium", "helium", "firefox", "safari",
)


@dataclass(frozen=True)
class SanitizeConfig:
    """Policy knobs for the scrubber. `enabled` cannot turn scrubbing off."""

    enabled: bool = True
    level: SanitizationLevel = SanitizationLevel.STANDARD
    excluded_domains: tuple[str, ...] = ()
    redact_paths: bool = True
    scrub_emails: bool = True

    @property
    def effective_redact_paths(self) -> bool:
        return self.redact_paths or self.level is SanitizationLevel.AGGRESSIVE

    @property
    def effective_scrub_emails(self) -> bool:
        return self.scrub_emails or self.level is SanitizationLevel.AGGRESSIVE


@dataclass(frozen=True)
class SensitivityConfig:
    enabled: bool = False
    categories: frozenset[SensitivityCategory] = frozenset()
    custom_domains: tuple[str, ...] = ()
    action: SensitivityAction = SensitivityAction.EXCLUDE

    @property
    def is_active(self) -> bool:
        return self.enabled and bool(self.categories or self.custom_domains)


@dataclass(frozen=True)
class CollectionLimits:
    max_visits: int = 200
    max_searches: int = 50
    max_shell_commands: int = 50
    shell_fallback_lines: int = 100


@dataclass(frozen=True)
class EmbeddingConfig:
    enabled: bool = False
    endpoint: str = "http://localhost:11434"
    model: str = "nomic-embed-text"
    top_k: int = 8


def _default_since() -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=1)


@dataclass(frozen=True)
class PipelineConfig:
    """Everything a collection + sanitization run needs."""

    since: datetime = field(default_factory=_default_since)
    home: Path = field(default_factory=Path.home)
    platform: str = sys.platform
    mode: CollectionMode = CollectionMode.LIMITED
    limits: CollectionLimits = field(default_factory=CollectionLimits)
    sanitize: SanitizeConfig = field(default_factory=SanitizeConfig)
    sensitivity: SensitivityConfig = field(default_factory=SensitivityConfig)
    embedding: EmbeddingConfig = field(default_factory=EmbeddingConfig)
    browsers: tuple[str, ...] = KNOWN_BROWSERS
    collect_shell: bool = True
    collect_sessions: bool = True
    codex_sessions_dir: Path | None = None
    claude_projects_dir: Path | None = None

    @property
    def max_agent_sessions(self) -> int:
        return AGENT_SESSION_CAPS[self.mode]

    @property
    def session_roots(self) -> list[tuple[str, Path]]:
        codex = self.codex_sessions_dir or self.home / ".codex" / "sessions"
        claude = self.claude_projects_dir or self.home / ".claude" / "projects"
        return [("codex", codex), ("claude", claude)]

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> PipelineConfig:
        """Build a config from a plain settings mapping; invalid values raise ConfigError."""
        kwargs: dict[str, Any] = {}

        if "since" in raw:
            kwargs["since"] = parse_since(raw["since"])
        elif "lookback_hours" in raw:
            hours = _as_int(raw["lookback_hours"], "lookback_hours")
            kwargs["since"] = datetime.now(timezone.utc) - timedelta(hours=hours)
        if raw.get("home"):
            kwargs["home"] = Path(raw["home"]).expanduser()
        if raw.get("platform"):
            kwargs["platform"] = str(raw["platform"])
        if "mode" in raw:
            kwargs["mode"] = _as_enum(CollectionMode, raw["mode"], "mode")

        limits = raw.get("limits") or {}
        if limits:
            kwargs["limits"] = CollectionLimits(**{
                key: _as_int(value, f"limits.{key}")
                for key, value in limits.items()
                if key in CollectionLimits.__dataclass_fields__
            })

        sanitize = raw.get("sanitize") or {}
        if sanitize:
            kwargs["sanitize"] = SanitizeConfig(
                enabled=bool(sanitize.get("enabled", True)),
                level=_as_enum(SanitizationLevel, sanitize.get("level", "standard"), "sanitize.level"),
                excluded_domains=tuple(sanitize.get("excluded_domains") or ()),
                redact_paths=bool(sanitize.get("redact_paths", True)),
                scrub_emails=bool(sanitize.get("scrub_emails", True)),
            )

        sensitivity = raw.get("sensitivity") or {}
        if sensitivity:
            kwargs["sensitivity"] = SensitivityConfig(
                enabled=bool(sensitivity.get("enabled", False)),
                categories=frozenset(
                    _as_enum(SensitivityCategory, c, "sensitivity.categories")
                    for c in sensitivity.get("categories") or ()
                ),
                custom_domains=tuple(sensitivity.get("custom_domains") or ()),
                action=_as_enum(SensitivityAction, sensitivity.get("action", "exclude"), "sensitivity.action"),
            )

        embedding = raw.get("embedding") or {}
        if embedding:
            kwargs["embedding"] = EmbeddingConfig(
                enabled=bool(embedding.get("enabled", False)),
                endpoint=str(embedding.get("endpoint", EmbeddingConfig.endpoint)),
                model=str(embedding.get("model", EmbeddingConfig.model)),
                top_k=_as_int(embedding.get("top_k", EmbeddingConfig.top_k), "embedding.top_k"),
            )

        if "browsers" in raw:
            browsers = tuple(str(b).lower() for b in raw["browsers"] or ())
            unknown = [b for b in browsers if b not in KNOWN_BROWSERS]
            if unknown:
                raise ConfigError(f"Unknown browser(s): {', '.join(unknown)}")
            kwargs["browsers"] = browsers
        for flag in ("collect_shell", "collect_sessions"):
            if flag in raw:
                kwargs[flag] = bool(raw[flag])
        for key in ("codex_sessions_dir", "claude_projects_dir"):
            if raw.get(key):
                kwargs[key] = Path(raw[key]).expanduser()

        return cls(**kwargs)


def parse_since(value: Any) -> datetime:
    """Accept a datetime, an epoch number or an ISO string; naive values are UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        parsed = datetime.fromtimestamp(float(value), tz=timezone.utc)
    elif isinstance(value, str):
        try:
            parsed = dateutil.parser.isoparse(value)
        except ValueError as e:
            raise ConfigError(f"Invalid since value: {value!r}") from e
    else:
        raise ConfigError(f"Invalid since value: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _as_enum(enum_cls, value, name: str):
    try:
        return enum_cls(str(value).lower())
    except ValueError as e:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigError(f"Invalid {name}: {value!r} (expected one of {allowed})") from e


def _as_int(value, name: str) -> int:
    try:
        result = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid {name}: {value!r}") from e
    if result < 0:
        raise ConfigError(f"Invalid {name}: must be non-negative")
    return result
