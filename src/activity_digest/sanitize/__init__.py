"""Always-on scrubbing of secrets, URLs, paths and identifiers."""

from activity_digest.sanitize.scrubber import (
    INVALID_URL,
    redact_paths,
    sanitize_url,
    scrub_emails,
    scrub_ips,
    scrub_secrets,
    scrub_text,
    strip_artifacts,
)
from activity_digest.sanitize.pipeline import sanitize_collected_data

__all__ = [
    "INVALID_URL",
    "redact_paths",
    "sanitize_url",
    "scrub_emails",
    "scrub_ips",
    "scrub_secrets",
    "scrub_text",
    "strip_artifacts",
    "sanitize_collected_data",
]
