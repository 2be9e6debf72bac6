"""Pure text transforms that remove secrets, personal paths and identifiers.

Every function here is stateless and idempotent: applying it to its own output
returns the output unchanged.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

INVALID_URL = "[INVALID_URL]"

# Vendor-specific shapes come before the generic fallbacks below them.
SECRET_PATTERNS: list[tuple[str, re.Pattern, str]] = [
    (
        "private_key",
        re.compile(r"-----BEGIN\s+(?:RSA\s+|EC\s+|DSA\s+|OPENSSH\s+)?PRIVATE\s+KEY-----"),
        "[PRIVATE_KEY_REDACTED]",
    ),
    ("github_pat", re.compile(r"github_pat_[A-Za-z0-9_]{22,}"), "[GITHUB_TOKEN_REDACTED]"),
    ("github", re.compile(r"gh[po]_[A-Za-z0-9_]{36,}"), "[GITHUB_TOKEN_REDACTED]"),
    ("anthropic", re.compile(r"(?<![A-Za-z0-9])sk-ant-[A-Za-z0-9_-]{20,}"), "[ANTHROPIC_KEY_REDACTED]"),
    (
        "openai",
        re.compile(r"(?<![A-Za-z0-9])sk-(?:proj-|svcacct-)?[A-Za-z0-9]{20,}"),
        "[OPENAI_KEY_REDACTED]",
    ),
    ("slack", re.compile(r"xox[bpras]-[A-Za-z0-9-]{10,}"), "[SLACK_TOKEN_REDACTED]"),
    ("npm", re.compile(r"npm_[A-Za-z0-9]{36,}"), "[NPM_TOKEN_REDACTED]"),
    (
        "stripe",
        re.compile(r"(?:sk|rk|pk)_(?:live|test)_[A-Za-z0-9]{20,}"),
        "[STRIPE_KEY_REDACTED]",
    ),
    (
        "jwt",
        re.compile(r"eyJ[A-Za-z0-9_-]{10,}\.eyJ[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]+"),
        "[JWT_REDACTED]",
    ),
    (
        "sendgrid",
        re.compile(r"SG\.[A-Za-z0-9_-]{22}\.[A-Za-z0-9_-]{43}"),
        "[SENDGRID_KEY_REDACTED]",
    ),
    ("aws", re.compile(r"(?:AKIA|ASIA)[A-Z0-9]{16}"), "[AWS_KEY_REDACTED]"),
    ("hex", re.compile(r"\b[0-9a-f]{40,}\b", re.IGNORECASE), "[HEX_TOKEN_REDACTED]"),
    (
        "assignment",
        re.compile(
            r"(?:export\s+)?"
            r"(\w*(?:password|passwd|secret|token|key|auth|bearer|credential)\w*)"
            r"\s*=\s*\S+",
            re.IGNORECASE,
        ),
        r"\1=[REDACTED]",
    ),
    (
        "authorization",
        re.compile(r"(authorization:\s*(?:[A-Za-z]+\s+)?)\S+", re.IGNORECASE),
        r"\1[REDACTED]",
    ),
    (
        "connection_string",
        re.compile(r"([A-Za-z][A-Za-z0-9+.\-]*://[^:/\s@]+:)[^@\s]+(@)"),
        r"\1[REDACTED]\2",
    ),
]

HOME_PATH_RE = re.compile(r"(?:/Users/[^/\s]+|/home/[^/\s]+)")
EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
IPV4_RE = re.compile(
    r"\b(?:(?:25[0-5]|2[0-4]\d|[01]?\d\d?)\.){3}(?:25[0-5]|2[0-4]\d|[01]?\d\d?)\b"
)

IMAGE_BLOCK_RE = re.compile(r"<image>[\s\S]*?</image>")
ORPHAN_IMAGE_CLOSE_RE = re.compile(r"</image>")
TURN_ABORTED_RE = re.compile(r"</?turn_aborted\s*/?>")
ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")
EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")

DEFAULT_PORTS = {"http": 80, "https": 443}


def scrub_secrets(text: str) -> str:
    """Replace every credential-shaped substring with its redaction token."""
    if not text:
        return text
    for _name, pattern, replacement in SECRET_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def sanitize_url(url: str) -> str:
    """Reduce a URL to ``scheme://host[:port]/path``.

    Query string, fragment and userinfo are always dropped. A port is kept
    unless it is the scheme's default. Anything that does not parse as an
    absolute URL with a host returns ``[INVALID_URL]``.
    """
    try:
        parts = urlsplit((url or "").strip())
        port = parts.port
    except ValueError:
        return INVALID_URL

    scheme = parts.scheme.lower()
    host = parts.hostname
    if not scheme or not host:
        return INVALID_URL

    if ":" in host:
        host = f"[{host}]"
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        host = f"{host}:{port}"
    path = parts.path or "/"
    return f"{scheme}://{host}{path}"


def redact_paths(text: str) -> str:
    """Rewrite ``/Users/<name>`` and ``/home/<name>`` prefixes to ``~``."""
    if not text:
        return text
    return HOME_PATH_RE.sub("~", text)


def scrub_emails(text: str) -> str:
    if not text:
        return text
    return EMAIL_RE.sub("[EMAIL]", text)


def scrub_ips(text: str) -> str:
    if not text:
        return text
    return IPV4_RE.sub("[IP_REDACTED]", text)


def strip_artifacts(text: str) -> str:
    """Remove multimodal payload blocks and aborted-turn markers from transcript text."""
    if not text:
        return text
    text = IMAGE_BLOCK_RE.sub("", text)
    text = ORPHAN_IMAGE_CLOSE_RE.sub("", text)
    text = TURN_ABORTED_RE.sub("", text)
    text = ANSI_RE.sub("", text)
    text = EXCESS_NEWLINES_RE.sub("\n\n", text)
    return text.strip()


def scrub_text(text: str, redact_home_paths: bool = True, emails: bool = True) -> str:
    """Secrets and IPs always; home paths and emails on request."""
    text = scrub_secrets(text)
    if redact_home_paths:
        text = redact_paths(text)
    if emails:
        text = scrub_emails(text)
    return scrub_ips(text)
