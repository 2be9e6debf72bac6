"""Read recent commands from zsh history, falling back to bash history."""

from __future__ import annotations

import logging
import re
from collections import deque
from datetime import datetime, timezone
from pathlib import Path

from activity_digest.config import PipelineConfig
from activity_digest.exceptions import ShellHistoryReadError
from activity_digest.models import ShellCommand, newest_first_key
from activity_digest.result import Empty, Failed, Result, Value
from activity_digest.sanitize.scrubber import scrub_secrets

logger = logging.getLogger(__name__)

ZSH_ENTRY_RE = re.compile(r"^: (\d+):\d+;(.*)$")
BASH_TIMESTAMP_RE = re.compile(r"^#\d{9,}$")
NOISE_COMMANDS = frozenset({"ls", "cd", "pwd", "clear", "exit", "history", ""})


class ShellHistoryReader:
    """Collect shell commands run since the configured cutoff."""

    def __init__(self, config: PipelineConfig) -> None:
        self.config = config

    @property
    def zsh_history_path(self) -> Path:
        return self.config.home / ".zsh_history"

    @property
    def bash_history_path(self) -> Path:
        return self.config.home / ".bash_history"

    def collect(self) -> list[ShellCommand]:
        result = self.read_zsh(self.zsh_history_path, self.config.since)
        if isinstance(result, Failed):
            logger.warning("Skipping zsh history: %s", result.reason)
        if not isinstance(result, Value):
            result = self.read_bash(self.bash_history_path, self.config.limits.shell_fallback_lines)
            if isinstance(result, Failed):
                logger.warning("Skipping bash history: %s", result.reason)

        commands = result.value if isinstance(result, Value) else []
        return finalize_commands(commands, self.config.limits.max_shell_commands)

    def read_zsh(self, path: Path, since: datetime) -> Result:
        """Parse ``: <epoch>:<duration>;<command>`` entries at or after `since`."""
        try:
            lines = _read_lines(path)
        except ShellHistoryReadError as e:
            return Failed(str(e))
        if lines is None:
            return Empty()

        cutoff = since.timestamp()
        commands = []
        for line in lines:
            match = ZSH_ENTRY_RE.match(line)
            if not match:
                continue
            epoch = int(match.group(1))
            if epoch < cutoff:
                continue
            commands.append(ShellCommand(
                command=scrub_secrets(match.group(2).strip()),
                timestamp=datetime.fromtimestamp(epoch, tz=timezone.utc),
            ))
        return Value(commands) if commands else Empty()

    def read_bash(self, path: Path, max_lines: int) -> Result:
        """Last `max_lines` plain lines, most recent first, without timestamps."""
        try:
            lines = _read_lines(path)
        except ShellHistoryReadError as e:
            return Failed(str(e))
        if lines is None:
            return Empty()

        tail = deque(
            (line for line in lines if not BASH_TIMESTAMP_RE.match(line.strip())),
            maxlen=max_lines,
        )
        commands = [ShellCommand(command=scrub_secrets(line.strip())) for line in reversed(tail)]
        return Value(commands) if commands else Empty()


def finalize_commands(commands: list[ShellCommand], max_count: int) -> list[ShellCommand]:
    """Drop noise, dedupe by exact text, timestamped newest-first before the rest."""
    ordered = sorted(commands, key=lambda c: newest_first_key(c.timestamp))
    seen: set[str] = set()
    kept: list[ShellCommand] = []
    for command in ordered:
        if is_noise(command.command) or command.command in seen:
            continue
        seen.add(command.command)
        kept.append(command)
    return kept[:max_count]


def is_noise(command: str) -> bool:
    parts = command.split()
    return (parts[0] if parts else "") in NOISE_COMMANDS


def _read_lines(path: Path) -> list[str] | None:
    if not path.exists():
        logger.info("Shell history not found at %s", path)
        return None
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ShellHistoryReadError(f"Cannot read {path.name}: {e}") from e
    return raw.decode("utf-8", errors="replace").splitlines()
