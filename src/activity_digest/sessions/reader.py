"""Extract user prompts from coding-assistant transcript trees."""

from __future__ import annotations

import logging
import os
from collections import deque
from datetime import datetime, timezone
from pathlib import Path

from activity_digest.config import PipelineConfig
from activity_digest.exceptions import SessionLogReadError
from activity_digest.models import AgentSession, newest_first_key
from activity_digest.result import Empty, Failed, Result, Value
from activity_digest.sanitize.scrubber import strip_artifacts
from activity_digest.sessions.models import OtherTurn, SessionMeta, UserTurn
from activity_digest.sessions.parser import is_user_prompt, parse_record, truncate_prompt

logger = logging.getLogger(__name__)

TRANSCRIPT_SUFFIX = ".jsonl"


def find_transcripts(root: Path) -> list[Path]:
    """Breadth-first walk with an explicit queue; unlistable directories are skipped."""
    queue: deque[str] = deque([str(root)])
    found: list[Path] = []
    while queue:
        directory = queue.popleft()
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            logger.debug("Skipping unlistable directory %s: %s", directory, e)
            continue
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    queue.append(entry.path)
                elif entry.is_file() and entry.name.endswith(TRANSCRIPT_SUFFIX):
                    found.append(Path(entry.path))
            except OSError:
                continue
    return sorted(found)


class SessionLogReader:
    """Collect user prompts from Codex and Claude transcript directories."""

    def __init__(self, config: PipelineConfig) -> None:
        self.config = config
        self.last_errors: dict[str, str] = {}

    def collect(self) -> list[AgentSession]:
        self.last_errors = {}
        sessions: list[AgentSession] = []
        for source, root in self.config.session_roots:
            if not root.is_dir():
                logger.info("No %s transcripts directory at %s", source, root)
                continue
            files = find_transcripts(root)
            logger.debug("Found %d %s transcript(s) under %s", len(files), source, root)
            for path in files:
                result = self.read_transcript(path, source, self.config.since)
                if isinstance(result, Value):
                    sessions.extend(result.value)
                elif isinstance(result, Failed):
                    self.last_errors[str(path)] = result.reason
                    logger.warning("Skipping transcript %s: %s", path.name, result.reason)

        sessions.sort(key=lambda s: newest_first_key(s.timestamp))
        return sessions[: self.config.max_agent_sessions]

    def read_transcript(self, path: Path, source: str, since: datetime) -> Result:
        """Prompts from one transcript file at or after `since`."""
        try:
            mtime = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
            if mtime < since:
                return Empty()
            text = self._read_text(path)
        except SessionLogReadError as e:
            return Failed(str(e))
        except OSError as e:
            return Failed(f"Cannot stat {path.name}: {e}")

        records = [parse_record(line) for line in text.splitlines() if line.strip()]
        project = self._project_name(records, path)

        sessions = []
        for record in records:
            if not isinstance(record, UserTurn):
                continue
            if record.timestamp is not None and record.timestamp < since:
                continue
            prompt = strip_artifacts(record.text)
            if not is_user_prompt(prompt):
                continue
            sessions.append(AgentSession(
                prompt_text=truncate_prompt(prompt),
                timestamp=record.timestamp or mtime,
                project_name=project,
                source=source,
            ))
        return Value(sessions) if sessions else Empty()

    @staticmethod
    def _project_name(records: list, path: Path) -> str:
        for record in records:
            if isinstance(record, SessionMeta):
                return _basename(record.cwd)
        for record in records:
            if isinstance(record, (UserTurn, OtherTurn)) and record.cwd:
                return _basename(record.cwd)
        return path.parent.name

    @staticmethod
    def _read_text(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise SessionLogReadError(f"Cannot read {path.name}: {e}") from e


def _basename(cwd: str) -> str:
    return os.path.basename(cwd.rstrip("/\\")) or cwd
