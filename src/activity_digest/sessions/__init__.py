"""Agent session transcript collection."""

from activity_digest.sessions.models import OtherTurn, SessionMeta, Skip, UserTurn
from activity_digest.sessions.parser import parse_record
from activity_digest.sessions.reader import SessionLogReader, find_transcripts

__all__ = [
    "OtherTurn",
    "SessionLogReader",
    "SessionMeta",
    "Skip",
    "UserTurn",
    "find_transcripts",
    "parse_record",
]
