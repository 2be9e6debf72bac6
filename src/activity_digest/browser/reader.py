"""Read-only access to Chromium, Firefox and Safari history databases."""

from __future__ import annotations

import logging
import shutil
import sqlite3
import tempfile
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from activity_digest.browser.models import BrowserKind, BrowserProfile
from activity_digest.browser.parser import normalize_visits, split_searches
from activity_digest.browser.profiles import discover_profiles
from activity_digest.config import PipelineConfig
from activity_digest.exceptions import BrowserHistoryReadError
from activity_digest.models import BrowserVisit, SearchQuery
from activity_digest.result import Empty, Failed, Result, Value

logger = logging.getLogger(__name__)

# Seconds from 1970-01-01 to 2001-01-01 (Safari/WebKit epoch).
APPLE_EPOCH_OFFSET = 978307200
# Seconds from 1601-01-01 to 1970-01-01 (Chrome epoch).
CHROME_EPOCH_OFFSET = 11644473600

SIDECAR_SUFFIXES = ("-wal", "-shm")
# Core transition types for subframe navigations (auto and manual).
CHROME_SUBFRAME_TRANSITIONS = (3, 4)
MAX_WORKERS = 8


@contextmanager
def open_history_copy(path: Path) -> Iterator[sqlite3.Connection]:
    """Browsers lock their history DB; query a private temporary copy instead.

    The primary file and any -wal/-shm sidecars are copied into a fresh
    temporary directory that is removed on every exit path.
    """
    with tempfile.TemporaryDirectory(prefix="activity-digest-") as tmp:
        db_copy = Path(tmp) / path.name
        shutil.copy2(path, db_copy)
        for suffix in SIDECAR_SUFFIXES:
            sidecar = path.with_name(path.name + suffix)
            if sidecar.exists():
                shutil.copy2(sidecar, Path(tmp) / sidecar.name)
        conn = sqlite3.connect(str(db_copy))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()


class BrowserHistoryReader:
    """Collect visits from every discovered browser profile in parallel."""

    def __init__(self, config: PipelineConfig) -> None:
        self.config = config
        self.last_errors: dict[str, str] = {}

    def collect(self) -> tuple[list[BrowserVisit], list[SearchQuery]]:
        """Merged visits and the searches split out of them, each newest-first and truncated."""
        visits, searches = split_searches(self.fetch_visits())
        limits = self.config.limits
        return visits[: limits.max_visits], searches[: limits.max_searches]

    def fetch_visits(self, profiles: list[BrowserProfile] | None = None) -> list[BrowserVisit]:
        """Read all profiles, then merge, deduplicate, filter and sort."""
        if profiles is None:
            profiles = discover_profiles(self.config)
        self.last_errors = {}
        if not profiles:
            logger.info("No browser history databases found under %s", self.config.home)
            return []

        since = self.config.since
        with ThreadPoolExecutor(max_workers=min(MAX_WORKERS, len(profiles))) as pool:
            futures = [pool.submit(self.read_profile, profile, since) for profile in profiles]

        raw: list[BrowserVisit] = []
        for profile, future in zip(profiles, futures):
            try:
                result = future.result()
            except Exception as e:
                result = Failed(f"{type(e).__name__}: {e}")

            if isinstance(result, Value):
                raw.extend(result.value)
            elif isinstance(result, Failed):
                self.last_errors[profile.label] = result.reason
                logger.warning("Skipping %s history: %s", profile.label, result.reason)
            else:
                logger.debug("No visits in %s since %s", profile.label, since.isoformat())

        visits = normalize_visits(raw, excluded_domains=self.config.sanitize.excluded_domains)
        logger.debug("Collected %d unique visits from %d profile(s)", len(visits), len(profiles))
        return visits

    def read_profile(self, profile: BrowserProfile, since: datetime) -> Result:
        """Query one profile's history; never raises for read failures."""
        if not profile.history_path.exists():
            logger.info("History DB not found at %s", profile.history_path)
            return Empty()
        try:
            visits = self._query_profile(profile, since)
        except BrowserHistoryReadError as e:
            return Failed(str(e))
        return Value(visits) if visits else Empty()

    def _query_profile(self, profile: BrowserProfile, since: datetime) -> list[BrowserVisit]:
        try:
            with open_history_copy(profile.history_path) as conn:
                if profile.kind is BrowserKind.CHROMIUM:
                    rows = self._query_chromium(conn, since)
                    convert = self._chrome_ts_to_datetime
                elif profile.kind is BrowserKind.FIREFOX:
                    rows = self._query_firefox(conn, since)
                    convert = self._firefox_ts_to_datetime
                else:
                    rows = self._query_safari(conn, since)
                    convert = self._safari_ts_to_datetime
        except OSError as e:
            raise BrowserHistoryReadError(f"Cannot copy {profile.history_path.name}: {e}") from e
        except sqlite3.Error as e:
            raise BrowserHistoryReadError(f"Failed querying {profile.kind.value} history: {e}") from e

        visits = []
        for row in rows:
            timestamp = convert(row["visit_time"])
            url = (row["url"] or "").strip()
            if timestamp is None or not url:
                continue
            visits.append(BrowserVisit(
                url=url,
                title=(row["title"] or "").strip(),
                timestamp=timestamp,
                visit_count=int(row["visit_count"]) if row["visit_count"] is not None else None,
                browser=profile.browser,
                profile=profile.profile_dir,
            ))
        return visits

    @staticmethod
    def _columns(conn: sqlite3.Connection, table: str) -> set[str]:
        return {str(row["name"]) for row in conn.execute(f"PRAGMA table_info({table})").fetchall()}

    def _query_chromium(self, conn: sqlite3.Connection, since: datetime) -> list[sqlite3.Row]:
        chrome_since = int((since.timestamp() + CHROME_EPOCH_OFFSET) * 1_000_000)
        transition_filter = ""
        if "transition" in self._columns(conn, "visits"):
            transition_filter = "AND (v.transition & 255) NOT IN (%d, %d)" % CHROME_SUBFRAME_TRANSITIONS
        return conn.execute(
            f"""
            SELECT
                u.url AS url,
                COALESCE(u.title, '') AS title,
                v.visit_time AS visit_time,
                u.visit_count AS visit_count
            FROM visits v
            JOIN urls u ON v.url = u.id
            WHERE v.visit_time > ? {transition_filter}
            ORDER BY v.visit_time DESC
            """,
            (chrome_since,),
        ).fetchall()

    def _query_firefox(self, conn: sqlite3.Connection, since: datetime) -> list[sqlite3.Row]:
        firefox_since = int(since.timestamp() * 1_000_000)
        visit_count_expr = (
            "p.visit_count" if "visit_count" in self._columns(conn, "moz_places") else "NULL"
        )
        return conn.execute(
            f"""
            SELECT
                p.url AS url,
                COALESCE(p.title, '') AS title,
                h.visit_date AS visit_time,
                {visit_count_expr} AS visit_count
            FROM moz_historyvisits h
            JOIN moz_places p ON h.place_id = p.id
            WHERE h.visit_date > ?
            ORDER BY h.visit_date DESC
            """,
            (firefox_since,),
        ).fetchall()

    def _query_safari(self, conn: sqlite3.Connection, since: datetime) -> list[sqlite3.Row]:
        safari_since = since.timestamp() - APPLE_EPOCH_OFFSET
        item_columns = self._columns(conn, "history_items")
        visit_columns = self._columns(conn, "history_visits")
        if "title" in visit_columns:
            title_expr = "COALESCE(v.title, '')"
        elif "title" in item_columns:
            title_expr = "COALESCE(i.title, '')"
        else:
            title_expr = "''"
        visit_count_expr = "i.visit_count" if "visit_count" in item_columns else "NULL"
        return conn.execute(
            f"""
            SELECT
                i.url AS url,
                {title_expr} AS title,
                v.visit_time AS visit_time,
                {visit_count_expr} AS visit_count
            FROM history_visits v
            JOIN history_items i ON v.history_item = i.id
            WHERE v.visit_time > ?
            ORDER BY v.visit_time DESC
            """,
            (safari_since,),
        ).fetchall()

    @staticmethod
    def _chrome_ts_to_datetime(ts: int | None) -> datetime | None:
        if ts is None:
            return None
        try:
            return datetime.fromtimestamp(int(ts) / 1_000_000 - CHROME_EPOCH_OFFSET, tz=timezone.utc)
        except (ValueError, OSError, OverflowError):
            return None

    @staticmethod
    def _firefox_ts_to_datetime(ts: int | None) -> datetime | None:
        if ts is None:
            return None
        try:
            millis = int(ts) / 1000
            return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
        except (ValueError, OSError, OverflowError):
            return None

    @staticmethod
    def _safari_ts_to_datetime(ts: float | int | None) -> datetime | None:
        if ts is None:
            return None
        try:
            return datetime.fromtimestamp(float(ts) + APPLE_EPOCH_OFFSET, tz=timezone.utc)
        except (ValueError, OSError, OverflowError):
            return None
