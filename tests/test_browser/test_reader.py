"""Tests for browser history reader."""

import sqlite3
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from activity_digest.browser.models import BrowserKind, BrowserProfile
from activity_digest.browser.reader import (
    APPLE_EPOCH_OFFSET,
    CHROME_EPOCH_OFFSET,
    BrowserHistoryReader,
    open_history_copy,
)
from activity_digest.config import CollectionLimits, PipelineConfig
from activity_digest.result import Empty, Failed, Value

NOW = datetime.now(timezone.utc)


def _chrome_ts(dt):
    return int((dt.timestamp() + CHROME_EPOCH_OFFSET) * 1_000_000)


def _safari_ts(dt):
    return dt.timestamp() - APPLE_EPOCH_OFFSET


def _firefox_ts(dt):
    return int(dt.timestamp() * 1_000_000)


@pytest.fixture
def chrome_db(tmp_path):
    """Create a minimal Chromium History database."""
    db_path = tmp_path / "History"
    conn = sqlite3.connect(str(db_path))
    conn.execute("CREATE TABLE urls (id INTEGER PRIMARY KEY, url TEXT, title TEXT, visit_count INTEGER)")
    conn.execute("CREATE TABLE visits (id INTEGER PRIMARY KEY, url INTEGER, visit_time INTEGER, transition INTEGER)")
    conn.execute("INSERT INTO urls VALUES (1, 'https://docs.python.org/3/', 'Python docs', 4)")
    conn.execute("INSERT INTO urls VALUES (2, 'https://ads.example.net/frame', 'Frame', 1)")
    conn.execute("INSERT INTO urls VALUES (3, 'https://old.example.com/', 'Old', 1)")
    conn.execute("INSERT INTO urls VALUES (4, 'https://www.google.com/search?q=pytest+fixtures', 'pytest fixtures - Google Search', 1)")
    conn.execute("INSERT INTO visits VALUES (1, 1, ?, 1)", (_chrome_ts(NOW - timedelta(hours=1)),))
    # Subframe navigation (core type 3) with qualifier bits set.
    conn.execute("INSERT INTO visits VALUES (2, 2, ?, ?)", (_chrome_ts(NOW - timedelta(hours=1)), 3 | 0x10000000))
    conn.execute("INSERT INTO visits VALUES (3, 3, ?, 1)", (_chrome_ts(NOW - timedelta(days=3)),))
    conn.execute("INSERT INTO visits VALUES (4, 4, ?, 1)", (_chrome_ts(NOW - timedelta(minutes=30)),))
    conn.commit()
    conn.close()
    return db_path


@pytest.fixture
def firefox_db(tmp_path):
    db_path = tmp_path / "places.sqlite"
    conn = sqlite3.connect(str(db_path))
    conn.execute("CREATE TABLE moz_places (id INTEGER PRIMARY KEY, url TEXT, title TEXT, visit_count INTEGER)")
    conn.execute("CREATE TABLE moz_historyvisits (id INTEGER PRIMARY KEY, place_id INTEGER, visit_date INTEGER)")
    conn.execute("INSERT INTO moz_places VALUES (1, 'https://developer.mozilla.org/', 'MDN', 2)")
    conn.execute("INSERT INTO moz_places VALUES (2, 'https://github.com/', NULL, 7)")
    conn.execute("INSERT INTO moz_historyvisits VALUES (1, 1, ?)", (_firefox_ts(NOW - timedelta(hours=2)),))
    conn.execute("INSERT INTO moz_historyvisits VALUES (2, 2, ?)", (_firefox_ts(NOW - timedelta(hours=1)),))
    conn.commit()
    conn.close()
    return db_path


@pytest.fixture
def safari_db(tmp_path):
    """Safari schema without a title column on history_visits."""
    db_path = tmp_path / "History.db"
    conn = sqlite3.connect(str(db_path))
    conn.execute("CREATE TABLE history_items (id INTEGER PRIMARY KEY, url TEXT, title TEXT, visit_count INTEGER)")
    conn.execute("CREATE TABLE history_visits (id INTEGER PRIMARY KEY, history_item INTEGER, visit_time REAL)")
    conn.execute("INSERT INTO history_items VALUES (1, 'https://www.apple.com/', 'Apple', 3)")
    conn.execute("INSERT INTO history_visits VALUES (1, 1, ?)", (_safari_ts(NOW - timedelta(hours=1)),))
    conn.commit()
    conn.close()
    return db_path


def _profile(kind, path, browser="chrome"):
    return BrowserProfile(browser=browser, kind=kind, profile_dir="Default", history_path=path)


def _config(tmp_path, **kwargs):
    return PipelineConfig(since=NOW - timedelta(days=1), home=tmp_path, platform="linux", **kwargs)


def test_chromium_visits_skip_subframes_and_old_rows(tmp_path, chrome_db):
    reader = BrowserHistoryReader(_config(tmp_path))
    result = reader.read_profile(_profile(BrowserKind.CHROMIUM, chrome_db), NOW - timedelta(days=1))
    assert isinstance(result, Value)
    urls = {v.url for v in result.value}
    assert "https://docs.python.org/3/" in urls
    assert "https://ads.example.net/frame" not in urls
    assert "https://old.example.com/" not in urls


def test_chromium_visit_fields(tmp_path, chrome_db):
    reader = BrowserHistoryReader(_config(tmp_path))
    result = reader.read_profile(_profile(BrowserKind.CHROMIUM, chrome_db), NOW - timedelta(days=1))
    visit = next(v for v in result.value if v.url == "https://docs.python.org/3/")
    assert visit.title == "Python docs"
    assert visit.visit_count == 4
    assert visit.browser == "chrome"
    assert visit.profile == "Default"
    assert visit.timestamp.tzinfo is not None


def test_firefox_visits(tmp_path, firefox_db):
    reader = BrowserHistoryReader(_config(tmp_path))
    result = reader.read_profile(_profile(BrowserKind.FIREFOX, firefox_db, "firefox"), NOW - timedelta(days=1))
    assert isinstance(result, Value)
    by_url = {v.url: v for v in result.value}
    assert by_url["https://developer.mozilla.org/"].title == "MDN"
    assert by_url["https://github.com/"].title == ""


def test_safari_visits_use_item_title(tmp_path, safari_db):
    reader = BrowserHistoryReader(_config(tmp_path))
    result = reader.read_profile(_profile(BrowserKind.SAFARI, safari_db, "safari"), NOW - timedelta(days=1))
    assert isinstance(result, Value)
    assert result.value[0].title == "Apple"
    assert abs((result.value[0].timestamp - (NOW - timedelta(hours=1))).total_seconds()) < 1


def test_missing_db_is_empty(tmp_path):
    reader = BrowserHistoryReader(_config(tmp_path))
    result = reader.read_profile(_profile(BrowserKind.CHROMIUM, tmp_path / "nope" / "History"), NOW)
    assert result == Empty()


def test_corrupt_db_is_failed(tmp_path):
    bad = tmp_path / "History"
    bad.write_bytes(b"this is not a sqlite database at all" * 10)
    reader = BrowserHistoryReader(_config(tmp_path))
    result = reader.read_profile(_profile(BrowserKind.CHROMIUM, bad), NOW)
    assert isinstance(result, Failed)


def test_no_rows_since_is_empty(tmp_path, chrome_db):
    reader = BrowserHistoryReader(_config(tmp_path))
    result = reader.read_profile(_profile(BrowserKind.CHROMIUM, chrome_db), NOW + timedelta(hours=1))
    assert result == Empty()


def test_open_history_copy_removes_temp_dir(chrome_db):
    chrome_db.with_name("History-wal").write_bytes(b"")
    with open_history_copy(chrome_db) as conn:
        copy_dir = Path(conn.execute("PRAGMA database_list").fetchone()["file"]).parent
        assert (copy_dir / "History-wal").exists()
    assert not copy_dir.exists()


def test_open_history_copy_removes_temp_dir_on_error(chrome_db):
    with pytest.raises(sqlite3.OperationalError):
        with open_history_copy(chrome_db) as conn:
            copy_dir = Path(conn.execute("PRAGMA database_list").fetchone()["file"]).parent
            conn.execute("SELECT * FROM no_such_table")
    assert not copy_dir.exists()


def test_fetch_visits_isolates_failed_profile(tmp_path, chrome_db):
    bad = tmp_path / "bad" / "History"
    bad.parent.mkdir()
    bad.write_bytes(b"garbage" * 100)
    profiles = [
        BrowserProfile("brave", BrowserKind.CHROMIUM, "Default", bad),
        _profile(BrowserKind.CHROMIUM, chrome_db),
    ]
    reader = BrowserHistoryReader(_config(tmp_path))
    visits = reader.fetch_visits(profiles)
    assert any(v.url == "https://docs.python.org/3/" for v in visits)
    assert "brave:Default" in reader.last_errors


def test_fetch_visits_dedupes_across_profiles(tmp_path, chrome_db):
    profiles = [_profile(BrowserKind.CHROMIUM, chrome_db), _profile(BrowserKind.CHROMIUM, chrome_db, "brave")]
    reader = BrowserHistoryReader(_config(tmp_path))
    visits = reader.fetch_visits(profiles)
    urls = [v.url for v in visits]
    assert len(urls) == len(set(urls))
    assert visits[0].browser == "chrome"


def test_fetch_visits_newest_first(tmp_path, chrome_db, firefox_db):
    profiles = [_profile(BrowserKind.FIREFOX, firefox_db, "firefox"), _profile(BrowserKind.CHROMIUM, chrome_db)]
    visits = BrowserHistoryReader(_config(tmp_path)).fetch_visits(profiles)
    timestamps = [v.timestamp for v in visits]
    assert timestamps == sorted(timestamps, reverse=True)


@patch("activity_digest.browser.reader.discover_profiles", return_value=[])
def test_fetch_visits_no_profiles(mock_discover, tmp_path):
    reader = BrowserHistoryReader(_config(tmp_path))
    assert reader.fetch_visits() == []


def test_collect_splits_searches_from_visits_and_truncates(tmp_path, chrome_db):
    config = _config(tmp_path, limits=CollectionLimits(max_visits=1, max_searches=5))
    reader = BrowserHistoryReader(config)
    with patch("activity_digest.browser.reader.discover_profiles", return_value=[_profile(BrowserKind.CHROMIUM, chrome_db)]):
        visits, searches = reader.collect()
    assert len(visits) == 1
    assert visits[0].url == "https://docs.python.org/3/"
    assert [s.query for s in searches] == ["pytest fixtures"]
    assert searches[0].engine == "google.com"


def test_safari_ts_to_datetime():
    # 2024-01-01 00:00:00 UTC in Safari timestamp
    dt = BrowserHistoryReader._safari_ts_to_datetime(725760000.0)
    assert dt == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_chrome_ts_to_datetime():
    dt = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert BrowserHistoryReader._chrome_ts_to_datetime(_chrome_ts(dt)) == dt


def test_ts_converters_none():
    assert BrowserHistoryReader._safari_ts_to_datetime(None) is None
    assert BrowserHistoryReader._chrome_ts_to_datetime(None) is None
    assert BrowserHistoryReader._firefox_ts_to_datetime(None) is None
