"""Browser history collection (Chromium family, Firefox, Safari)."""

from activity_digest.browser.models import BrowserKind, BrowserProfile
from activity_digest.browser.parser import (
    normalize_visits,
    split_searches,
    unwrap_redirect,
)
from activity_digest.browser.profiles import discover_profiles
from activity_digest.browser.reader import BrowserHistoryReader, open_history_copy

__all__ = [
    "BrowserHistoryReader",
    "BrowserKind",
    "BrowserProfile",
    "discover_profiles",
    "normalize_visits",
    "open_history_copy",
    "split_searches",
    "unwrap_redirect",
]
