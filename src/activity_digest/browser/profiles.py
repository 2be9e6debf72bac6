"""Discover browser profiles and their history databases."""

from __future__ import annotations

import configparser
import logging
import re
from pathlib import Path

from activity_digest.browser.models import BrowserKind, BrowserProfile
from activity_digest.config import PipelineConfig

logger = logging.getLogger(__name__)

# User-data directories relative to the home directory, per platform.
BROWSER_PATHS: dict[str, tuple[BrowserKind, dict[str, str]]] = {
    "chrome": (BrowserKind.CHROMIUM, {
        "darwin": "Library/Application Support/Google/Chrome",
        "win32": "AppData/Local/Google/Chrome/User Data",
        "linux": ".config/google-chrome",
    }),
    "brave": (BrowserKind.CHROMIUM, {
        "darwin": "Library/Application Support/BraveSoftware/Brave-Browser",
        "win32": "AppData/Local/BraveSoftware/Brave-Browser/User Data",
        "linux": ".config/BraveSoftware/Brave-Browser",
    }),
    "edge": (BrowserKind.CHROMIUM, {
        "darwin": "Library/Application Support/Microsoft Edge",
        "win32": "AppData/Local/Microsoft/Edge/User Data",
        "linux": ".config/microsoft-edge",
    }),
    "arc": (BrowserKind.CHROMIUM, {
        "darwin": "Library/Application Support/Arc/User Data",
    }),
    "vivaldi": (BrowserKind.CHROMIUM, {
        "darwin": "Library/Application Support/Vivaldi",
        "win32": "AppData/Local/Vivaldi/User Data",
        "linux": ".config/vivaldi",
    }),
    "opera": (BrowserKind.CHROMIUM, {
        "darwin": "Library/Application Support/com.operasoftware.Opera",
        "win32": "AppData/Roaming/Opera Software/Opera Stable",
        "linux": ".config/opera",
    }),
    "opera-gx": (BrowserKind.CHROMIUM, {
        "darwin": "Library/Application Support/com.operasoftware.OperaGX",
        "win32": "AppData/Roaming/Opera Software/Opera GX Stable",
        "linux": ".config/opera-gx",
    }),
    "chromium": (BrowserKind.CHROMIUM, {
        "darwin": "Library/Application Support/Chromium",
        "win32": "AppData/Local/Chromium/User Data",
        "linux": ".config/chromium",
    }),
    "helium": (BrowserKind.CHROMIUM, {
        "darwin": "Library/Application Support/net.imput.helium",
    }),
    "firefox": (BrowserKind.FIREFOX, {
        "darwin": "Library/Application Support/Firefox",
        "win32": "AppData/Roaming/Mozilla/Firefox",
        "linux": ".mozilla/firefox",
    }),
    "safari": (BrowserKind.SAFARI, {
        "darwin": "Library/Safari",
    }),
}

HISTORY_FILENAMES = {
    BrowserKind.CHROMIUM: "History",
    BrowserKind.FIREFOX: "places.sqlite",
    BrowserKind.SAFARI: "History.db",
}

CHROMIUM_PROFILE_RE = re.compile(r"^(?:Default|Profile \d+)$")


def platform_key(platform: str) -> str:
    if platform.startswith("linux"):
        return "linux"
    if platform in {"win32", "cygwin"}:
        return "win32"
    return platform


def user_data_dir(browser: str, home: Path, platform: str) -> Path | None:
    entry = BROWSER_PATHS.get(browser)
    if entry is None:
        return None
    relative = entry[1].get(platform_key(platform))
    if relative is None:
        return None
    return home / relative


def discover_profiles(config: PipelineConfig) -> list[BrowserProfile]:
    """Return every profile with a history database, in a stable order."""
    profiles: list[BrowserProfile] = []
    for browser in config.browsers:
        base = user_data_dir(browser, config.home, config.platform)
        if base is None or not base.is_dir():
            continue
        kind = BROWSER_PATHS[browser][0]
        if kind is BrowserKind.CHROMIUM:
            found = _chromium_profiles(browser, base)
        elif kind is BrowserKind.FIREFOX:
            found = _firefox_profiles(browser, base)
        else:
            found = _safari_profiles(browser, base)
        logger.debug("Found %d %s profile(s) under %s", len(found), browser, base)
        profiles.extend(found)
    return profiles


def _chromium_profiles(browser: str, base: Path) -> list[BrowserProfile]:
    try:
        entries = sorted(child for child in base.iterdir() if child.is_dir())
    except OSError as e:
        logger.warning("Cannot list %s user data dir %s: %s", browser, base, e)
        return []

    profiles = []
    for child in entries:
        if not CHROMIUM_PROFILE_RE.match(child.name):
            continue
        history = child / HISTORY_FILENAMES[BrowserKind.CHROMIUM]
        if not history.exists():
            continue
        profiles.append(BrowserProfile(
            browser=browser,
            kind=BrowserKind.CHROMIUM,
            profile_dir=child.name,
            history_path=history,
        ))
    return profiles


def _firefox_profiles(browser: str, base: Path) -> list[BrowserProfile]:
    ini_path = base / "profiles.ini"
    if not ini_path.exists():
        return _firefox_profiles_by_scan(browser, base)

    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read(ini_path, encoding="utf-8")
    except (OSError, configparser.Error) as e:
        logger.warning("Cannot parse %s: %s", ini_path, e)
        return []

    profiles = []
    for section in parser.sections():
        if not section.startswith("Profile"):
            continue
        rel = parser.get(section, "Path", fallback="")
        if not rel:
            continue
        is_relative = parser.get(section, "IsRelative", fallback="1") == "1"
        profile_path = base / rel if is_relative else Path(rel)
        history = profile_path / HISTORY_FILENAMES[BrowserKind.FIREFOX]
        if not history.exists():
            continue
        profiles.append(BrowserProfile(
            browser=browser,
            kind=BrowserKind.FIREFOX,
            profile_dir=profile_path.name,
            history_path=history,
        ))
    return profiles


def _firefox_profiles_by_scan(browser: str, base: Path) -> list[BrowserProfile]:
    profiles = []
    for root in (base, base / "Profiles"):
        try:
            children = sorted(child for child in root.iterdir() if child.is_dir())
        except OSError:
            continue
        for child in children:
            history = child / HISTORY_FILENAMES[BrowserKind.FIREFOX]
            if history.exists():
                profiles.append(BrowserProfile(
                    browser=browser,
                    kind=BrowserKind.FIREFOX,
                    profile_dir=child.name,
                    history_path=history,
                ))
    return profiles


def _safari_profiles(browser: str, base: Path) -> list[BrowserProfile]:
    history = base / HISTORY_FILENAMES[BrowserKind.SAFARI]
    if not history.exists():
        return []
    return [BrowserProfile(
        browser=browser,
        kind=BrowserKind.SAFARI,
        profile_dir="Default",
        history_path=history,
    )]
