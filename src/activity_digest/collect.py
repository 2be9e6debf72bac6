"""Run every enabled collector in parallel and assemble the aggregate."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from activity_digest.browser.reader import BrowserHistoryReader
from activity_digest.config import PipelineConfig
from activity_digest.models import CollectedData
from activity_digest.sessions.reader import SessionLogReader
from activity_digest.shell.reader import ShellHistoryReader

logger = logging.getLogger(__name__)


def collect_activity(config: PipelineConfig) -> CollectedData:
    """Fan out to the browser, shell and session collectors, then fan in.

    A collector that raises yields an empty result for its sources; the
    others are unaffected.
    """
    tasks = {}
    with ThreadPoolExecutor(max_workers=3) as pool:
        if config.browsers:
            tasks["browser"] = pool.submit(BrowserHistoryReader(config).collect)
        if config.collect_shell:
            tasks["shell"] = pool.submit(ShellHistoryReader(config).collect)
        if config.collect_sessions:
            tasks["sessions"] = pool.submit(SessionLogReader(config).collect)

    results = {}
    for name, future in tasks.items():
        try:
            results[name] = future.result()
        except Exception as e:
            logger.warning("%s collection failed: %s", name.capitalize(), e)

    visits, searches = results.get("browser", ([], []))
    data = CollectedData(
        visits=visits,
        searches=searches,
        shell_commands=results.get("shell", []),
        agent_sessions=results.get("sessions", []),
    )
    logger.info("Collected activity: %s", data.counts())
    return data
