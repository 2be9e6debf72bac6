"""Apply the scrubber to every record of a collected aggregate."""

from __future__ import annotations

import logging
from dataclasses import replace

from activity_digest.config import SanitizeConfig
from activity_digest.models import CollectedData
from activity_digest.sanitize.scrubber import (
    sanitize_url,
    scrub_secrets,
    scrub_text,
    strip_artifacts,
)

logger = logging.getLogger(__name__)


def sanitize_collected_data(data: CollectedData, config: SanitizeConfig | None = None) -> CollectedData:
    """Return a same-shaped aggregate with all text fields scrubbed.

    Sanitization cannot be switched off: ``config.enabled = False`` is logged
    and ignored. Record counts are preserved; dropping records is the
    sensitivity filter's job.
    """
    config = config or SanitizeConfig()
    if not config.enabled:
        logger.warning("Sanitization cannot be disabled; applying it anyway")

    paths = config.effective_redact_paths
    emails = config.effective_scrub_emails

    visits = [
        replace(
            v,
            url=scrub_secrets(sanitize_url(v.url)),
            title=scrub_text(v.title, redact_home_paths=paths, emails=emails),
        )
        for v in data.visits
    ]
    searches = [
        replace(s, query=scrub_text(s.query, redact_home_paths=paths, emails=True))
        for s in data.searches
    ]
    shell_commands = [
        replace(c, command=scrub_text(c.command, redact_home_paths=paths, emails=emails))
        for c in data.shell_commands
    ]
    agent_sessions = [
        replace(
            s,
            prompt_text=scrub_text(strip_artifacts(s.prompt_text), redact_home_paths=True, emails=True),
            project_name=scrub_secrets(s.project_name),
        )
        for s in data.agent_sessions
    ]

    logger.debug("Sanitized aggregate: %s", data.counts())
    return CollectedData(
        visits=visits,
        searches=searches,
        shell_commands=shell_commands,
        agent_sessions=agent_sessions,
    )
