"""Tests for the sensitivity filter."""

from datetime import datetime, timezone

from activity_digest.config import SensitivityAction, SensitivityCategory, SensitivityConfig
from activity_digest.models import AgentSession, BrowserVisit, CollectedData, SearchQuery, ShellCommand
from activity_digest.sensitivity.domains import CATEGORY_REGISTRY, builtin_domain_count, category_label
from activity_digest.sensitivity.filter import (
    FILTERED_URL,
    SENSITIVE_SEARCH,
    SensitivityFilter,
    build_entries,
)

T = datetime(2024, 5, 1, 12, tzinfo=timezone.utc)


def _visit(url, title="page"):
    return BrowserVisit(url=url, title=title, timestamp=T)


def _config(*categories, action=SensitivityAction.EXCLUDE, custom=()):
    return SensitivityConfig(enabled=True, categories=frozenset(categories), custom_domains=tuple(custom), action=action)


def test_registry_covers_every_category():
    assert set(CATEGORY_REGISTRY) == set(SensitivityCategory)
    assert builtin_domain_count() > 100
    assert category_label(SensitivityCategory.GAMBLING) == "Gambling & Betting"


def test_match_host_and_subdomain():
    f = SensitivityFilter(_config(SensitivityCategory.GAMBLING))
    assert f.match("https://www.draftkings.com/lobby") is SensitivityCategory.GAMBLING
    assert f.match("https://sportsbook.draftkings.com/") is SensitivityCategory.GAMBLING
    assert f.match("https://docs.python.org/") is None


def test_match_path_prefix():
    f = SensitivityFilter(_config(SensitivityCategory.AUTH))
    assert f.match("https://github.com/login/oauth/authorize?client_id=x") is SensitivityCategory.AUTH
    assert f.match("https://github.com/explore") is None


def test_match_is_bidirectional():
    f = SensitivityFilter(_config(custom=["intranet.corp.example"]))
    assert f.match("https://corp.example/") is SensitivityCategory.CUSTOM


def test_match_empty_host():
    f = SensitivityFilter(_config(SensitivityCategory.ADULT))
    assert f.match(FILTERED_URL) is None
    assert f.match("not a url") is None


def test_exclude_drops_and_counts():
    f = SensitivityFilter(_config(SensitivityCategory.GAMBLING, SensitivityCategory.DATING))
    result = f.filter_visits([
        _visit("https://draftkings.com/"),
        _visit("https://tinder.com/app"),
        _visit("https://example.com/"),
    ])
    assert [v.url for v in result.kept] == ["https://example.com/"]
    assert result.filtered_count == 2
    assert result.counts_by_category == {"gambling": 1, "dating": 1}


def test_redact_keeps_record_without_host():
    f = SensitivityFilter(_config(SensitivityCategory.HEALTH, action=SensitivityAction.REDACT))
    result = f.filter_visits([_visit("https://www.webmd.com/migraine", "Migraine symptoms")])
    assert len(result.kept) == 1
    assert result.kept[0].url == FILTERED_URL
    assert result.kept[0].title == "[Health & Medical]"
    assert result.kept[0].timestamp == T
    assert result.filtered_count == 1


def test_custom_domains():
    f = SensitivityFilter(_config(custom=["www.Secret-Project.io"]))
    result = f.filter_visits([_visit("https://secret-project.io/roadmap")])
    assert result.kept == []
    assert result.counts_by_category == {"custom": 1}


def test_filter_searches():
    f = SensitivityFilter(_config(SensitivityCategory.GAMBLING, action=SensitivityAction.REDACT))
    result = f.filter_searches([
        SearchQuery("DraftKings.com promo code", T, "google.com"),
        SearchQuery("python decorators", T, "google.com"),
    ])
    assert [s.query for s in result.kept] == [SENSITIVE_SEARCH, "python decorators"]
    assert result.counts_by_category == {"gambling": 1}


def test_disabled_passes_through():
    visits = [_visit("https://draftkings.com/")]
    for config in (
        SensitivityConfig(enabled=False, categories=frozenset({SensitivityCategory.GAMBLING})),
        SensitivityConfig(enabled=True),
    ):
        result = SensitivityFilter(config).filter_visits(visits)
        assert result.kept == visits
        assert result.filtered_count == 0
        assert result.counts_by_category == {}


def test_apply_reports_totals_and_keeps_other_sources():
    data = CollectedData(
        visits=[_visit("https://draftkings.com/"), _visit("https://example.com/")],
        searches=[SearchQuery("draftkings.com odds", T, "bing.com")],
        shell_commands=[ShellCommand("make", T)],
        agent_sessions=[AgentSession("write a parser", T, "proj")],
    )
    filtered, report = SensitivityFilter(_config(SensitivityCategory.GAMBLING)).apply(data)
    assert report.visits_filtered == 1
    assert report.searches_filtered == 1
    assert report.total_filtered == 2
    assert report.counts_by_category == {"gambling": 2}
    assert len(filtered.visits) == 1
    assert filtered.searches == []
    assert filtered.shell_commands == data.shell_commands
    assert filtered.agent_sessions == data.agent_sessions


def test_build_entries_order():
    entries = build_entries(_config(SensitivityCategory.AUTH, custom=["mine.example/private"]))
    assert entries[-1].host == "mine.example"
    assert entries[-1].path_prefix == "/private"
    assert entries[0].category is SensitivityCategory.AUTH
