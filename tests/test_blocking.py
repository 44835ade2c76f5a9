from focusdesk.core import blocking
from focusdesk.core.blocking import BlockedSite, BlockingSession, match_site, normalize_url


T0 = 1_700_000_000_000


def test_start_and_project_session() -> None:
    session = blocking.start_session(BlockingSession(), "45", T0)

    assert session.is_active is True
    assert session.start_instant_ms == T0
    assert session.duration_min == 45
    snapshot = blocking.project_session(session, T0 + 60_000)
    assert snapshot.remaining_seconds == 44 * 60
    assert snapshot.is_running is True


def test_start_with_invalid_duration_uses_default() -> None:
    session = blocking.start_session(BlockingSession(), "lots", T0)
    assert session.duration_min == 25


def test_start_while_active_is_ignored() -> None:
    session = blocking.start_session(BlockingSession(), 10, T0)
    assert blocking.start_session(session, 60, T0 + 1_000) is session


def test_end_session_cannot_be_resumed() -> None:
    session = blocking.start_session(BlockingSession(), 30, T0)
    ended = blocking.end_session(session)

    assert ended.is_active is False
    assert ended.start_instant_ms is None
    assert blocking.project_session(ended, T0 + 60_000).remaining_seconds == 30 * 60

    restarted = blocking.start_session(ended, 30, T0 + 600_000)
    assert blocking.project_session(restarted, T0 + 600_000).remaining_seconds == 30 * 60


def test_expire_only_after_duration() -> None:
    session = blocking.start_session(BlockingSession(), 1, T0)

    assert blocking.expire(session, T0 + 59_000) is session
    expired = blocking.expire(session, T0 + 60_000)
    assert expired.is_active is False
    assert expired.duration_min == 1


def test_session_from_dict_fallback() -> None:
    assert BlockingSession.from_dict("oops") == BlockingSession()
    assert BlockingSession.from_dict({"is_active": True, "start_instant_ms": None}) == BlockingSession()
    assert BlockingSession.from_dict({"duration_min": 0}) == BlockingSession()
    assert BlockingSession.from_dict({"duration_min": 301}) == BlockingSession()
    assert BlockingSession.from_dict({"is_active": True, "start_instant_ms": float("nan")}) == BlockingSession()
    assert BlockingSession.from_dict({"is_active": True, "start_instant_ms": float("inf")}) == BlockingSession()
    restored = BlockingSession.from_dict({"is_active": True, "start_instant_ms": T0, "duration_min": 50})
    assert restored == BlockingSession(is_active=True, start_instant_ms=T0, duration_min=50)


def test_normalize_url() -> None:
    assert normalize_url("https://www.YouTube.com/watch?v=1") == "youtube.com"
    assert normalize_url("http://reddit.com") == "reddit.com"
    assert normalize_url("  news.ycombinator.com/item ") == "news.ycombinator.com"
    assert normalize_url("") == ""


def test_match_site_uses_host_containment() -> None:
    sites = [
        BlockedSite(id=1, url="youtube.com", name="YouTube", added_at="2026-01-01T00:00:00", blocked_count=0),
        BlockedSite(id=2, url="reddit.com", name="Reddit", added_at="2026-01-01T00:00:00", blocked_count=0),
    ]
    assert match_site(sites, "https://m.youtube.com/feed").id == 1
    assert match_site(sites, "www.reddit.com/r/python").id == 2
    assert match_site(sites, "https://docs.python.org") is None
    assert match_site(sites, "   ") is None
