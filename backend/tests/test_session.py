# 서버 측 세션 상태(플래시, sid 재발급, 만료 연장) 검증
# - 저장은 SessionRecord.get_motor_collection을 MagicMock으로 대체
import asyncio
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock, patch

from markupsafe import Markup
from starlette.responses import Response

from storefinder.core.security import get_current_user
from storefinder.core.session import Session, SessionStore
from storefinder.models.session import SessionRecord

MAX_AGE = 14 * 24 * 60 * 60


def test_flash_escapes_plain_text():
    session = Session("sid")
    session.flash("error", "<script>alert(1)</script>")
    assert session.flashes["error"] == ["&lt;script&gt;alert(1)&lt;/script&gt;"]
    assert session.modified


def test_flash_keeps_markup():
    session = Session("sid")
    session.flash("success", Markup('Saved <a href="/stores/x">View</a>'))
    assert session.flashes["success"] == ['Saved <a href="/stores/x">View</a>']


def test_pop_flashes_clears():
    session = Session("sid", flashes={"info": ["hi"]}, is_new=False)
    assert session.pop_flashes() == {"info": ["hi"]}
    assert session.flashes == {}
    assert session.modified


def test_pop_empty_flashes_does_not_modify():
    session = Session("sid", is_new=False)
    assert session.pop_flashes() == {}
    assert not session.modified


def test_login_regenerates_sid():
    session = Session("old", is_new=False)
    session.login("user-1")
    assert session.sid != "old"
    assert session.discarded_sid == "old"
    assert session.user_id == "user-1"
    assert session.is_authenticated


def test_logout_drops_user():
    session = Session("old", user_id="user-1", is_new=False)
    session.logout()
    assert session.user_id is None
    assert not session.is_authenticated
    assert session.discarded_sid == "old"


def test_new_session_has_nothing_to_discard():
    session = Session("fresh")
    session.login("user-1")
    assert session.discarded_sid is None


def _logged_in(refreshed_ago: timedelta, now: datetime) -> Session:
    expires_at = now - refreshed_ago + timedelta(seconds=MAX_AGE)
    return Session("sid", user_id="user-1", is_new=False, expires_at=expires_at)


def test_needs_refresh_once_a_day():
    now = datetime(2024, 5, 1, 12, 0, 0)
    assert not _logged_in(timedelta(hours=1), now).needs_refresh(MAX_AGE, now)
    assert _logged_in(timedelta(days=1), now).needs_refresh(MAX_AGE, now)
    assert _logged_in(timedelta(days=10), now).needs_refresh(MAX_AGE, now)


def test_anonymous_session_is_not_refreshed():
    now = datetime(2024, 5, 1, 12, 0, 0)
    session = Session("sid", is_new=False, expires_at=now - timedelta(days=3) + timedelta(seconds=MAX_AGE))
    assert not session.needs_refresh(MAX_AGE, now)
    assert not Session("fresh").needs_refresh(MAX_AGE, now)


def _commit(session):
    collection = MagicMock()
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock()
    response = Response()
    with patch.object(SessionRecord, "get_motor_collection", return_value=collection), \
            patch("storefinder.core.session.settings.SESSION_MAX_AGE_SECONDS", MAX_AGE):
        asyncio.run(SessionStore().commit(session, response))
    return collection, response


def test_commit_extends_active_login():
    session = _logged_in(timedelta(days=2), datetime.utcnow())
    collection, response = _commit(session)
    collection.update_one.assert_awaited_once()
    saved = collection.update_one.call_args.args[1]["$set"]
    assert saved["expires_at"] > session.expires_at
    assert "sid=sid" in response.headers["set-cookie"]


def test_commit_skips_recently_refreshed_login():
    session = _logged_in(timedelta(minutes=5), datetime.utcnow())
    collection, response = _commit(session)
    collection.update_one.assert_not_called()
    assert "set-cookie" not in response.headers


def test_anonymous_request_reads_no_user():
    repo = AsyncMock()
    assert asyncio.run(get_current_user(session=Session("sid"), repo=repo)) is None
    repo.get.assert_not_called()

    repo.get.return_value = "alice"
    assert asyncio.run(get_current_user(session=Session("sid", user_id="user-1"), repo=repo)) == "alice"
