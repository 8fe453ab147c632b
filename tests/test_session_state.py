import pytest

from google_oauth import CredentialBundle, SessionState

from .conftest import NOW_MS


@pytest.fixture
def session(store, clock):
    return SessionState(store, clock=clock)


def test_no_bundle_is_not_authenticated(session):
    assert session.is_authenticated() is False


@pytest.mark.parametrize("offset, expected", [(1, True), (3600000, True), (0, False), (-1, False)])
def test_validity_depends_on_expiry(session, store, cookie_options, offset, expected):
    store.write(CredentialBundle(access_token="A", expires_at=NOW_MS + offset), cookie_options)

    assert session.is_authenticated() is expected


def test_expiry_takes_effect_as_clock_moves(session, store, cookie_options, clock):
    store.write(CredentialBundle(access_token="A", expires_at=NOW_MS + 1000), cookie_options)
    assert session.is_authenticated()

    clock.advance(1000)

    assert not session.is_authenticated()


def test_check_does_not_touch_the_store(session, store, cookie_options, cookie_file):
    store.write(CredentialBundle(access_token="A", expires_at=NOW_MS + 1000), cookie_options)
    before = cookie_file.read_bytes()

    for _ in range(50):
        session.is_authenticated()

    assert cookie_file.read_bytes() == before


def test_status_for_valid_session(session, store, cookie_options):
    store.write(
        CredentialBundle(
            access_token="A",
            expires_at=NOW_MS + 90 * 60 * 1000,
            refresh_token="R",
            user_info={"email": "u@example.com"},
        ),
        cookie_options,
    )

    status = session.get_status()

    assert status["has_tokens"] is True
    assert status["is_expired"] is False
    assert status["time_until_expiry"] == "1h 30m"
    assert status["has_refresh_token"] is True
    assert status["user"] == "u@example.com"
    assert "A" not in status.values()


def test_status_for_expired_session(session, store, cookie_options, clock):
    store.write(CredentialBundle(access_token="A", expires_at=NOW_MS), cookie_options)
    clock.advance(5 * 60 * 1000)

    status = session.get_status()

    assert status["is_expired"] is True
    assert status["time_until_expiry"] == "5m ago"


def test_status_without_tokens(session):
    status = session.get_status()

    assert status["has_tokens"] is False
    assert status["expires_at"] is None
