import pytest

from cli.status_display import get_auth_status
from config.loader import ConfigLoader
from google_oauth import CredentialBundle, SessionState

from .conftest import NOW_MS


@pytest.fixture
def loader(tmp_path):
    return ConfigLoader(env_path=str(tmp_path / "missing.env"))


def test_environment_overrides_are_typed(loader, monkeypatch):
    monkeypatch.setenv("TOKEN_TTL_MS", "60000")
    monkeypatch.setenv("EXCHANGE_TIMEOUT", "2.5")
    monkeypatch.setenv("CALLBACK_PORT", "not-a-port")

    assert loader.get("TOKEN_TTL_MS", 3600000) == 60000
    assert loader.get("EXCHANGE_TIMEOUT", 10.0) == 2.5
    assert loader.get("CALLBACK_PORT", 3000) == 3000


def test_defaults_expand_home(loader, monkeypatch):
    monkeypatch.delenv("CREDENTIALS_FILE", raising=False)

    assert not loader.get("CREDENTIALS_FILE", "~/.markdown-docx/cookies.json").startswith("~")


def test_dotenv_file_is_loaded(tmp_path, monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("APP_ENV=production\n")

    loader = ConfigLoader(env_path=str(env_file))

    assert loader.get("APP_ENV", "development") == "production"
    monkeypatch.delenv("APP_ENV", raising=False)


def test_boolean_settings_accept_common_words(loader, monkeypatch):
    monkeypatch.setenv("VERBOSE_FLAG", "On")

    assert loader.get("VERBOSE_FLAG", False) is True
    assert loader.get("MISSING_FLAG_FOR_TEST", True) is True


def test_auth_status_labels(store, clock, cookie_options):
    session = SessionState(store, clock=clock)
    assert get_auth_status(session)[0] == "NO AUTH"

    store.write(
        CredentialBundle(access_token="A", expires_at=NOW_MS + 120000, user_info={"name": "u"}),
        cookie_options,
    )
    assert get_auth_status(session) == ("VALID", "u, expires in 2m")

    clock.advance(120000)
    assert get_auth_status(session)[0] == "EXPIRED"
