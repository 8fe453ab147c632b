import httpx
import pytest

from converter_api import ConversionResult, ConverterAPIClient, ConverterAPIError
from google_oauth import (
    CredentialBundle,
    LoginError,
    NotAuthenticatedError,
    SessionGate,
    SessionState,
)

from .conftest import API_BASE, NOW_MS


class Backend:
    """Canned converter backend recording every request."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"error": "Not found"})
        return self.routes[key]


@pytest.fixture
def backend():
    return Backend({
        ("GET", "/auth/google"): httpx.Response(200, json={"authUrl": "https://accounts.google.com/o/oauth2/auth?x=1"}),
        ("GET", "/api/docs"): httpx.Response(200, json=[{"id": "1", "name": "notes.md"}]),
        ("POST", "/api/convert"): httpx.Response(200, json={
            "totalFiles": 1,
            "convertedFiles": [{"originalFileName": "notes.md", "convertedFileName": "notes.docx", "status": "converted"}],
            "zipDownloadLink": "/api/download-zip",
        }),
        ("GET", "/api/download-zip"): httpx.Response(200, content=b"PK\x03\x04zip"),
    })


@pytest.fixture
def gate(store, clock, navigator, backend):
    api = ConverterAPIClient(base_url=API_BASE, timeout=5.0, transport=httpx.MockTransport(backend))
    return SessionGate(store=store, state=SessionState(store, clock=clock), api=api, navigator=navigator)


@pytest.fixture
def logged_in(store, cookie_options):
    store.write(CredentialBundle(access_token="A", expires_at=NOW_MS + 3600000), cookie_options)


@pytest.mark.asyncio
async def test_login_navigates_to_provider(gate, navigator):
    url = await gate.login()

    assert url.startswith("https://accounts.google.com/")
    assert navigator.external == [url]


@pytest.mark.asyncio
async def test_login_failure_is_reported(store, clock, navigator):
    api = ConverterAPIClient(
        base_url=API_BASE,
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )
    gate = SessionGate(store=store, state=SessionState(store, clock=clock), api=api, navigator=navigator)

    with pytest.raises(LoginError) as excinfo:
        await gate.login()

    assert excinfo.value.message == "Failed to initiate login"
    assert navigator.external == []


def test_logout_twice_leaves_store_empty(gate, store, navigator, logged_in):
    gate.logout()
    assert store.read() is None

    gate.logout()
    assert store.read() is None
    assert navigator.history == ["/", "/"]


def test_logout_on_empty_store(gate, store):
    gate.logout()

    assert store.read() is None


@pytest.mark.asyncio
@pytest.mark.parametrize("action", ["list_documents", "convert_documents"])
async def test_protected_actions_fail_fast_when_logged_out(gate, backend, action):
    with pytest.raises(NotAuthenticatedError) as excinfo:
        await getattr(gate, action)()

    assert excinfo.value.message == "Not authenticated"
    assert backend.requests == []


@pytest.mark.asyncio
async def test_expired_session_blocks_download(gate, backend, store, cookie_options, clock):
    store.write(CredentialBundle(access_token="A", expires_at=NOW_MS + 1), cookie_options)
    clock.advance(1)
    result = ConversionResult(total_files=1, zip_download_link="/api/download-zip")

    with pytest.raises(NotAuthenticatedError):
        await gate.download_archive(result)

    assert backend.requests == []


@pytest.mark.asyncio
async def test_protected_actions_send_bearer_token(gate, backend, logged_in):
    docs = await gate.list_documents()
    result = await gate.convert_documents()
    archive = await gate.download_archive(result)

    assert [doc.name for doc in docs] == ["notes.md"]
    assert result.converted_files[0].converted
    assert archive.startswith(b"PK")
    assert [r.headers["authorization"] for r in backend.requests] == ["Bearer A"] * 3


@pytest.mark.asyncio
async def test_download_without_link_is_refused(gate, backend, logged_in):
    with pytest.raises(ConverterAPIError) as excinfo:
        await gate.download_archive(ConversionResult(total_files=0))

    assert excinfo.value.message == "No download link available"
    assert backend.requests == []


def test_bearer_headers(gate, logged_in):
    assert gate.bearer_headers() == {"Authorization": "Bearer A"}


def test_bearer_headers_require_session(gate):
    with pytest.raises(NotAuthenticatedError):
        gate.bearer_headers()
