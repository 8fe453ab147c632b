import httpx
import pytest

from converter_api import ConverterAPIClient, ConverterAPIError

from .conftest import API_BASE


def client_for(handler) -> ConverterAPIClient:
    return ConverterAPIClient(base_url=API_BASE, timeout=5.0, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_server_error_field_is_surfaced():
    client = client_for(lambda request: httpx.Response(403, json={"error": "Drive access revoked"}))

    with pytest.raises(ConverterAPIError) as excinfo:
        await client.list_documents("A")

    assert excinfo.value.message == "Drive access revoked"
    assert excinfo.value.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize("method, fallback", [
    ("list_documents", "Failed to fetch documents"),
    ("convert_documents", "Conversion failed"),
    ("download_archive", "Download failed"),
])
async def test_fallback_messages(method, fallback):
    client = client_for(lambda request: httpx.Response(500, text="oops"))

    with pytest.raises(ConverterAPIError) as excinfo:
        await getattr(client, method)("A")

    assert excinfo.value.message == fallback


@pytest.mark.asyncio
async def test_transport_failure_uses_fallback():
    def handler(request):
        raise httpx.ConnectError("refused")

    with pytest.raises(ConverterAPIError) as excinfo:
        await client_for(handler).convert_documents("A")

    assert excinfo.value.message == "Conversion failed"


@pytest.mark.asyncio
async def test_conversion_result_parses_failures():
    client = client_for(lambda request: httpx.Response(200, json={
        "totalFiles": 2,
        "convertedFiles": [
            {"originalFileName": "a.md", "convertedFileName": "a.docx", "status": "converted"},
            {"originalFileName": "b.md", "status": "failed", "error": "empty document"},
        ],
    }))

    result = await client.convert_documents("A")

    assert result.total_files == 2
    assert result.zip_download_link is None
    failed = result.converted_files[1]
    assert not failed.converted
    assert failed.error == "empty document"


@pytest.mark.asyncio
async def test_unexpected_document_payload():
    client = client_for(lambda request: httpx.Response(200, json={"docs": "nope"}))

    with pytest.raises(ConverterAPIError) as excinfo:
        await client.list_documents("A")

    assert excinfo.value.message == "Failed to fetch documents"


@pytest.mark.asyncio
async def test_login_url_missing():
    client = client_for(lambda request: httpx.Response(200, json={}))

    with pytest.raises(ConverterAPIError):
        await client.initiate_login()
