import httpx
import pytest

from viewscout.models.result import Found, NotFound, ProviderError
from viewscout.tools.supadata import TranscriptClient


@pytest.fixture
def transcripts(make_settings, mock_http):
    def _make(handler):
        return TranscriptClient(make_settings(supadata_api_key="sd-key"), mock_http(handler))

    return _make


async def test_segments_are_joined(transcripts):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["video"] = request.url.params["videoId"]
        seen["key"] = request.headers["x-api-key"]
        return httpx.Response(200, json={"content": [{"text": "안녕하세요"}, {"text": "여러분"}]})

    result = await transcripts(handler).get_transcript("vid00000001")

    assert result == Found("안녕하세요 여러분")
    assert seen == {"video": "vid00000001", "key": "sd-key"}


async def test_empty_transcript_is_not_found(transcripts):
    result = await transcripts(lambda r: httpx.Response(200, json={"content": []})).get_transcript("v")
    assert isinstance(result, NotFound)


async def test_missing_content_is_not_found(transcripts):
    result = await transcripts(lambda r: httpx.Response(200, json={"error": "none"})).get_transcript("v")
    assert isinstance(result, NotFound)


async def test_server_error(transcripts):
    result = await transcripts(lambda r: httpx.Response(503)).get_transcript("v")
    assert isinstance(result, ProviderError)


async def test_disabled(make_settings, mock_http):
    client = TranscriptClient(make_settings(), mock_http(lambda r: httpx.Response(200)))
    assert isinstance(await client.get_transcript("v"), ProviderError)
