import json

import httpx
import pytest

from clearwrite.config import Settings, get_settings
from clearwrite.gemini_client import GeminiClient
from clearwrite.main import app, get_relay
from clearwrite.relay import TextRelay

SETTINGS = Settings(api_key="test-key", api_url="https://gemini.test/generateContent")


class StubUpstream:
    def __init__(self, status_code: int = 200, text: str = "**Done**") -> None:
        self.status_code = status_code
        self.text = text
        self.calls = 0

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        return httpx.Response(
            self.status_code,
            json={"candidates": [{"content": {"parts": [{"text": self.text}]}}]},
        )

    def relay(self, settings: Settings = SETTINGS) -> TextRelay:
        transport = httpx.MockTransport(self)
        return TextRelay(
            settings,
            client_factory=lambda s: GeminiClient(s.api_key, s.api_url, transport=transport),
        )


async def post(path: str, body) -> httpx.Response:
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as client:
        if isinstance(body, (dict, list)):
            return await client.post(path, json=body)
        return await client.post(path, content=body, headers={"Content-Type": "application/json"})


@pytest.fixture
def upstream():
    stub = StubUpstream()
    app.dependency_overrides[get_relay] = lambda: stub.relay()
    yield stub
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_process_text_returns_result(upstream: StubUpstream):
    resp = await post("/api/process-text", {"text": "notes", "action": "summarize"})

    assert resp.status_code == 200
    assert resp.json() == {"result": "**Done**", "detectedLanguage": None}
    assert upstream.calls == 1


@pytest.mark.asyncio
async def test_process_text_translate_sets_detected_language(upstream: StubUpstream):
    resp = await post("/api/process-text", {"text": "Hallo Welt", "action": "translate"})

    assert resp.status_code == 200
    assert resp.json()["detectedLanguage"] == "Auto-detected"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"action": "summarize"},
        {"text": "", "action": "summarize"},
        {"text": "notes"},
    ],
)
async def test_process_text_requires_text_and_action(upstream: StubUpstream, body: dict):
    resp = await post("/api/process-text", body)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Text and action are required"}
    assert upstream.calls == 0


@pytest.mark.asyncio
async def test_process_text_rejects_unknown_action(upstream: StubUpstream):
    resp = await post("/api/process-text", {"text": "notes", "action": "poetry"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid action"}
    assert upstream.calls == 0


@pytest.mark.asyncio
async def test_process_text_rejects_malformed_body(upstream: StubUpstream):
    resp = await post("/api/process-text", b"{not json")

    assert resp.status_code == 400
    assert "error" in resp.json()
    assert upstream.calls == 0


@pytest.mark.asyncio
async def test_process_text_reports_missing_credentials():
    stub = StubUpstream()
    app.dependency_overrides[get_settings] = lambda: Settings()
    app.dependency_overrides[get_relay] = lambda: stub.relay(Settings())

    resp = await post("/api/process-text", {"text": "notes", "action": "grammar"})

    app.dependency_overrides.clear()

    assert resp.status_code == 500
    error = resp.json()["error"]
    assert "GEMINI_API_KEY" in error
    assert "GEMINI_API_URL" in error
    assert stub.calls == 0


@pytest.mark.asyncio
async def test_default_relay_reads_injected_settings():
    app.dependency_overrides[get_settings] = lambda: Settings()

    resp = await post("/api/process-text", {"text": "notes", "action": "tone"})

    app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert "GEMINI_API_KEY" in resp.json()["error"]


@pytest.mark.asyncio
async def test_process_text_upstream_failure_returns_500():
    stub = StubUpstream(status_code=500)
    app.dependency_overrides[get_relay] = lambda: stub.relay()

    resp = await post("/api/process-text", {"text": "notes", "action": "keywords"})

    app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to process text"}
    assert stub.calls == 1


@pytest.mark.asyncio
async def test_unexpected_relay_failure_returns_500():
    class BrokenRelay:
        async def process(self, req):
            raise ValueError("unexpected")

    app.dependency_overrides[get_relay] = lambda: BrokenRelay()

    resp = await post("/api/process-text", {"text": "notes", "action": "keywords"})

    app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to process text"}


@pytest.mark.asyncio
async def test_workbench_process_returns_rendered_html(upstream: StubUpstream):
    upstream.text = "## Summary\n- **one**"

    resp = await post("/api/workbench/process", {"text": "notes", "action": "summarize"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["result"] == "## Summary\n- **one**"
    assert data["detectedLanguage"] is None
    assert data["html"] == "<p><h2>Summary</h2>\n<li>• <strong>one</strong></li></p>"


@pytest.mark.asyncio
async def test_workbench_process_upstream_failure_has_no_output():
    stub = StubUpstream(status_code=500)
    app.dependency_overrides[get_relay] = lambda: stub.relay()

    resp = await post("/api/workbench/process", {"text": "notes", "action": "summarize"})

    app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert json.loads(resp.content) == {"error": "Failed to process text"}


@pytest.mark.asyncio
async def test_index_renders_workbench():
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as client:
        resp = await client.get("/")

    assert resp.status_code == 200
    page = resp.text
    for label in ("Translate Text", "Paraphrase", "Summarize", "Correct Grammar", "Adjust Tone", "Extract Keywords"):
        assert label in page
    assert '<option value="formal" selected>' in page
    assert "/api/workbench/process" in page
    assert "Processing failed" in page
