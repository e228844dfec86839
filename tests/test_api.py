"""
tests/test_api.py

FastAPI surface: success payloads and failure -> HTTP status mapping.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from listing_ally.api import app, get_orchestrator, get_requester, get_settings
from listing_ally.demo import DEMO_BUNDLE, DEMO_PRODUCT
from listing_ally.models import AnalysisResult, FailureReason, PipelineFailure


class StubOrchestrator:
    def __init__(self, outcome):
        self.outcome = outcome
        self.inputs = []

    async def analyze(self, raw):
        self.inputs.append(raw)
        return self.outcome


class StubRequester:
    def __init__(self, failure=None):
        self.failure = failure
        self.calls = []

    async def optimize_brand_voice(self, current, context):
        self.calls.append(("brand-voice", current, context))
        return self.failure or "Bold voice"

    async def optimize_bullets(self, current, context):
        self.calls.append(("bullets", current, context))
        return self.failure or ["A", "B"]

    async def optimize_description(self, current, context):
        self.calls.append(("description", current, context))
        return self.failure or "Better copy"


@pytest.fixture()
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _override_orchestrator(outcome) -> StubOrchestrator:
    stub = StubOrchestrator(outcome)
    app.dependency_overrides[get_orchestrator] = lambda: stub
    return stub


def _override_requester(failure=None) -> StubRequester:
    stub = StubRequester(failure)
    app.dependency_overrides[get_requester] = lambda: stub
    return stub


class TestAnalyze:
    def test_success(self, client) -> None:
        stub = _override_orchestrator(AnalysisResult(product=DEMO_PRODUCT, bundle=DEMO_BUNDLE))
        resp = client.post("/analyze", json={"input": "B08N5WRWNW"})

        assert resp.status_code == 200
        data = resp.json()
        assert stub.inputs == ["B08N5WRWNW"]
        assert data["product"]["asin"] == "B08N5WRWNW"
        assert data["product"]["bsr"] == 15
        assert [s["type"] for s in data["suggestions"]] == ["brand-voice", "bullets", "description"]
        assert data["seo_score"] == 78
        assert data["bsr_potential"] == 25
        assert data["report_markdown"].startswith("# Listing Optimization: B08N5WRWNW")

    @pytest.mark.parametrize(
        "reason,status",
        [
            (FailureReason.INVALID_INPUT, 400),
            (FailureReason.FETCH_FAILED, 502),
            (FailureReason.EXTRACTION_FAILED, 422),
            (FailureReason.GENERATION_FAILED, 502),
        ],
    )
    def test_failure_status(self, client, reason, status) -> None:
        _override_orchestrator(PipelineFailure(reason, "nope"))
        resp = client.post("/analyze", json={"input": "whatever"})
        assert resp.status_code == status
        assert resp.json()["detail"] == {"reason": reason.value, "message": "nope"}

    def test_missing_input_is_validation_error(self, client) -> None:
        _override_orchestrator(None)
        assert client.post("/analyze", json={}).status_code == 422


class TestDemo:
    def test_demo(self, client) -> None:
        resp = client.get("/demo")
        assert resp.status_code == 200
        data = resp.json()
        assert data["product"]["title"].startswith("Echo Dot")
        assert data["keyword_opportunities"][0] == "smart speaker"


class TestOptimize:
    def test_bullets_from_multiline_string(self, client) -> None:
        stub = _override_requester()
        resp = client.post("/optimize/bullets", json={"current": "One\n\nTwo", "context": "speaker"})
        assert resp.status_code == 200
        assert resp.json() == {"section": "bullets", "suggested": ["A", "B"]}
        assert stub.calls == [("bullets", ["One", "Two"], "speaker")]

    def test_brand_voice(self, client) -> None:
        stub = _override_requester()
        resp = client.post("/optimize/brand-voice", json={"current": "Plain"})
        assert resp.json() == {"section": "brand-voice", "suggested": "Bold voice"}
        assert stub.calls == [("brand-voice", "Plain", "")]

    def test_description_from_list(self, client) -> None:
        stub = _override_requester()
        client.post("/optimize/description", json={"current": ["Line one", "Line two"]})
        assert stub.calls == [("description", "Line one\nLine two", "")]

    def test_unknown_section(self, client) -> None:
        _override_requester()
        assert client.post("/optimize/title", json={"current": "x"}).status_code == 422

    def test_failure(self, client) -> None:
        _override_requester(PipelineFailure(FailureReason.GENERATION_FAILED, "quota"))
        resp = client.post("/optimize/description", json={"current": "x"})
        assert resp.status_code == 502
        assert resp.json()["detail"]["message"] == "quota"


class TestDependencies:
    @pytest.fixture(autouse=True)
    def fresh_providers(self, monkeypatch):
        monkeypatch.setenv("SCRAPING_API_KEY", "scrape-key")
        monkeypatch.setenv("GENERATION_API_KEY", "gen-key")
        for provider in (get_settings, get_requester, get_orchestrator):
            provider.cache_clear()
        yield
        for provider in (get_settings, get_requester, get_orchestrator):
            provider.cache_clear()

    def test_requester_is_shared(self) -> None:
        assert get_requester() is get_requester()
        assert get_orchestrator().requester is get_requester()

    def test_shutdown_closes_generation_client(self) -> None:
        with TestClient(app):
            requester = get_requester()
            assert not requester.client.is_closed()
        assert requester.client.is_closed()
        assert get_requester() is not requester
