import json

import httpx
import pytest

from analysis.analysis_client import AnalysisClient, provider_from_env
from analysis.providers.http_provider import HttpAnalysisProvider
from analysis.providers.mock_provider import MockAnalysisProvider
from smartnote_ai.errors import UpstreamUnavailable

RESPONSE = {
    "tasks": [
        {
            "taskText": "Chuẩn bị slide họp",
            "priority": "High",
            "estimatedTimeMinutes": 60,
            "suggestedProject": "Quý 3",
            "suggestedTopic": "Họp",
        }
    ],
    "metadata": {"projectsDiscovered": ["Quý 3"], "topicsDiscovered": ["Họp"], "tokensUsed": 120},
    "processingTimeMs": 842,
}


def test_analyze_parses_response(fake_provider_factory):
    provider = fake_provider_factory(json.dumps(RESPONSE))
    result = AnalysisClient(provider=provider).analyze("text", "u1")

    assert provider.seen == [("text", "u1")]
    assert result.tasks[0].task_text == "Chuẩn bị slide họp"
    assert result.tasks[0].estimated_minutes == 60
    assert result.metadata.tokens_used == 120
    assert result.processing_time_ms == 842


def test_analyze_invalid_json_is_upstream_failure(fake_provider_factory):
    client = AnalysisClient(provider=fake_provider_factory("INVALID OUTPUT"))
    with pytest.raises(UpstreamUnavailable):
        client.analyze("Anything", "u1")


def test_analyze_wrong_shape_is_upstream_failure(fake_provider_factory):
    client = AnalysisClient(provider=fake_provider_factory('{"tasks": [{"priority": "Low"}]}'))
    with pytest.raises(UpstreamUnavailable):
        client.analyze("Anything", "u1")


def test_analyze_transport_error_is_upstream_failure(fake_provider_factory):
    client = AnalysisClient(provider=fake_provider_factory(error=httpx.ConnectError("refused")))
    with pytest.raises(UpstreamUnavailable):
        client.analyze("Anything", "u1")
    with pytest.raises(UpstreamUnavailable):
        client.labels()


def test_labels_passthrough(fake_provider_factory):
    client = AnalysisClient(provider=fake_provider_factory(labels_text='{"priorities": ["Low"]}'))
    assert client.labels() == {"priorities": ["Low"]}


def test_mock_provider_splits_lines_and_projects():
    client = AnalysisClient(provider=MockAnalysisProvider())
    result = client.analyze("Website: sửa footer gấp\n\n- mua sữa\nKhách:", "u1")

    assert [t.task_text for t in result.tasks] == ["sửa footer gấp", "mua sữa"]
    assert result.tasks[0].suggested_project == "Website"
    assert result.tasks[0].priority == "High"
    assert result.tasks[1].suggested_project is None
    assert result.metadata.projects_discovered == ["Website"]


def test_provider_from_env(monkeypatch):
    monkeypatch.setenv("AI_PROVIDER", "mock")
    assert isinstance(provider_from_env(), MockAnalysisProvider)
    monkeypatch.setenv("AI_PROVIDER", "http")
    assert isinstance(provider_from_env(), HttpAnalysisProvider)


def test_http_provider_posts_to_analyze_endpoint(monkeypatch):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=RESPONSE)

    provider = HttpAnalysisProvider(base_url="http://ai.local/", timeout_s=1.0)
    transport = httpx.MockTransport(handler)

    original = httpx.Client

    class PatchedClient(original):
        def __init__(self, *args, **kwargs):
            kwargs["transport"] = transport
            super().__init__(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", PatchedClient)
    raw = provider.analyze(text="hello", user_id="u1")

    assert seen["url"] == "http://ai.local/api/analyze"
    assert seen["body"] == {"text": "hello", "userId": "u1"}
    assert json.loads(raw)["processingTimeMs"] == 842
