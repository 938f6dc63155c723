import pytest

from data_designer_prompt_audit.assembler import ResultAssembler
from data_designer_prompt_audit.errors import ExternalCallError
from data_designer_prompt_audit.server import create_app


class FailingAdapter:
    def request_analysis(self, prompt):
        raise ExternalCallError("Gemini error", status=429, body="quota")


class BrokenAdapter:
    def request_analysis(self, prompt):
        raise RuntimeError("kaboom")


@pytest.fixture
def client():
    app = create_app(ResultAssembler(adapter=FailingAdapter()))
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


class TestAnalyzeEndpoint:
    def test_success_with_fallback(self, client):
        resp = client.post("/api/analyze", json={"prompt": "write a poem"})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["clarityScore"] == 15
        assert data["weaknesses"] == []
        assert data["improvedPrompts"] == {"structured": "write a poem", "concise": "write a poem", "detailed": "write a poem"}
        assert data["highlights"]["missingOutputSpec"] is True
        assert set(data["subscores"]) == {"clarity", "structure", "specificity", "context", "constraints"}

    @pytest.mark.parametrize("body", [{}, {"prompt": ""}, {"prompt": "   "}, {"prompt": 5}, {"text": "hi"}])
    def test_invalid_prompt(self, client, body):
        resp = client.post("/api/analyze", json=body)
        assert resp.status_code == 400
        assert "error" in resp.get_json()

    def test_non_json_body(self, client):
        resp = client.post("/api/analyze", data="write a poem", content_type="text/plain")
        assert resp.status_code == 400

    def test_method_not_allowed(self, client):
        resp = client.get("/api/analyze")
        assert resp.status_code == 405
        assert resp.headers["Allow"] == "POST"
        assert "error" in resp.get_json()

    def test_unexpected_error(self):
        app = create_app(ResultAssembler(adapter=BrokenAdapter()))
        with app.test_client() as c:
            resp = c.post("/api/analyze", json={"prompt": "write a poem"})
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "kaboom"}

    def test_app_from_environment_without_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        app = create_app()
        with app.test_client() as c:
            resp = c.post("/api/analyze", json={"prompt": "write a poem"})
        assert resp.status_code == 200
        assert resp.get_json()["improvedPrompts"]["concise"] == "write a poem"
