# tests/test_api.py
from proofreader.core.config import MAX_DOCUMENT_CHARS, MAX_REQUEST_BYTES
from proofreader.models.concern import CATEGORIES, SEVERITIES


def _analyze(client, content, **extra):
    return client.post("/analyze", json={"conversation_id": "conv-1", "document_content": content, **extra})


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_analyze_proposal(client, proposal):
    r = _analyze(client, proposal, idea_definitions=[{"id": "idea-1", "title": "Hybrid work"}])
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["success"] is True
    assert data["analysis"]["total_concerns"] == len(data["concerns"])
    assert set(data["analysis"]["concerns_by_category"]) == set(CATEGORIES)
    assert set(data["analysis"]["concerns_by_severity"]) == set(SEVERITIES)

    meta = data["metadata"]
    assert meta["model_used"] == "rule-based"
    assert meta["content_length"] == len(proposal)
    assert meta["idea_definitions_used"] == 1
    assert meta["processing_time_ms"] >= 0

    for c in data["concerns"]:
        assert c["conversation_id"] == "conv-1"
        assert c["status"] == "to_be_done"


def test_results_only_document_over_http(client):
    r = _analyze(client, "# Results\nFindings here.")
    assert r.status_code == 200, r.text
    titles = {c["title"] for c in r.json()["concerns"]}
    assert "Missing Introduction Section" in titles


def test_blank_document_rejected(client):
    r = _analyze(client, " " * 40)
    assert r.status_code == 400


def test_too_short_document_rejected(client):
    r = _analyze(client, "Too short")
    assert r.status_code == 400


def test_oversized_document_rejected(client):
    r = _analyze(client, "a" * (MAX_DOCUMENT_CHARS + 1))
    assert r.status_code == 413


def test_oversized_body_rejected_by_middleware(client):
    r = _analyze(client, "a" * (MAX_REQUEST_BYTES + 1))
    assert r.status_code == 413
    assert r.json()["detail"] == "Request body too large"


def test_missing_conversation_id(client):
    r = client.post("/analyze", json={"document_content": "# Results\nFindings here."})
    assert r.status_code == 422


def test_options_filter_by_severity(client, proposal):
    r = _analyze(client, proposal, analysis_options={"min_severity": "high"})
    assert r.status_code == 200, r.text
    severities = {c["severity"] for c in r.json()["concerns"]}
    assert severities <= {"high", "critical"}


def test_options_filter_by_category(client):
    r = _analyze(client, "# Results\nFindings here.", analysis_options={"categories": ["structure"]})
    data = r.json()
    assert data["concerns"]
    assert {c["category"] for c in data["concerns"]} == {"structure"}
    assert data["analysis"]["concerns_by_category"]["completeness"] == 0
