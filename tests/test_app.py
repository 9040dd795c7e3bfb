"""Tests for the chunking HTTP API."""

import pytest
from fastapi.testclient import TestClient

from text_chunking import ConfigurationError
from text_chunking.app import create_app

from conftest import REACT_DOCS


@pytest.fixture
def client(service):
    return TestClient(create_app(service=service))


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestChunkText:
    def test_chars(self, client):
        response = client.post(
            "/chunk/text",
            json={"text": REACT_DOCS, "source": "react-docs", "chunk_size": 200, "overlap": 20},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["document_id"] == "react-docs"
        assert body["total_chunks"] == len(body["chunks"])
        assert body["chunks"][0]["id"] == "react-docs-chunk-0"

    def test_tokens(self, client):
        response = client.post(
            "/chunk/text",
            json={"text": REACT_DOCS, "source": "react.md", "strategy": "tokens", "max_tokens": 50},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["document_id"].startswith("doc-")
        assert all(c["metadata"]["token_count"] <= 50 for c in body["chunks"])

    def test_invalid_budget_rejected(self, client):
        response = client.post("/chunk/text", json={"text": "Some text.", "chunk_size": 0})
        assert response.status_code == 422

    def test_unknown_strategy_rejected(self, client):
        response = client.post("/chunk/text", json={"text": "Some text.", "strategy": "words"})
        assert response.status_code == 422

    def test_configuration_error_maps_to_422(self):
        class RejectingService:
            def chunk_text(self, *args, **kwargs):
                raise ConfigurationError("overlap", 999, "must be less than chunk_size")

        client = TestClient(create_app(service=RejectingService()))
        response = client.post("/chunk/text", json={"text": "Some text."})

        assert response.status_code == 422
        assert "overlap" in response.json()["detail"]

    def test_unexpected_error_maps_to_500(self):
        class BrokenService:
            def chunk_text(self, *args, **kwargs):
                raise RuntimeError("boom")

        client = TestClient(create_app(service=BrokenService()))
        response = client.post("/chunk/text", json={"text": "Some text."})

        assert response.status_code == 500
        assert response.json()["detail"] == "boom"


class TestChunkCsv:
    def test_chunk_csv(self, client, sample_csv):
        response = client.post("/chunk/csv", json={"csv": sample_csv})

        assert response.status_code == 200
        body = response.json()
        assert body["total_records"] == 3
        assert body["documents"][0]["chunks"][0]["metadata"]["extra"]["likes"] == 42

    def test_empty_csv(self, client):
        response = client.post("/chunk/csv", json={"csv": ""})

        assert response.status_code == 200
        assert response.json() == {"total_records": 0, "documents": []}


class TestValidate:
    def test_round_trip_chunks(self, client):
        chunked = client.post(
            "/chunk/text",
            json={"text": REACT_DOCS, "source": "react.md", "strategy": "tokens", "max_tokens": 50},
        ).json()

        response = client.post("/validate", json={"chunks": chunked["chunks"], "max_tokens": 50})

        assert response.status_code == 200
        assert response.json() == {"is_valid": True, "issues": []}

    def test_reports_issues(self, client):
        chunk = {
            "id": "bad id",
            "content": "Ends mid wor",
            "metadata": {"source": "x", "chunk_index": 0},
        }
        response = client.post("/validate", json={"chunks": [chunk]})

        body = response.json()
        assert body["is_valid"] is False
        assert len(body["issues"]) == 2
