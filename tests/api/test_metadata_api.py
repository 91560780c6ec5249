"""
Tests for the /v1/metadata browse endpoints and the sermon transcript endpoint.
"""

from fastapi.testclient import TestClient


class TestMetadataEndpoints:
    def test_dimensions_registry(self, client: TestClient) -> None:
        data = client.get("/v1/metadata/dimensions").json()
        slugs = [d["slug"] for d in data["dimensions"]]
        assert slugs[0] == "keywords"
        assert "sermon-types" in slugs
        assert len(slugs) == 11

    def test_dimension_values(self, client: TestClient) -> None:
        data = client.get("/v1/metadata/keywords").json()
        assert data["total"] == 2
        assert data["values"][0] == {"value": "grace", "sermon_count": 2}

    def test_scalar_dimension(self, client: TestClient) -> None:
        data = client.get("/v1/metadata/sermon-types").json()
        assert [v["value"] for v in data["values"]] == ["Expository", "Topical"]

    def test_documents_for_value(self, client: TestClient) -> None:
        data = client.get("/v1/metadata/keywords/grace").json()
        assert data["total"] == 2
        assert data["sort"] == "date-desc"
        assert [s["id"] for s in data["sermons"]] == [102, 101]

    def test_unknown_dimension_returns_404(self, client: TestClient) -> None:
        assert client.get("/v1/metadata/colours").status_code == 404
        assert client.get("/v1/metadata/colours/blue").status_code == 404


class TestSermonTranscriptEndpoint:
    def test_paragraphs(self, client: TestClient) -> None:
        data = client.get("/v1/sermons/101/transcript").json()
        assert data["sermon_id"] == 101
        assert len(data["paragraphs"]) == 1
        assert data["is_highlighted"] is False

    def test_query_filters_paragraphs(self, client: TestClient) -> None:
        data = client.get("/v1/sermons/101/transcript", params={"q": "zebra"}).json()
        assert data["paragraphs"] == []
        assert data["is_highlighted"] is True

    def test_missing_transcript_returns_404(self, client: TestClient) -> None:
        assert client.get("/v1/sermons/102/transcript").status_code == 404
        assert client.get("/v1/sermons/999/transcript").status_code == 404
