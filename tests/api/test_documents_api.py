"""
Tests for document, chunk and admin endpoints.
"""

from fastapi.testclient import TestClient

MOON_TEXT = "Moon sighting decides the start of each month. The crescent must be seen by witnesses."


def ingest(client: TestClient, title: str = "Moon Guide") -> dict:
    response = client.post("/api/v1/documents", json={"title": title, "text": MOON_TEXT})
    assert response.status_code == 201
    return response.json()


class TestDocumentEndpoints:
    """Tests for document ingestion and administration."""

    def test_ingest_should_return_result(self, client: TestClient) -> None:
        # Act
        body = ingest(client)

        # Assert
        assert body["chunk_count"] == 1
        assert body["unembedded_count"] == 0
        assert body["document"]["title"] == "Moon Guide"

    def test_list_should_include_ingested_document(self, client: TestClient) -> None:
        ingest(client)

        response = client.get("/api/v1/documents")

        assert response.status_code == 200
        assert response.json()["total"] == 1

    def test_upload_text_file_should_ingest(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/documents/upload",
            files={"file": ("moon.txt", MOON_TEXT.encode("utf-8"), "text/plain")},
            data={"category": "fiqh"},
        )

        assert response.status_code == 201
        assert response.json()["document"]["title"] == "moon"
        assert response.json()["document"]["category"] == "fiqh"

    def test_upload_pdf_should_return_415(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/documents/upload",
            files={"file": ("report.pdf", b"%PDF-1.7", "application/pdf")},
        )

        assert response.status_code == 415
        assert response.json()["success"] is False

    def test_update_tags(self, client: TestClient) -> None:
        document_id = ingest(client)["document"]["id"]

        response = client.patch(f"/api/v1/documents/{document_id}", json={"trust": "verified"})

        assert response.status_code == 200
        assert response.json()["trust"] == "verified"

    def test_delete_should_remove_document_and_chunks(self, client: TestClient) -> None:
        # Arrange
        document_id = ingest(client)["document"]["id"]

        # Act
        response = client.delete(f"/api/v1/documents/{document_id}")

        # Assert
        assert response.status_code == 204
        assert client.get(f"/api/v1/documents/{document_id}/chunks").status_code == 404
        assert client.get("/api/v1/health/db").json()["chunks"] == 0

    def test_delete_unknown_document_should_return_404(self, client: TestClient) -> None:
        assert client.delete("/api/v1/documents/missing").status_code == 404


class TestChunkEndpoints:
    """Tests for chunk inspection, correction and re-embedding."""

    def test_chunks_should_hide_vectors(self, client: TestClient) -> None:
        document_id = ingest(client)["document"]["id"]

        response = client.get(f"/api/v1/documents/{document_id}/chunks")

        assert response.status_code == 200
        chunk = response.json()[0]
        assert chunk["has_embedding"] is True
        assert "embedding" not in chunk

    def test_edit_then_reembed(self, client: TestClient) -> None:
        # Arrange
        document_id = ingest(client)["document"]["id"]
        chunk_id = f"{document_id}-chunk-0"

        # Act
        edited = client.patch(f"/api/v1/chunks/{chunk_id}", json={"text": "Crescent rules."})
        reembedded = client.post(f"/api/v1/chunks/{chunk_id}/reembed")

        # Assert
        assert edited.status_code == 200
        assert edited.json()["has_embedding"] is False
        assert reembedded.status_code == 200
        assert reembedded.json()["has_embedding"] is True

    def test_reembed_failure_should_return_502(self, client: TestClient, fake_gemini) -> None:
        document_id = ingest(client)["document"]["id"]
        chunk_id = f"{document_id}-chunk-0"
        client.patch(f"/api/v1/chunks/{chunk_id}", json={"text": "Crescent rules."})
        fake_gemini.fail_embedding_for.add("Crescent rules.")

        response = client.post(f"/api/v1/chunks/{chunk_id}/reembed")

        assert response.status_code == 502

    def test_unknown_chunk_should_return_404(self, client: TestClient) -> None:
        response = client.patch("/api/v1/chunks/missing", json={"text": "x"})

        assert response.status_code == 404


class TestAdminEndpoints:
    """Tests for settings and leads endpoints."""

    def test_settings_defaults(self, client: TestClient) -> None:
        response = client.get("/api/v1/settings")

        assert response.status_code == 200
        assert response.json()["app_name"] == "Samastha AI"
        assert client.get("/api/v1/settings/version").json() == {"version": 0}

    def test_settings_should_not_expose_admin_password(self, client: TestClient) -> None:
        body = client.get("/api/v1/settings").json()

        assert "admin_password" not in body

    def test_save_without_password_should_keep_stored_password(self, client: TestClient, store) -> None:
        # Arrange
        payload = client.get("/api/v1/settings").json()
        client.put("/api/v1/settings", json={**payload, "admin_password": "s3cret"})

        # Act
        client.put("/api/v1/settings", json={**payload, "app_name": "Samastha Helper"})

        # Assert
        saved = store.get_settings()
        assert saved.admin_password == "s3cret"
        assert saved.app_name == "Samastha Helper"

    def test_save_settings_should_bump_version_once(self, client: TestClient) -> None:
        # Arrange
        payload = client.get("/api/v1/settings").json()
        payload["app_name"] = "Samastha Helper"

        # Act
        first = client.put("/api/v1/settings", json=payload)
        repeat = client.put("/api/v1/settings", json=payload)

        # Assert
        assert first.json() == {"version": 1}
        assert repeat.json() == {"version": 1}
        assert client.get("/api/v1/settings").json()["app_name"] == "Samastha Helper"

    def test_saved_name_should_reach_welcome_message(self, client: TestClient) -> None:
        payload = client.get("/api/v1/settings").json()
        payload["app_name"] = "Samastha Helper"
        client.put("/api/v1/settings", json=payload)

        response = client.post("/api/v1/conversations")

        assert "Samastha Helper" in response.json()["messages"][0]["content"]

    def test_leads_empty(self, client: TestClient) -> None:
        assert client.get("/api/v1/leads").json() == {"leads": [], "total": 0}
