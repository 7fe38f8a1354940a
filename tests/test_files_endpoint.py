"""Tests for uploaded file endpoints"""

import uuid

from regdesk.services.file_service import content_disposition


class TestFilesEndpoint:
    """Test file upload and passthrough download"""

    def test_download_stored_file(self, client, file_service):
        stored = file_service.save_file("id-card.png", b"\x89PNG fake", "image/png")

        response = client.get("/files", params={"id": str(stored.id)})

        assert response.status_code == 200
        assert response.content == b"\x89PNG fake"
        assert response.headers["content-type"] == "image/png"
        assert response.headers["content-disposition"] == (
            'attachment; filename="id-card.png"'
        )

    def test_upload_then_download(self, client):
        response = client.post(
            "/files",
            files={"file": ("scan.pdf", b"%PDF-1.4 scan", "application/pdf")},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["filename"] == "scan.pdf"
        assert data["size"] == len(b"%PDF-1.4 scan")

        download = client.get("/files", params={"id": data["id"]})
        assert download.status_code == 200
        assert download.content == b"%PDF-1.4 scan"
        assert download.headers["content-type"] == "application/pdf"

    def test_upload_empty_file(self, client):
        response = client.post("/files", files={"file": ("empty.txt", b"", "text/plain")})
        assert response.status_code == 400

    def test_missing_id(self, client):
        response = client.get("/files")

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Invalid or missing file ID",
        }

    def test_invalid_id(self, client):
        response = client.get("/files", params={"id": "12345"})
        assert response.status_code == 400

    def test_unknown_id(self, client):
        response = client.get("/files", params={"id": str(uuid.uuid4())})

        assert response.status_code == 404
        assert response.json()["error"] == "File not found"

    def test_upload_then_download_non_ascii_filename(self, client):
        upload = client.post(
            "/files", files={"file": ("身份证.png", b"\x89PNGdata", "image/png")}
        )
        assert upload.status_code == 201

        download = client.get("/files", params={"id": upload.json()["data"]["id"]})

        assert download.status_code == 200
        assert download.content == b"\x89PNGdata"
        assert download.headers["content-disposition"] == (
            "attachment; filename=\"download.png\"; "
            "filename*=UTF-8''%E8%BA%AB%E4%BB%BD%E8%AF%81.png"
        )


class TestContentDisposition:
    """Test attachment header values for stored filenames"""

    def test_plain_ascii_name_is_unchanged(self):
        assert content_disposition("id-card.png") == 'attachment; filename="id-card.png"'

    def test_accented_name_keeps_ascii_fallback(self):
        assert content_disposition("résumé.pdf") == (
            "attachment; filename=\"resume.pdf\"; filename*=UTF-8''r%C3%A9sum%C3%A9.pdf"
        )

    def test_quotes_and_backslashes_are_escaped(self):
        value = content_disposition('my "scan"\\1.pdf')

        assert value.startswith('attachment; filename="my \\"scan\\"\\\\1.pdf"; ')
        assert value.endswith("filename*=UTF-8''my%20%22scan%22%5C1.pdf")
        value.encode("latin-1")

    def test_missing_name_uses_fallback(self):
        assert content_disposition("") == 'attachment; filename="download"'
