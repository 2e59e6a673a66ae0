"""HTTP tests for the upload service."""
import pytest
from fastapi.testclient import TestClient


def _upload(client, name, content, content_type="application/pdf"):
    return client.post("/api/upload", files={"pdfFile": (name, content, content_type)})


def test_health(api_client):
    assert api_client.get("/health").json() == {"status": "ok"}


def test_upload_report(api_client, upload_dir):
    res = _upload(api_client, "report.pdf", b"0123456789")

    assert res.status_code == 200
    assert res.json() == {
        "message": "PDF uploaded successfully.",
        "fileName": "report.pdf",
        "downloadUrl": "/uploads/report.pdf",
    }
    assert (upload_dir / "report.pdf").read_bytes() == b"0123456789"


def test_upload_sanitises_filename(api_client, upload_dir):
    res = _upload(api_client, "my:file?.PDF", b"%PDF-1.4")

    assert res.status_code == 200
    assert res.json()["fileName"] == "my_file_.PDF"
    assert (upload_dir / "my_file_.PDF").exists()


def test_empty_upload_rejected(api_client, upload_dir):
    res = _upload(api_client, "report.pdf", b"")

    assert res.status_code == 400
    assert res.json() == {"message": "Please select a PDF file."}
    assert list(upload_dir.iterdir()) == []


def test_missing_file_field_rejected(api_client, upload_dir):
    res = api_client.post("/api/upload", files={"otherField": ("a.pdf", b"abc", "application/pdf")})

    assert res.status_code == 400
    assert res.json() == {"message": "Please select a PDF file."}
    assert list(upload_dir.iterdir()) == []


def test_plain_form_field_treated_as_missing_file(api_client, upload_dir):
    res = api_client.post("/api/upload", data={"pdfFile": "abc"})

    assert res.status_code == 400
    assert res.json() == {"message": "Please select a PDF file."}
    assert list(upload_dir.iterdir()) == []


def test_non_pdf_rejected(api_client, upload_dir):
    res = _upload(api_client, "notes.txt", b"hello", "text/plain")

    assert res.status_code == 400
    assert res.json() == {"message": "Only PDF files may be uploaded."}
    assert list(upload_dir.iterdir()) == []


def test_second_upload_replaces_first(api_client, upload_dir):
    _upload(api_client, "a.pdf", b"first version")
    res = _upload(api_client, "a.pdf", b"v2")

    assert res.status_code == 200
    assert [p.name for p in upload_dir.iterdir()] == ["a.pdf"]
    assert (upload_dir / "a.pdf").read_bytes() == b"v2"


def test_content_type_is_not_checked(api_client, upload_dir):
    res = _upload(api_client, "scan.pdf", b"not really a pdf", "application/octet-stream")
    assert res.status_code == 200


def test_download_url_serves_stored_bytes(api_client):
    content = b"%PDF-1.7\n" + bytes(range(200))
    url = _upload(api_client, "doc.pdf", content).json()["downloadUrl"]

    res = api_client.get(url)
    assert res.status_code == 200
    assert res.content == content


def test_missing_upload_falls_through_to_index_page(api_client):
    res = api_client.get("/uploads/missing.pdf")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/html")
    assert "Upload and Encrypt a PDF" in res.text


def test_download_url_round_trips_special_characters(api_client, upload_dir):
    body = _upload(api_client, "a#1.pdf", b"hash in name").json()

    assert body["fileName"] == "a#1.pdf"
    assert body["downloadUrl"] == "/uploads/a%231.pdf"
    res = api_client.get(body["downloadUrl"])
    assert res.status_code == 200
    assert res.content == b"hash in name"


def test_index_page(api_client):
    res = api_client.get("/")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/html")
    assert 'id="pdfInput"' in res.text
    assert "/api/upload" in res.text


def test_unmatched_routes_return_index_page(api_client):
    res = api_client.get("/some/client/route")
    assert res.status_code == 200
    assert "Upload and Encrypt a PDF" in res.text


@pytest.mark.parametrize("method", ["POST", "PUT", "DELETE", "PATCH"])
def test_unmatched_routes_any_method_return_index_page(api_client, method):
    res = api_client.request(method, "/some/client/route")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/html")


def test_write_failure_returns_server_error(api_client, monkeypatch):
    def boom(path, content):
        raise OSError("disk full")

    monkeypatch.setattr("securepdf.core.handler.write_bytes", boom)
    res = _upload(api_client, "a.pdf", b"x")

    assert res.status_code == 500
    assert "disk full" in res.json()["detail"]


def test_upload_serving_can_be_disabled(tmp_path, monkeypatch):
    from securepdf.service.app import create_app

    monkeypatch.delenv("SECUREPDF_UPLOAD_DIR", raising=False)
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("storage:\n  upload_dir: store\n  serve_uploads: false\n", encoding="utf-8")
    client = TestClient(create_app(str(cfg)))

    client.post("/api/upload", files={"pdfFile": ("a.pdf", b"abc", "application/pdf")})
    res = client.get("/uploads/a.pdf")
    # falls through to the page route
    assert res.headers["content-type"].startswith("text/html")
    assert (tmp_path / "store" / "a.pdf").exists()


def test_default_app_stores_outside_the_repo():
    import os
    from pathlib import Path

    from securepdf.service.app import app

    assert app.state.handler.upload_dir == Path(os.environ["SECUREPDF_UPLOAD_DIR"])
