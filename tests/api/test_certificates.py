"""
Tests for certificate endpoints
"""
from fastapi.testclient import TestClient

from tests.conftest import PDF_BYTES, PNG_BYTES, TEST_PUBLIC_URL


def create_certificate(client, headers, file=("aws.png", PNG_BYTES, "image/png"), **fields):
    data = {
        "name": "AWS Solutions Architect",
        "issuing_organization": "Amazon Web Services",
        "date_issued": "2024-02-10",
        "credential_id": "ABC-123",
    }
    data.update(fields)
    files = {"certificateImage": file} if file else None
    return client.post("/api/certificates", data=data, files=files, headers=headers)


def test_create_certificate_image(client: TestClient, admin_headers, mock_s3_client):
    response = create_certificate(client, admin_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "AWS Solutions Architect"
    assert data["date_issued"] == "2024-02-10"
    assert data["mime_type"] == "image/png"
    assert data["image_url"].startswith(f"{TEST_PUBLIC_URL}/certificates/")
    assert mock_s3_client.keys() == [data["stored_image_path"]]


def test_create_certificate_pdf(client: TestClient, admin_headers):
    response = create_certificate(
        client, admin_headers, file=("cert.pdf", PDF_BYTES, "application/pdf")
    )

    assert response.status_code == 201
    assert response.json()["mime_type"] == "application/pdf"


def test_certificate_rejects_svg(client: TestClient, admin_headers, mock_s3_client):
    response = create_certificate(
        client, admin_headers, file=("cert.svg", b"<svg/>", "image/svg+xml")
    )

    assert response.status_code == 400
    assert mock_s3_client.calls == []


def test_certificate_file_required(client: TestClient, admin_headers):
    response = create_certificate(client, admin_headers, file=None)

    assert response.status_code == 400
    assert response.json() == {"message": "A certificate file is required."}


def test_certificate_requires_organization(client: TestClient, admin_headers, mock_s3_client):
    response = create_certificate(client, admin_headers, issuing_organization="")

    assert response.status_code == 400
    assert "issuing_organization" in response.json()["message"]
    assert mock_s3_client.calls == []


def test_list_certificates_by_date_issued(client: TestClient, admin_headers):
    create_certificate(client, admin_headers, name="Old", date_issued="2019-01-01")
    create_certificate(client, admin_headers, name="New", date_issued="2024-06-01")

    response = client.get("/api/certificates")

    assert [c["name"] for c in response.json()] == ["New", "Old"]


def test_update_certificate_clears_date(client: TestClient, admin_headers):
    created = create_certificate(client, admin_headers).json()

    response = client.put(
        f"/api/certificates/{created['id']}",
        data={"date_issued": "", "credential_url": "https://verify.example.com/ABC-123"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["date_issued"] is None
    assert data["credential_url"] == "https://verify.example.com/ABC-123"
    assert data["credential_id"] == "ABC-123"
    assert data["image_url"] == created["image_url"]


def test_update_certificate_replaces_file(client: TestClient, admin_headers, mock_s3_client):
    created = create_certificate(client, admin_headers).json()

    response = client.put(
        f"/api/certificates/{created['id']}",
        files={"certificateImage": ("cert.pdf", PDF_BYTES, "application/pdf")},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["mime_type"] == "application/pdf"
    assert mock_s3_client.keys() == [data["stored_image_path"]]


def test_delete_certificate(client: TestClient, admin_headers, mock_s3_client):
    created = create_certificate(client, admin_headers).json()

    response = client.delete(f"/api/certificates/{created['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Certificate removed"}
    assert mock_s3_client.keys() == []
    assert client.get(f"/api/certificates/{created['id']}").status_code == 404
