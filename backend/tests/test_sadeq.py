"""Tests for Sadeq e-signature endpoints, service and client."""

import base64
from datetime import date
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.sadeq_contract import SadeqContract
from app.routers.sadeq import get_sadeq_client
from app.schemas.sadeq import SadeqRequestCreate
from app.services.integrations.base import IntegrationSyncResult
from app.services.integrations.sadeq import SadeqClient
from app.services.sadeq_service import SadeqError, SadeqService, build_invitation

REQUEST_BODY = {
    "companyCode": "POS-KARAGE",
    "destinationName": "Karage Motors",
    "destinationEmail": "owner@karage.test",
    "destinationPhoneNumber": "966501234567",
    "nationalId": "1010101010",
    "templateId": "tpl-contract",
    "terminals": "2",
}

UPLOAD_FIELDS = {
    "companyCode": "POS-KARAGE",
    "companyName": "Karage Motors",
    "phoneNumber": "966501234567",
    "email": "owner@karage.test",
    "nationalId": "1010101010",
}


def _envelope(status_code=200, success=True):
    body = {"data": {"envelopId": "env-1", "documentId": "doc-1"}, "errorCode": 0}
    return IntegrationSyncResult(
        success=success,
        external_id="env-1" if success else None,
        external_data={"documentId": "doc-1"},
        error=None if success else f"API returned {status_code}",
        details={"status_code": status_code, "response": body},
    )


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def sadeq():
    fake = MagicMock(spec=SadeqClient)
    fake.get_access_token.return_value = "sadeq-token"
    fake.initiate_envelope_by_template.return_value = "doc-1"
    fake.send_invitation.return_value = _envelope()
    fake.initiate_envelope_base64.return_value = _envelope()
    app.dependency_overrides[get_sadeq_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_sadeq_client, None)


class TestBuildInvitation:
    def test_destination(self):
        request = SadeqRequestCreate.model_validate(REQUEST_BODY)
        invitation = build_invitation("doc-1", request, today=date(2024, 1, 1))

        assert invitation["documentId"] == "doc-1"
        destination = invitation["destinations"][0]
        assert destination["destinationName"] == "Karage Motors"
        assert destination["nationalId"] == "1010101010"
        assert destination["availableTo"] == "2024-01-31"
        assert destination["ConsentOnly"] is True
        assert destination["authenticationType"] == 1


class TestSendRequest:
    def test_relays_sadeq_reply_and_stores_contract(self, client, sadeq, db_session):
        response = client.post("/v1/sadeq/requests", json=REQUEST_BODY)
        assert response.status_code == 200
        assert response.json()["data"]["envelopId"] == "env-1"

        sadeq.initiate_envelope_by_template.assert_called_once_with("sadeq-token", "tpl-contract")
        token, invitation = sadeq.send_invitation.call_args.args
        assert token == "sadeq-token"
        assert invitation["documentId"] == "doc-1"

        contract = db_session.query(SadeqContract).one()
        assert contract.company_code == "POS-KARAGE"
        assert contract.company_name == "Karage Motors"
        assert contract.document_id == "doc-1"
        assert contract.envelope_id == "env-1"
        assert contract.sadeq_sent is True
        assert contract.signed is False

    def test_upstream_error_status_relayed(self, client, sadeq, db_session):
        sadeq.send_invitation.return_value = _envelope(status_code=422, success=False)
        response = client.post("/v1/sadeq/requests", json=REQUEST_BODY)

        assert response.status_code == 422
        contract = db_session.query(SadeqContract).one()
        assert contract.sadeq_sent is False
        assert contract.error_message == "API returned 422"

    def test_token_failure(self, client, sadeq, db_session):
        sadeq.get_access_token.return_value = None
        response = client.post("/v1/sadeq/requests", json=REQUEST_BODY)
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to obtain access token."
        assert db_session.query(SadeqContract).count() == 0

    def test_document_failure(self, client, sadeq):
        sadeq.initiate_envelope_by_template.return_value = None
        response = client.post("/v1/sadeq/requests", json=REQUEST_BODY)
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to obtain document ID."
        sadeq.send_invitation.assert_not_called()

    def test_transport_failure_is_502(self, client, sadeq, db_session):
        sadeq.send_invitation.return_value = IntegrationSyncResult(
            success=False, error="Failed to connect to Sadeq"
        )
        response = client.post("/v1/sadeq/requests", json=REQUEST_BODY)
        assert response.status_code == 502
        assert db_session.query(SadeqContract).one().sadeq_sent is False

    def test_missing_fields(self, client, sadeq):
        response = client.post("/v1/sadeq/requests", json={"companyCode": "POS-KARAGE"})
        assert response.status_code == 400
        sadeq.get_access_token.assert_not_called()

    def test_invalid_email(self, client, sadeq):
        response = client.post(
            "/v1/sadeq/requests", json={**REQUEST_BODY, "destinationEmail": "not-an-email"}
        )
        assert response.status_code == 400


class TestUploadPdf:
    def test_upload(self, client, sadeq, db_session):
        response = client.post(
            "/v1/sadeq/upload-pdf",
            data={**UPLOAD_FIELDS, "terminals": "3"},
            files={"file": ("contract.PDF", b"%PDF-1.4 body", "application/pdf")},
        )
        assert response.status_code == 200

        token, file_name, content_b64 = sadeq.initiate_envelope_base64.call_args.args
        assert token == "sadeq-token"
        assert file_name == "contract.PDF"
        assert base64.b64decode(content_b64) == b"%PDF-1.4 body"

        contract = db_session.query(SadeqContract).one()
        assert contract.pdf_file_name == "contract.PDF"
        assert contract.terminals == "3"
        assert contract.document_id == "doc-1"
        assert contract.template_id is None

    def test_missing_file(self, client, sadeq):
        response = client.post("/v1/sadeq/upload-pdf", data=UPLOAD_FIELDS)
        assert response.status_code == 400
        assert response.json()["detail"] == {
            "error": "No PDF file provided. Please upload a file."
        }

    def test_missing_fields(self, client, sadeq):
        response = client.post(
            "/v1/sadeq/upload-pdf",
            data={"companyCode": "POS-KARAGE", "companyName": "Karage Motors"},
            files={"file": ("contract.pdf", b"%PDF", "application/pdf")},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == {
            "error": "Missing required fields: phoneNumber, email, nationalId"
        }

    def test_not_a_pdf(self, client, sadeq):
        response = client.post(
            "/v1/sadeq/upload-pdf",
            data=UPLOAD_FIELDS,
            files={"file": ("contract.docx", b"PK", "application/octet-stream")},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == {
            "error": "Invalid file type. Only PDF files are accepted."
        }
        sadeq.get_access_token.assert_not_called()

    def test_token_failure(self, client, sadeq):
        sadeq.get_access_token.return_value = None
        response = client.post(
            "/v1/sadeq/upload-pdf",
            data=UPLOAD_FIELDS,
            files={"file": ("contract.pdf", b"%PDF", "application/pdf")},
        )
        assert response.status_code == 500
        assert response.json()["detail"] == {
            "error": "Failed to obtain access token from Sadeq API."
        }


class TestContracts:
    def test_lists_newest_first(self, client, sadeq, db_session):
        service = SadeqService(db_session, sadeq)
        request = SadeqRequestCreate.model_validate(REQUEST_BODY)
        service.send_request(request)
        service.send_request(request.model_copy(update={"companyCode": "POS-OTHER"}))

        response = client.get("/v1/sadeq/contracts")
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["count"] == 2
        assert [c["company_code"] for c in data["data"]] == ["POS-OTHER", "POS-KARAGE"]

    def test_empty(self, client, sadeq):
        response = client.get("/v1/sadeq/contracts")
        assert response.json() == {"success": True, "count": 0, "data": []}

    def test_does_not_build_sadeq_client(self, client):
        with patch("app.routers.sadeq.SadeqClient") as client_cls:
            response = client.get("/v1/sadeq/contracts")
        assert response.status_code == 200
        client_cls.assert_not_called()


class TestSadeqServiceErrors:
    def test_error_carries_status(self, db_session, sadeq):
        sadeq.get_access_token.return_value = None
        with pytest.raises(SadeqError) as exc_info:
            SadeqService(db_session, sadeq).upload_pdf(UPLOAD_FIELDS, "a.pdf", b"%PDF")
        assert exc_info.value.status_code == 500


class TestSadeqClient:
    def _patched(self, mock_client_cls):
        mock_client = MagicMock()
        mock_client_cls.return_value.__enter__ = MagicMock(return_value=mock_client)
        mock_client_cls.return_value.__exit__ = MagicMock(return_value=False)
        return mock_client

    def _client(self):
        with patch.multiple(
            "app.services.integrations.sadeq.settings",
            SADQ_URL="https://sadeq.test",
            SADQ_USERNAME="basic-user",
            SADQ_PASSWORD="basic-pass",
            SADQ_ACCOUNT_ID="acc",
            SADQ_ACCOUNT_SECRET="acc-secret",
            SADQ_REQUEST_USERNAME="req-user",
            SADQ_REQUEST_PASSWORD="req-pass",
        ):
            return SadeqClient()

    def test_access_token(self):
        response = MagicMock(is_success=True, status_code=200)
        response.json.return_value = {"access_token": "tok-1"}
        with patch("app.services.integrations.base.httpx.Client") as mock_client_cls:
            mock_client = self._patched(mock_client_cls)
            mock_client.request.return_value = response
            assert self._client().get_access_token() == "tok-1"

        _, url = mock_client.request.call_args.args
        kwargs = mock_client.request.call_args.kwargs
        assert url == "https://sadeq.test/Authentication/Authority/Token"
        assert kwargs["auth"] == ("basic-user", "basic-pass")
        assert kwargs["data"]["grant_type"] == "integration"
        assert kwargs["data"]["username"] == "req-user"

    def test_access_token_requires_credentials(self):
        with patch("app.services.integrations.base.httpx.Client") as mock_client_cls:
            client = SadeqClient(base_url="https://sadeq.test")
            client.request_username = ""
            assert client.get_access_token() is None
            mock_client_cls.assert_not_called()

    def test_envelope_by_template(self):
        response = MagicMock(is_success=True, status_code=200)
        response.json.return_value = {"data": {"documentId": "doc-9"}}
        with patch("app.services.integrations.base.httpx.Client") as mock_client_cls:
            mock_client = self._patched(mock_client_cls)
            mock_client.request.return_value = response
            document_id = self._client().initiate_envelope_by_template("tok", "tpl")

        assert document_id == "doc-9"
        files = mock_client.request.call_args.kwargs["files"]
        assert files["TemplateId"] == (None, "tpl")

    def test_envelope_error_keeps_status(self):
        response = MagicMock(is_success=False, status_code=400, text="bad")
        response.json.return_value = {"message": "bad file"}
        with patch("app.services.integrations.base.httpx.Client") as mock_client_cls:
            mock_client = self._patched(mock_client_cls)
            mock_client.request.return_value = response
            result = self._client().initiate_envelope_base64("tok", "a.pdf", "JVBERg==")

        assert result.success is False
        assert result.details == {"status_code": 400, "response": {"message": "bad file"}}
