"""Sadeq e-signature flows: template envelopes, PDF uploads and stored contracts."""

import base64
import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.sadeq_contract import SadeqContract
from app.repositories.sadeq_contract_repository import SadeqContractRepository
from app.schemas.sadeq import SadeqRequestCreate
from app.services.integrations.base import IntegrationSyncResult
from app.services.integrations.sadeq import SadeqClient

logger = logging.getLogger(__name__)


class SadeqError(Exception):
    """A Sadeq step failed before the upstream reply could be relayed."""

    def __init__(self, status_code: int, detail: Any):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


@dataclass
class SadeqReply:
    """Upstream status and body, relayed to the caller as-is."""

    status_code: int
    body: Any
    contract: SadeqContract


def build_invitation(
    document_id: str, request: SadeqRequestCreate, today: date | None = None
) -> dict[str, Any]:
    available_to = (today or date.today()) + timedelta(days=settings.SADQ_INVITATION_DAYS)
    return {
        "documentId": document_id,
        "destinations": [
            {
                "destinationName": request.destinationName,
                "destinationEmail": request.destinationEmail,
                "destinationPhoneNumber": request.destinationPhoneNumber,
                "nationalId": request.nationalId,
                "signeOrder": 0,
                "ConsentOnly": True,
                "signatories": [],
                "availableTo": available_to.strftime("%Y-%m-%d"),
                "allowUserToSignAnyWhere": False,
                "authenticationType": 1,
                "invitationLanguage": 1,
                "redirectUrl": "",
                "allowUserToAddDestination": False,
            }
        ],
    }


def _relay(result: IntegrationSyncResult) -> tuple[int, Any]:
    status_code = result.details.get("status_code")
    if status_code is None:
        raise SadeqError(502, result.error or "Failed to connect to Sadeq")
    return int(status_code), result.details.get("response")


class SadeqService:
    def __init__(self, db: Session, client: SadeqClient | None = None):
        self.db = db
        self.client = client or SadeqClient()
        self.repo = SadeqContractRepository(db)

    def send_request(self, request: SadeqRequestCreate, today: date | None = None) -> SadeqReply:
        """Initiate a template envelope, invite the signer and store the contract."""
        token = self.client.get_access_token()
        if token is None:
            raise SadeqError(500, "Failed to obtain access token.")
        document_id = self.client.initiate_envelope_by_template(token, request.templateId)
        if document_id is None:
            raise SadeqError(500, "Failed to obtain document ID.")

        result = self.client.send_invitation(token, build_invitation(document_id, request, today))
        contract = self.repo.create(
            company_code=request.companyCode,
            company_name=request.destinationName,
            phone_number=request.destinationPhoneNumber,
            terminals=request.terminals or None,
            national_id=request.nationalId,
            email=request.destinationEmail,
            template_id=request.templateId,
            document_id=document_id,
            envelope_id=result.external_id,
            sadeq_sent=result.success,
            signed=False,
            error_message=result.error,
        )
        logger.info(
            "Sadeq contract %s saved for %s (sent=%s)",
            contract.id,
            request.companyCode,
            result.success,
        )
        status_code, body = _relay(result)
        return SadeqReply(status_code=status_code, body=body, contract=contract)

    def upload_pdf(self, fields: dict[str, str], file_name: str, content: bytes) -> SadeqReply:
        """Initiate an envelope from an uploaded PDF and store the contract.

        *fields* holds ``companyCode``, ``companyName``, ``phoneNumber``,
        ``email``, ``nationalId`` and optionally ``terminals``.
        """
        content_b64 = base64.b64encode(content).decode("ascii")
        logger.info("PDF %s encoded for Sadeq (%s bytes)", file_name, len(content))

        token = self.client.get_access_token()
        if token is None:
            raise SadeqError(500, {"error": "Failed to obtain access token from Sadeq API."})

        result = self.client.initiate_envelope_base64(token, file_name, content_b64)
        contract = self.repo.create(
            company_code=fields["companyCode"],
            company_name=fields["companyName"],
            phone_number=fields["phoneNumber"],
            terminals=fields.get("terminals") or None,
            national_id=fields["nationalId"],
            email=fields["email"],
            pdf_file_name=file_name,
            document_id=(result.external_data or {}).get("documentId"),
            envelope_id=result.external_id,
            sadeq_sent=result.success,
            signed=False,
            error_message=result.error,
        )
        logger.info(
            "Sadeq contract %s saved for %s with PDF %s",
            contract.id,
            fields["companyName"],
            file_name,
        )
        status_code, body = _relay(result)
        return SadeqReply(status_code=status_code, body=body, contract=contract)
