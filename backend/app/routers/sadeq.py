"""Sadeq e-signature endpoints."""

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.request_body import parse_json_body
from app.repositories.sadeq_contract_repository import SadeqContractRepository
from app.schemas.sadeq import SadeqContractListResponse, SadeqContractResponse, SadeqRequestCreate
from app.services.integrations.sadeq import SadeqClient
from app.services.sadeq_service import SadeqError, SadeqService

router = APIRouter()

REQUIRED_UPLOAD_FIELDS = ("companyCode", "companyName", "phoneNumber", "email", "nationalId")


def get_sadeq_client() -> SadeqClient:
    return SadeqClient()


@router.post(
    "/requests",
    summary="Send signature request",
    responses={
        400: {"description": "Missing required fields"},
        500: {"description": "Sadeq token or envelope could not be obtained"},
        502: {"description": "Sadeq could not be reached"},
    },
)
async def send_signature_request(
    request: Request,
    db: Session = Depends(get_db),
    client: SadeqClient = Depends(get_sadeq_client),
) -> JSONResponse:
    """Create a template envelope, invite the signer and relay Sadeq's reply."""
    data = await parse_json_body(request, SadeqRequestCreate)
    try:
        reply = SadeqService(db, client).send_request(data)
    except SadeqError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail) from None
    return JSONResponse(content=reply.body, status_code=reply.status_code)


@router.post(
    "/upload-pdf",
    summary="Upload contract PDF",
    responses={
        400: {"description": "Missing fields, missing file or not a PDF"},
        500: {"description": "Sadeq token could not be obtained"},
        502: {"description": "Sadeq could not be reached"},
    },
)
async def upload_pdf(
    companyCode: str | None = Form(default=None),
    companyName: str | None = Form(default=None),
    phoneNumber: str | None = Form(default=None),
    email: str | None = Form(default=None),
    nationalId: str | None = Form(default=None),
    terminals: str | None = Form(default=None),
    file: UploadFile | None = File(default=None),
    db: Session = Depends(get_db),
    client: SadeqClient = Depends(get_sadeq_client),
) -> JSONResponse:
    if file is None:
        raise HTTPException(
            status_code=400, detail={"error": "No PDF file provided. Please upload a file."}
        )

    fields = {
        "companyCode": companyCode,
        "companyName": companyName,
        "phoneNumber": phoneNumber,
        "email": email,
        "nationalId": nationalId,
    }
    missing = [name for name in REQUIRED_UPLOAD_FIELDS if not fields[name]]
    if missing:
        raise HTTPException(
            status_code=400, detail={"error": f"Missing required fields: {', '.join(missing)}"}
        )

    file_name = file.filename or ""
    if not file_name.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=400, detail={"error": "Invalid file type. Only PDF files are accepted."}
        )

    content = await file.read()
    try:
        reply = SadeqService(db, client).upload_pdf(
            {**fields, "terminals": terminals or ""},  # type: ignore[dict-item]
            file_name,
            content,
        )
    except SadeqError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail) from None
    return JSONResponse(content=reply.body, status_code=reply.status_code)


@router.get(
    "/contracts",
    response_model=SadeqContractListResponse,
    summary="List contracts",
)
async def list_contracts(db: Session = Depends(get_db)) -> SadeqContractListResponse:
    """All stored contracts, newest first."""
    contracts = SadeqContractRepository(db).get_all()
    return SadeqContractListResponse(
        success=True,
        count=len(contracts),
        data=[SadeqContractResponse.model_validate(c) for c in contracts],
    )
