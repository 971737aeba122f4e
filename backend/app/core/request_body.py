"""JSON body parsing shared by all handlers."""

from typing import Any, TypeVar

from fastapi import HTTPException, Request
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_json_object(request: Request) -> dict[str, Any]:
    """Return the request body as a JSON object or raise a 400."""
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON payload") from None
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="JSON body must be an object")
    return payload


def validate_payload(payload: dict[str, Any], model: type[ModelT]) -> ModelT:
    """Validate *payload* against *model*, turning errors into a 400.

    The detail lists every offending field so callers can fix the request in
    one round trip.
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise HTTPException(
            status_code=400,
            detail=f"Missing or invalid fields: {', '.join(fields)}",
        ) from None


async def parse_json_body(request: Request, model: type[ModelT]) -> ModelT:
    payload = await read_json_object(request)
    return validate_payload(payload, model)
