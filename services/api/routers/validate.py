"""Validate-only upload endpoint: checks the XML payload and stores nothing."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import Response
from loguru import logger

from core.payload import decode_payload
from core.validate.request_validation import validate_upload_request
from services.api.deps import read_body
from services.api.routes import ALL_METHODS, UPLOAD_PATH


router = APIRouter(tags=["validate"])


@router.api_route(UPLOAD_PATH, methods=ALL_METHODS)
async def validate_upload(request: Request) -> Response:
    validate_upload_request(request.method, request.headers.get("content-type"))
    body = await read_body(request)
    payload = decode_payload(body)
    logger.debug(
        "Accepted payload from={user_from!r} to={user_to!r} message_len={length}",
        user_from=payload.user_from,
        user_to=payload.user_to,
        length=len(payload.message),
    )
    return Response(status_code=200)
