"""Upload and read endpoints backed by object storage."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response
from loguru import logger
from starlette.concurrency import run_in_threadpool

from core.exceptions import (
    MissingParameterError,
    ObjectNotFoundError,
    ObjectReadError,
    RetrievalError,
    StorageError,
    UploadError,
)
from core.keys import ObjectKeyGenerator
from core.settings import Settings
from core.storage import ObjectStorage
from core.validate.request_validation import (
    CONTENT_TYPE_APPLICATION_XML,
    validate_read_request,
    validate_upload_request,
)
from services.api.deps import get_app_settings, get_key_generator, get_storage, read_body


# Every method is routed so that the request validator, not the router,
# decides when to answer 405.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

UPLOAD_PATH = "/upload"
READ_PATH = "/read"

router = APIRouter(tags=["objects"])


@router.api_route(UPLOAD_PATH, methods=ALL_METHODS, response_class=PlainTextResponse)
async def upload_object(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    storage: ObjectStorage = Depends(get_storage),
    keys: ObjectKeyGenerator = Depends(get_key_generator),
) -> PlainTextResponse:
    """Store the raw XML body and return the key it was stored under."""
    validate_upload_request(request.method, request.headers.get("content-type"))
    body = await read_body(request)

    key = keys.next()
    bucket = settings.storage.bucket
    try:
        await run_in_threadpool(storage.put_bytes, bucket, key, body)
    except StorageError as exc:
        raise UploadError(details={"bucket": bucket, "key": key, **exc.details}) from exc

    logger.info("Stored object {key} ({size} bytes)", key=key, size=len(body), bucket=bucket)
    return PlainTextResponse(key)


@router.api_route(READ_PATH, methods=ALL_METHODS)
async def read_object(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    storage: ObjectStorage = Depends(get_storage),
) -> Response:
    """Return the stored bytes for ``bucket_id`` as ``application/xml``."""
    validate_read_request(request.method)

    key = request.query_params.get("bucket_id", "")
    if not key:
        raise MissingParameterError("bucket_id is required", details={"parameter": "bucket_id"})

    bucket = settings.storage.bucket
    try:
        data = await run_in_threadpool(storage.get_bytes, bucket, key)
    except ObjectReadError as exc:
        raise RetrievalError("failed to read object", details=exc.details) from exc
    except ObjectNotFoundError as exc:
        # surfaced as a plain 500 like every other storage failure
        logger.info("Object {key} not found in {bucket}", key=key, bucket=bucket)
        raise RetrievalError(details=exc.details) from exc
    except StorageError as exc:
        raise RetrievalError(details=exc.details) from exc

    return Response(content=data, media_type=CONTENT_TYPE_APPLICATION_XML)
