from __future__ import annotations

from fastapi import Request
from starlette.requests import ClientDisconnect

from core.exceptions import BodyReadError
from core.keys import ObjectKeyGenerator
from core.settings import Settings
from core.storage import ObjectStorage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> ObjectStorage:
    return request.app.state.storage


def get_key_generator(request: Request) -> ObjectKeyGenerator:
    return request.app.state.key_generator


async def read_body(request: Request) -> bytes:
    """Drain the whole request body into memory."""
    try:
        return await request.body()
    except ClientDisconnect as exc:
        raise BodyReadError(details={"path": request.url.path}) from exc
