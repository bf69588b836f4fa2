"""
Request validation for the upload and read endpoints.

Pure functions of the HTTP method and the declared content type. Each one
returns ``None`` when the request is acceptable and raises a
:class:`~core.exceptions.RequestValidationError` subclass otherwise.
"""

from __future__ import annotations

from core.exceptions import MethodNotAllowedError, UnsupportedContentTypeError

CONTENT_TYPE_TEXT_XML = "text/xml"
CONTENT_TYPE_APPLICATION_XML = "application/xml"

ALLOWED_UPLOAD_CONTENT_TYPES = frozenset((CONTENT_TYPE_TEXT_XML, CONTENT_TYPE_APPLICATION_XML))


def validate_upload_request(method: str, content_type: str | None) -> None:
    """Accept only ``POST`` with an XML content type.

    The header is compared verbatim, so parameters such as ``; charset=utf-8``
    cause a rejection.
    """
    if method.upper() != "POST":
        raise MethodNotAllowedError(details={"method": method, "allowed": "POST"})
    if content_type not in ALLOWED_UPLOAD_CONTENT_TYPES:
        raise UnsupportedContentTypeError(details={"content_type": content_type or ""})


def validate_read_request(method: str) -> None:
    if method.upper() != "GET":
        raise MethodNotAllowedError(details={"method": method, "allowed": "GET"})


__all__ = [
    "ALLOWED_UPLOAD_CONTENT_TYPES",
    "CONTENT_TYPE_APPLICATION_XML",
    "CONTENT_TYPE_TEXT_XML",
    "validate_read_request",
    "validate_upload_request",
]
