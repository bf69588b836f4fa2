"""Custom exception hierarchy for XMLVault."""

from __future__ import annotations


class XmlVaultError(Exception):
    """Base exception for all XMLVault-specific errors.

    ``message`` is the fixed text returned to the caller; ``details`` only
    ever reaches the logs.
    """

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(XmlVaultError):
    """Raised when configuration is invalid or missing."""
    pass


class RequestValidationError(XmlVaultError):
    """Base class for rejected inbound requests."""
    pass


class MethodNotAllowedError(RequestValidationError):
    """Raised when an endpoint is called with the wrong HTTP method."""

    def __init__(self, message: str = "method not allowed", details: dict[str, str] | None = None) -> None:
        super().__init__(message, details)


class UnsupportedContentTypeError(RequestValidationError):
    """Raised when an upload declares a content type other than XML."""

    def __init__(self, message: str = "unsupported content type", details: dict[str, str] | None = None) -> None:
        super().__init__(message, details)


class MissingParameterError(RequestValidationError):
    """Raised when a required query parameter is absent or empty."""
    pass


class PayloadDecodeError(XmlVaultError):
    """Raised when an upload body is not a well-formed XML document."""

    def __init__(self, message: str = "invalid xml payload", details: dict[str, str] | None = None) -> None:
        super().__init__(message, details)


class BodyReadError(XmlVaultError):
    """Raised when the request body cannot be drained."""

    def __init__(self, message: str = "failed to read content from body", details: dict[str, str] | None = None) -> None:
        super().__init__(message, details)


class StorageError(XmlVaultError):
    """Raised when storage operations fail."""
    pass


class ObjectNotFoundError(StorageError):
    """Raised when the requested key does not exist in the bucket."""
    pass


class ObjectReadError(StorageError):
    """Raised when an object was found but its body could not be read."""
    pass


class UploadError(StorageError):
    """Raised by the upload path when the object could not be stored."""

    def __init__(self, message: str = "failed to upload object", details: dict[str, str] | None = None) -> None:
        super().__init__(message, details)


class RetrievalError(StorageError):
    """Raised by the read path when the object could not be fetched."""

    def __init__(self, message: str = "failed to get object", details: dict[str, str] | None = None) -> None:
        super().__init__(message, details)
