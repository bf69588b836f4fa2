"""Storage abstraction (S3/MinIO or local filesystem fallback)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from core.settings import StorageSettings


class ObjectStorage(Protocol):
    def put_bytes(self, bucket: str, key: str, data: bytes) -> str:  # returns uri
        ...

    def get_bytes(self, bucket: str, key: str) -> bytes:
        ...


def build_storage(settings: "StorageSettings") -> ObjectStorage:
    """Create the storage backend selected by ``settings.backend``.

    Raises:
        ConfigurationError: If the backend is unknown or its client cannot be created.
    """
    if settings.backend == "s3":
        from core.storage.s3 import S3Storage

        return S3Storage(
            endpoint_url=settings.endpoint_url,
            access_key=settings.access_key,
            secret_key=settings.secret_key,
            region=settings.region,
        )
    if settings.backend == "local":
        from pathlib import Path

        from core.storage.local import LocalStorage

        return LocalStorage(Path(settings.local_root))
    raise ConfigurationError(
        f"Unknown storage backend: {settings.backend}",
        details={"backend": settings.backend},
    )


__all__ = ["ObjectStorage", "build_storage"]
