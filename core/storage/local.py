from __future__ import annotations

from pathlib import Path

from core.exceptions import ObjectNotFoundError, ObjectReadError, StorageError


class LocalStorage:
    """Filesystem backend laid out as ``<root>/<bucket>/<key>``."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, bucket: str, key: str) -> Path:
        base = (self.root / bucket).resolve()
        path = (base / key).resolve()
        if path == base or base not in path.parents:
            raise ObjectNotFoundError(
                f"Key escapes bucket directory: {key}",
                details={"bucket": bucket, "key": key},
            )
        return path

    def put_bytes(self, bucket: str, key: str, data: bytes) -> str:
        path = self._path(bucket, key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(
                f"Failed to write {path}",
                details={"bucket": bucket, "key": key, "reason": str(exc)},
            ) from exc
        return str(path)

    def get_bytes(self, bucket: str, key: str) -> bytes:
        path = self._path(bucket, key)
        if not path.is_file():
            raise ObjectNotFoundError(
                f"No such object: {bucket}/{key}",
                details={"bucket": bucket, "key": key},
            )
        try:
            return path.read_bytes()
        except OSError as exc:
            raise ObjectReadError(
                f"Failed to read {path}",
                details={"bucket": bucket, "key": key, "reason": str(exc)},
            ) from exc


__all__ = ["LocalStorage"]
