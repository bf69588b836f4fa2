"""Object key generation for uploaded payloads."""

from __future__ import annotations

import threading


class ObjectKeyGenerator:
    """Mint process-unique object keys of the form ``<prefix>/<n>``.

    The counter lives in memory only. Keys restart at 1 with every new
    generator, so a restarted process can hand out keys that already exist
    in the bucket.
    """

    def __init__(self, prefix: str = "xmlobject", start: int = 0) -> None:
        self.prefix = prefix.strip("/")
        self._count = start
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            self._count += 1
            count = self._count
        return f"{self.prefix}/{count}"

    @property
    def issued(self) -> int:
        """Number of the most recently minted key (0 if none yet)."""
        with self._lock:
            return self._count


__all__ = ["ObjectKeyGenerator"]
