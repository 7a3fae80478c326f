from __future__ import annotations

from typing import Optional, Protocol


class ByteSource(Protocol):
    """Non-blocking, single-byte pull interface used by the ingestion loop."""

    def read_byte(self) -> Optional[int]:
        """Return the next byte, or ``None`` if nothing is available right now."""
        ...

    def close(self) -> None:
        ...
