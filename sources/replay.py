from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class ReplayByteSource:
    """Replays a captured byte stream through the same pull interface as the serial port."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._position = 0

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ReplayByteSource":
        return cls(Path(path).read_bytes())

    @property
    def exhausted(self) -> bool:
        return self._position >= len(self._data)

    def read_byte(self) -> Optional[int]:
        if self.exhausted:
            return None
        byte = self._data[self._position]
        self._position += 1
        return byte

    def close(self) -> None:
        self._position = len(self._data)
