from __future__ import annotations

from typing import Iterable


class ChunkedStream:
    """Binary stream that hands out fixed chunks, then EOF."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self.chunks = list(chunks)
        self.reads = 0

    def read(self, size: int = -1) -> bytes:
        self.reads += 1
        if not self.chunks:
            return b""
        return self.chunks.pop(0)


class StdinReadError(Exception):
    pass


class UnreadableStream:
    """Stands in for stdin on requests without a body; any read is a bug."""

    def __init__(self) -> None:
        self.reads = 0

    def read(self, size: int = -1) -> bytes:
        self.reads += 1
        raise StdinReadError(f"stdin read {self.reads} time(s) on a request without a body")


class BrokenStream:
    def read(self, size: int = -1) -> bytes:
        raise OSError("connection reset")


class ClosedStderr:
    def write(self, text: str) -> int:
        raise OSError("stderr closed")

    def flush(self) -> None:
        raise OSError("stderr closed")
