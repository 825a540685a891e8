"""Local filesystem backend for legacy upload paths."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from .exceptions import FetchFailure
from .interfaces import FailureKind, FetchedContent, LocalPathCandidate

DEFAULT_CHUNK_SIZE = 64 * 1024


def _iter_file(handle, chunk_size: int) -> Iterator[bytes]:
    while True:
        chunk = handle.read(chunk_size)
        if not chunk:
            break
        yield chunk


class LocalStorageBackend:
    """Read-only access to files under the legacy uploads root."""

    def __init__(self, root: str, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.root = str(Path(root))
        self.chunk_size = chunk_size

    def exists(self, candidate: LocalPathCandidate) -> bool:
        return os.path.isfile(candidate.absolute_path)

    def open(self, candidate: LocalPathCandidate) -> FetchedContent:
        path = candidate.absolute_path
        if not self.exists(candidate):
            raise FetchFailure(FailureKind.NOT_FOUND, f"Local file missing: {path}")
        try:
            handle = open(path, 'rb')
        except OSError as exc:
            raise FetchFailure(FailureKind.TRANSIENT, f"Cannot open local file {path}: {exc}") from exc
        size = os.fstat(handle.fileno()).st_size

        return FetchedContent(
            chunks=_iter_file(handle, self.chunk_size),
            content_length=size,
            filename=os.path.basename(path),
            name_hint=path,
            close=handle.close,
        )
