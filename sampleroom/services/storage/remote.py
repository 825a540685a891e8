"""Outbound HTTP backend for legacy remote asset URLs."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .exceptions import FetchFailure
from .interfaces import FailureKind, FetchedContent, RemoteUrlCandidate

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_CHUNK_SIZE = 64 * 1024


class RemoteUrlBackend:
    """Streams third-party URLs through one shared httpx client."""

    def __init__(self, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
                 chunk_size: int = DEFAULT_CHUNK_SIZE, client: Optional[httpx.Client] = None):
        self.timeout_seconds = timeout_seconds
        self.chunk_size = chunk_size
        self.client = client or httpx.Client(
            timeout=httpx.Timeout(timeout_seconds),
            follow_redirects=True,
            headers={"User-Agent": "SampleRoom/1.0 asset-proxy"},
        )

    def get(self, candidate: RemoteUrlCandidate) -> FetchedContent:
        request = self.client.build_request('GET', candidate.url)
        try:
            response = self.client.send(request, stream=True)
        except httpx.TimeoutException as exc:
            raise FetchFailure(FailureKind.TRANSIENT, f"Remote fetch timed out after {self.timeout_seconds}s") from exc
        except httpx.HTTPError as exc:
            raise FetchFailure(FailureKind.TRANSIENT, f"Remote fetch failed: {exc}") from exc

        if response.status_code >= 400:
            response.close()
            raise FetchFailure(FailureKind.UPSTREAM_ERROR, f"Remote URL returned status {response.status_code}")

        # iter_bytes decodes content-encoding, so the upstream length only holds for identity bodies
        length = None
        if not response.headers.get('content-encoding'):
            length = response.headers.get('content-length')
        return FetchedContent(
            chunks=response.iter_bytes(self.chunk_size),
            reported_content_type=response.headers.get('content-type'),
            content_length=int(length) if length and length.isdigit() else None,
            name_hint=response.url.path,
            close=response.close,
        )

    def exists(self, candidate: RemoteUrlCandidate) -> bool:
        try:
            response = self.client.head(candidate.url)
        except httpx.HTTPError as exc:
            logger.warning(f"Remote HEAD failed: {exc}")
            return False
        return response.status_code < 400

    def close(self) -> None:
        self.client.close()
