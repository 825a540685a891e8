"""Decoding of legacy inline (data-URI / bare base64) image payloads."""

from __future__ import annotations

import base64
import binascii
import re
from typing import Optional, Tuple

from .exceptions import FetchFailure
from .interfaces import FailureKind, FetchedContent, InlineEncodedCandidate

DATA_URI_PREFIX = 'data:'
PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'
DEFAULT_INLINE_MIME = 'image/jpeg'

_BASE64_RE = re.compile(r'^[A-Za-z0-9+/\s]+={0,2}\s*$')


def split_data_uri(payload: str) -> Tuple[Optional[str], str]:
    """Split ``data:<mime>;base64,<body>`` into (mime, body).

    Bare base64 strings come back as (None, payload).
    """
    if not payload.startswith(DATA_URI_PREFIX):
        return None, payload
    header, sep, body = payload.partition(',')
    if not sep:
        raise ValueError('Data URI has no payload separator')
    mime = header[len(DATA_URI_PREFIX):].split(';', 1)[0].strip() or None
    return mime, body


def sniff_mime(data: bytes) -> str:
    if data.startswith(PNG_SIGNATURE):
        return 'image/png'
    return DEFAULT_INLINE_MIME


def _decode_body(body: str) -> bytes:
    return base64.b64decode(''.join(body.split()), validate=True)


def is_well_formed(payload: Optional[str]) -> bool:
    """True when the payload would decode to a non-empty body (no I/O)."""
    if not payload:
        return False
    try:
        _, body = split_data_uri(payload)
        if not _BASE64_RE.match(body):
            return False
        return bool(_decode_body(body))
    except (ValueError, binascii.Error):
        return False


def decode_inline(candidate: InlineEncodedCandidate) -> FetchedContent:
    try:
        mime, body = split_data_uri(candidate.payload)
        data = _decode_body(body)
    except (ValueError, binascii.Error) as exc:
        raise FetchFailure(FailureKind.CORRUPT, f"Inline payload failed to decode: {exc}") from exc
    if not data:
        raise FetchFailure(FailureKind.CORRUPT, 'Inline payload is empty')

    return FetchedContent(
        chunks=iter([data]),
        reported_content_type=mime or candidate.mime or sniff_mime(data),
        content_length=len(data),
    )
