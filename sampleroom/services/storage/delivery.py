"""Turn resolved asset content into a streamed Flask response."""

from __future__ import annotations

import re
from email.utils import encode_rfc2231
from typing import Iterator, Optional

from flask import Response

from .interfaces import FetchedContent

_HEADER_UNSAFE_RE = re.compile(r'["\\\x00-\x1f\x7f]')


def safe_header_filename(name: Optional[str]) -> Optional[str]:
    """Strip characters that would break a quoted header parameter."""
    if not name:
        return None
    cleaned = _HEADER_UNSAFE_RE.sub('', name).strip()
    return cleaned or None


def content_disposition(filename: Optional[str]) -> Optional[str]:
    filename = safe_header_filename(filename)
    if not filename:
        return None
    try:
        filename.encode('ascii')
        return f'inline; filename="{filename}"'
    except UnicodeEncodeError:
        ascii_name = filename.encode('ascii', 'ignore').decode('ascii').strip() or 'file'
        encoded_value = encode_rfc2231(filename, charset='utf-8')
        return f'inline; filename="{ascii_name}"; filename*={encoded_value}'


def _guarded(content: FetchedContent) -> Iterator[bytes]:
    try:
        for chunk in content.chunks:
            if chunk:
                yield chunk
    finally:
        content.release()


def build_proxy_response(content: FetchedContent) -> Response:
    """Stream content back to the client without buffering it.

    The upstream handle is released when the body is exhausted or when the
    WSGI server closes the response (client disconnect).
    """
    response = Response(_guarded(content), status=200, mimetype=None,
                        content_type=content.content_type)
    if content.content_length is not None:
        response.headers['Content-Length'] = str(content.content_length)

    disposition = content_disposition(content.filename)
    if disposition:
        response.headers['Content-Disposition'] = disposition

    response.call_on_close(content.release)
    return response
