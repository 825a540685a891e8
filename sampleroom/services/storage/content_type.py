"""Content-Type selection for proxied assets."""

from __future__ import annotations

import posixpath
from typing import Iterable, Optional

CONTEXT_IMAGE = 'image'
CONTEXT_PDF = 'pdf'
CONTEXT_OBJECT = 'object'

EXTENSION_TYPES = {
    '.png': 'image/png',
    '.webp': 'image/webp',
}

CONTEXT_DEFAULTS = {
    CONTEXT_IMAGE: 'image/jpeg',
    CONTEXT_PDF: 'application/pdf',
    CONTEXT_OBJECT: 'application/octet-stream',
}


def type_from_extension(name: Optional[str]) -> Optional[str]:
    if not name:
        return None
    _, ext = posixpath.splitext(name.replace('\\', '/').lower())
    return EXTENSION_TYPES.get(ext)


def resolve_content_type(reported: Optional[str], declared: Optional[str],
                         name_hints: Iterable[Optional[str]], context: str) -> str:
    """Pick the Content-Type to report.

    Order: backend-reported type, type declared on the record's file
    descriptor, known file extension, then the default for the context.
    """
    if reported and reported.strip():
        return reported.strip()
    if declared and declared.strip():
        return declared.strip()
    for name in name_hints:
        guessed = type_from_extension(name)
        if guessed:
            return guessed
    return CONTEXT_DEFAULTS.get(context, CONTEXT_DEFAULTS[CONTEXT_OBJECT])
