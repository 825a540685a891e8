"""Candidate building and object-store URL parsing for asset records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional
from urllib.parse import unquote, urlparse

from .exceptions import AddressParseError
from .interfaces import (
    AssetRecord,
    Candidate,
    InlineEncodedCandidate,
    LocalPathCandidate,
    ObjectAddress,
    ObjectStoreCandidate,
    RemoteUrlCandidate,
)

logger = logging.getLogger(__name__)

HTTP_PREFIXES = ('http://', 'https://')
GLOBAL_DOMAIN_LABELS = frozenset({'amazonaws'})


def _normalize_key(key: str) -> str:
    key = (key or '').replace('\\', '/').strip()
    while '//' in key:
        key = key.replace('//', '/')
    return key.lstrip('/')


def is_http_url(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower().startswith(HTTP_PREFIXES)


def _region_label(label: str) -> Optional[str]:
    # Global endpoints (s3.amazonaws.com) carry no region label
    if label in GLOBAL_DOMAIN_LABELS:
        return None
    return label


def parse_object_store_url(url: Optional[str]) -> ObjectAddress:
    """Parse a stored S3 URL into bucket, key and region.

    Supports virtual-hosted style (``<bucket>.s3.<region>.<domain>/<key>``) and
    path style (``s3.<region>.<domain>/<bucket>/<key>``). Keys are
    percent-decoded exactly once and may contain ``/``.

    Raises AddressParseError for anything else.
    """
    if not url:
        raise AddressParseError('Empty URL')
    try:
        parsed = urlparse(url.strip())
        hostname = parsed.hostname or ''
    except ValueError as exc:
        raise AddressParseError(f"Malformed URL: {url}") from exc

    if parsed.scheme.lower() not in ('http', 'https') or not hostname:
        raise AddressParseError(f"Not an http(s) URL: {url}")

    labels = hostname.split('.')
    raw_path = parsed.path.lstrip('/')

    if len(labels) >= 4 and labels[1] == 's3':
        bucket, region = labels[0], _region_label(labels[2])
        key = unquote(raw_path)
    elif len(labels) >= 3 and labels[0] == 's3':
        region = _region_label(labels[1])
        if '/' not in raw_path:
            raise AddressParseError(f"Path-style URL missing key: {url}")
        raw_bucket, raw_key = raw_path.split('/', 1)
        bucket = unquote(raw_bucket)
        key = unquote(raw_key)
    else:
        raise AddressParseError(f"Unrecognised object-store host: {hostname}")

    if not bucket or not key:
        raise AddressParseError(f"Object-store URL missing bucket or key: {url}")
    return ObjectAddress(bucket=bucket, key=key, region=region or None)


def local_path_from_key(local_root: str, key: str) -> str:
    """Resolve a storage key under local_root and prevent path traversal."""
    safe_key = _normalize_key(key)
    if not safe_key:
        raise ValueError('Empty local path hint')
    root = Path(local_root).resolve()
    candidate = (root / Path(*safe_key.split('/'))).resolve()
    try:
        candidate.relative_to(root)
    except ValueError as exc:
        raise ValueError(f"Local path hint resolves outside root: {key}") from exc
    return str(candidate)


def _object_store_candidate(record: AssetRecord, default_bucket: Optional[str]) -> Optional[ObjectStoreCandidate]:
    if record.object_key:
        bucket = record.bucket_name or default_bucket
        if bucket:
            return ObjectStoreCandidate(bucket=bucket, key=record.object_key)

    descriptor = record.file_descriptor
    if descriptor and descriptor.key:
        bucket = descriptor.bucket or default_bucket
        if bucket:
            return ObjectStoreCandidate(bucket=bucket, key=descriptor.key)

    for extra in record.extra_files:
        if extra.key and (extra.bucket or default_bucket):
            return ObjectStoreCandidate(bucket=extra.bucket or default_bucket, key=extra.key)

    if descriptor and descriptor.url:
        try:
            address = parse_object_store_url(descriptor.url)
        except AddressParseError:
            return None
        return ObjectStoreCandidate(bucket=address.bucket, key=address.key)
    return None


def _remote_url(record: AssetRecord) -> Optional[str]:
    if record.remote_url:
        return record.remote_url.strip() if is_http_url(record.remote_url) else None

    descriptor = record.file_descriptor
    if descriptor and is_http_url(descriptor.url):
        try:
            parse_object_store_url(descriptor.url)
        except AddressParseError:
            return descriptor.url.strip()
    return None


def locate(record: AssetRecord, *, default_bucket: Optional[str] = None,
           uploads_root: Optional[str] = None) -> List[Candidate]:
    """Return the record's candidate locations in priority order.

    Order is fixed: object store, inline payload, local file, remote URL.
    Never raises; a record with nothing resolvable yields an empty list.
    """
    candidates: List[Candidate] = []

    object_candidate = _object_store_candidate(record, default_bucket)
    if object_candidate:
        candidates.append(object_candidate)

    if record.inline_payload:
        candidates.append(InlineEncodedCandidate(payload=record.inline_payload))

    if record.local_path_hint and uploads_root:
        try:
            path = local_path_from_key(uploads_root, record.local_path_hint)
        except ValueError as exc:
            logger.warning(f"Ignoring local path hint: {exc}")
        else:
            candidates.append(LocalPathCandidate(absolute_path=path))

    url = _remote_url(record)
    if url:
        candidates.append(RemoteUrlCandidate(url=url))

    return candidates
