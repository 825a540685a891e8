"""Storage interfaces and shared dataclasses for asset resolution."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Union


@dataclass
class FileDescriptor:
    """Embedded file object stored on a record (name plus optional S3 address)."""

    name: Optional[str] = None
    url: Optional[str] = None
    key: Optional[str] = None
    bucket: Optional[str] = None
    content_type: Optional[str] = None
    size: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional['FileDescriptor']:
        if not data or not isinstance(data, dict):
            return None
        size = data.get('size')
        try:
            size = int(size) if size is not None else None
        except (TypeError, ValueError):
            size = None
        return cls(
            name=data.get('name') or None,
            url=data.get('url') or None,
            key=data.get('key') or None,
            bucket=data.get('bucket') or None,
            # Stored documents use 'type' for the declared mime
            content_type=data.get('content_type') or data.get('type') or None,
            size=size,
        )


@dataclass
class AssetRecord:
    """Read-only view of a catalog record's storage fields."""

    object_key: Optional[str] = None
    bucket_name: Optional[str] = None
    region: Optional[str] = None
    file_descriptor: Optional[FileDescriptor] = None
    extra_files: List[FileDescriptor] = field(default_factory=list)
    inline_payload: Optional[str] = None
    local_path_hint: Optional[str] = None
    remote_url: Optional[str] = None
    display_name: Optional[str] = None

    @property
    def declared_content_type(self) -> Optional[str]:
        if self.file_descriptor:
            return self.file_descriptor.content_type
        return None

    @property
    def filename(self) -> Optional[str]:
        if self.file_descriptor and self.file_descriptor.name:
            return self.file_descriptor.name
        return self.display_name


@dataclass
class ObjectAddress:
    """Bucket/key/region triple parsed from an object-store URL."""

    bucket: str
    key: str
    region: Optional[str] = None


@dataclass(frozen=True)
class ObjectStoreCandidate:
    bucket: str
    key: str
    kind = 'object_store'


@dataclass(frozen=True)
class InlineEncodedCandidate:
    payload: str
    mime: Optional[str] = None
    kind = 'inline'


@dataclass(frozen=True)
class LocalPathCandidate:
    absolute_path: str
    kind = 'local'


@dataclass(frozen=True)
class RemoteUrlCandidate:
    url: str
    kind = 'remote'


Candidate = Union[ObjectStoreCandidate, InlineEncodedCandidate, LocalPathCandidate, RemoteUrlCandidate]


class FailureKind(enum.Enum):
    NOT_FOUND = 'not_found'
    NOT_CONFIGURED = 'not_configured'
    ACCESS_DENIED = 'access_denied'
    CORRUPT = 'corrupt'
    UPSTREAM_ERROR = 'upstream_error'
    TRANSIENT = 'transient'

    @property
    def is_terminal(self) -> bool:
        """Terminal failures stop the candidate walk instead of falling through."""
        return self in (FailureKind.NOT_CONFIGURED, FailureKind.ACCESS_DENIED)

    @property
    def http_status(self) -> int:
        return _FAILURE_STATUS[self]


_FAILURE_STATUS = {
    FailureKind.NOT_FOUND: 404,
    FailureKind.NOT_CONFIGURED: 403,
    FailureKind.ACCESS_DENIED: 403,
    FailureKind.CORRUPT: 404,
    FailureKind.UPSTREAM_ERROR: 502,
    FailureKind.TRANSIENT: 500,
}


@dataclass
class FetchedContent:
    """An opened asset: a chunk iterator plus whatever metadata the backend reported."""

    chunks: Iterator[bytes]
    reported_content_type: Optional[str] = None
    content_length: Optional[int] = None
    filename: Optional[str] = None
    name_hint: Optional[str] = None  # key or path used for extension sniffing
    close: Optional[Callable[[], None]] = None
    content_type: Optional[str] = None  # final type, filled in by the resolver

    def release(self) -> None:
        if self.close is not None:
            closer, self.close = self.close, None
            closer()
