"""Asset resolution across S3, inline, local and remote storage."""

from .content_type import CONTEXT_IMAGE, CONTEXT_OBJECT, CONTEXT_PDF, resolve_content_type
from .delivery import build_proxy_response, content_disposition
from .exceptions import AddressParseError, FetchFailure
from .interfaces import (
    AssetRecord,
    Candidate,
    FailureKind,
    FetchedContent,
    FileDescriptor,
    InlineEncodedCandidate,
    LocalPathCandidate,
    ObjectAddress,
    ObjectStoreCandidate,
    RemoteUrlCandidate,
)
from .locator import locate, parse_object_store_url
from .service import AssetResolver

__all__ = [
    'AddressParseError',
    'AssetRecord',
    'AssetResolver',
    'Candidate',
    'CONTEXT_IMAGE',
    'CONTEXT_OBJECT',
    'CONTEXT_PDF',
    'FailureKind',
    'FetchedContent',
    'FetchFailure',
    'FileDescriptor',
    'InlineEncodedCandidate',
    'LocalPathCandidate',
    'ObjectAddress',
    'ObjectStoreCandidate',
    'RemoteUrlCandidate',
    'build_proxy_response',
    'content_disposition',
    'locate',
    'parse_object_store_url',
    'resolve_content_type',
]
