"""Asset resolver facade: walks a record's candidates across S3, inline, local and remote storage."""

from __future__ import annotations

import logging
from typing import List, Optional

from .content_type import CONTEXT_OBJECT, resolve_content_type
from .exceptions import FetchFailure
from .factory import (
    StorageSettings,
    build_local_backend,
    build_remote_backend,
    build_s3_backend,
    load_storage_settings_from_env,
)
from .inline import decode_inline, is_well_formed
from .interfaces import (
    AssetRecord,
    Candidate,
    FailureKind,
    FetchedContent,
    InlineEncodedCandidate,
    LocalPathCandidate,
    ObjectStoreCandidate,
    RemoteUrlCandidate,
)
from .local import LocalStorageBackend
from .locator import locate
from .remote import RemoteUrlBackend
from .s3 import S3StorageBackend

logger = logging.getLogger(__name__)


def _exhausted_kind(failures: List[FailureKind]) -> FailureKind:
    if FailureKind.UPSTREAM_ERROR in failures:
        return FailureKind.UPSTREAM_ERROR
    if FailureKind.TRANSIENT in failures:
        return FailureKind.TRANSIENT
    return FailureKind.NOT_FOUND


class AssetResolver:
    """Resolves records to streamable content without exposing storage details.

    One instance is built at app start and shared by all requests; it holds
    no per-request state.
    """

    def __init__(self, *, s3: S3StorageBackend, local: LocalStorageBackend, remote: RemoteUrlBackend,
                 default_bucket: Optional[str] = None):
        self.s3 = s3
        self.local = local
        self.remote = remote
        self.default_bucket = default_bucket

    @classmethod
    def from_settings(cls, settings: Optional[StorageSettings] = None, *, s3_client=None,
                      http_client=None) -> 'AssetResolver':
        settings = settings or load_storage_settings_from_env()
        return cls(
            s3=build_s3_backend(settings, client=s3_client),
            local=build_local_backend(settings),
            remote=build_remote_backend(settings, client=http_client),
            default_bucket=settings.s3_bucket_name,
        )

    def candidates_for(self, record: AssetRecord) -> List[Candidate]:
        return locate(record, default_bucket=self.default_bucket, uploads_root=self.local.root)

    def fetch_candidate(self, candidate: Candidate) -> FetchedContent:
        if isinstance(candidate, ObjectStoreCandidate):
            return self.s3.get(candidate)
        if isinstance(candidate, InlineEncodedCandidate):
            return decode_inline(candidate)
        if isinstance(candidate, LocalPathCandidate):
            return self.local.open(candidate)
        if isinstance(candidate, RemoteUrlCandidate):
            return self.remote.get(candidate)
        raise TypeError(f"Unsupported candidate: {candidate!r}")

    def probe_candidate(self, candidate: Candidate) -> bool:
        if isinstance(candidate, ObjectStoreCandidate):
            return self.s3.exists(candidate)
        if isinstance(candidate, InlineEncodedCandidate):
            return is_well_formed(candidate.payload)
        if isinstance(candidate, LocalPathCandidate):
            return self.local.exists(candidate)
        if isinstance(candidate, RemoteUrlCandidate):
            return self.remote.exists(candidate)
        raise TypeError(f"Unsupported candidate: {candidate!r}")

    def fetch(self, record: AssetRecord, context: str) -> FetchedContent:
        """Open the first candidate that yields content.

        NOT_CONFIGURED and ACCESS_DENIED stop the walk and are raised as-is.
        Other failures fall through; when nothing succeeds the overall kind is
        UPSTREAM_ERROR if a remote URL errored, else TRANSIENT if any attempt
        hit an I/O problem, else NOT_FOUND.
        """
        failures: List[FailureKind] = []
        for candidate in self.candidates_for(record):
            try:
                content = self.fetch_candidate(candidate)
            except FetchFailure as exc:
                if exc.is_terminal:
                    logger.warning(f"{candidate.kind} candidate failed terminally: {exc.kind.value}")
                    raise
                logger.warning(f"{candidate.kind} candidate failed, trying next: {exc}")
                failures.append(exc.kind)
                continue

            content.filename = record.filename or content.filename
            content.content_type = resolve_content_type(
                content.reported_content_type,
                record.declared_content_type,
                [content.name_hint, record.filename],
                context,
            )
            logger.debug(f"Resolved asset via {candidate.kind} candidate as {content.content_type}")
            return content

        raise FetchFailure(_exhausted_kind(failures), 'No candidate produced content')

    def probe(self, record: AssetRecord) -> bool:
        """Existence check that never reads payload bytes."""
        for candidate in self.candidates_for(record):
            try:
                if self.probe_candidate(candidate):
                    return True
            except FetchFailure as exc:
                if exc.is_terminal:
                    logger.warning(f"{candidate.kind} probe failed terminally: {exc.kind.value}")
                    return False
                logger.warning(f"{candidate.kind} probe failed, trying next: {exc}")
        return False

    def fetch_object(self, key: str, context: str = CONTEXT_OBJECT) -> FetchedContent:
        """Stream an object from the default bucket by key."""
        if not self.default_bucket:
            raise FetchFailure(FailureKind.NOT_CONFIGURED, 'No default bucket configured')
        content = self.s3.get(ObjectStoreCandidate(bucket=self.default_bucket, key=key))
        content.content_type = resolve_content_type(content.reported_content_type, None, [key], context)
        return content

    def close(self) -> None:
        self.remote.close()
