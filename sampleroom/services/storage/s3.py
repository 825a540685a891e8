"""S3-compatible object-store backend (AWS S3 / MinIO)."""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import FetchFailure
from .interfaces import FailureKind, FetchedContent, ObjectStoreCandidate

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024

NOT_FOUND_CODES = ('404', 'NoSuchKey', 'NotFound', 'NoSuchBucket')
ACCESS_DENIED_CODES = ('403', 'AccessDenied', 'Forbidden', 'AllAccessDisabled')


def _classify_client_error(exc: ClientError) -> FailureKind:
    response = getattr(exc, 'response', {}) or {}
    status_code = (response.get('ResponseMetadata') or {}).get('HTTPStatusCode')
    error_code = str((response.get('Error') or {}).get('Code') or '')
    if status_code == 404 or error_code in NOT_FOUND_CODES:
        return FailureKind.NOT_FOUND
    if status_code == 403 or error_code in ACCESS_DENIED_CODES:
        return FailureKind.ACCESS_DENIED
    return FailureKind.TRANSIENT


def _iter_body(body, chunk_size: int) -> Iterator[bytes]:
    while True:
        chunk = body.read(chunk_size)
        if not chunk:
            break
        yield chunk


class S3StorageBackend:
    """Read access to S3 objects with lazy boto3 initialization.

    Missing credentials are a supported configuration: every call then fails
    with NOT_CONFIGURED before any request is sent.
    """

    def __init__(self, *, default_bucket: Optional[str] = None, region: Optional[str] = None,
                 endpoint_url: Optional[str] = None, access_key_id: Optional[str] = None,
                 secret_access_key: Optional[str] = None, session_token: Optional[str] = None,
                 use_path_style: bool = False, verify_ssl: bool = True,
                 chunk_size: int = DEFAULT_CHUNK_SIZE, client=None):
        self.default_bucket = default_bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.session_token = session_token
        self.use_path_style = use_path_style
        self.verify_ssl = verify_ssl
        self.chunk_size = chunk_size
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)

    def _get_client(self):
        if self._client is not None:
            return self._client

        import boto3
        from botocore.config import Config

        client_kwargs = {
            'service_name': 's3',
            'verify': self.verify_ssl,
            'aws_access_key_id': self.access_key_id,
            'aws_secret_access_key': self.secret_access_key,
        }
        if self.region:
            client_kwargs['region_name'] = self.region
        if self.endpoint_url:
            client_kwargs['endpoint_url'] = self.endpoint_url
        if self.session_token:
            client_kwargs['aws_session_token'] = self.session_token

        addressing_style = 'path' if self.use_path_style else 'auto'
        client_kwargs['config'] = Config(signature_version='s3v4', s3={'addressing_style': addressing_style})

        self._client = boto3.client(**client_kwargs)
        return self._client

    def _require_configured(self, bucket: str, key: str) -> None:
        if not self.is_configured:
            raise FetchFailure(FailureKind.NOT_CONFIGURED, f"S3 access not configured for s3://{bucket}/{key}")

    def get(self, candidate: ObjectStoreCandidate) -> FetchedContent:
        bucket, key = candidate.bucket, candidate.key
        self._require_configured(bucket, key)
        try:
            data = self._get_client().get_object(Bucket=bucket, Key=key)
        except ClientError as exc:
            raise FetchFailure(_classify_client_error(exc), f"get_object s3://{bucket}/{key} failed: {exc}") from exc
        except BotoCoreError as exc:
            raise FetchFailure(FailureKind.TRANSIENT, f"get_object s3://{bucket}/{key} failed: {exc}") from exc

        body = data['Body']
        return FetchedContent(
            chunks=_iter_body(body, self.chunk_size),
            reported_content_type=data.get('ContentType'),
            content_length=data.get('ContentLength'),
            name_hint=key,
            close=body.close,
        )

    def exists(self, candidate: ObjectStoreCandidate) -> bool:
        """Metadata-only existence check.

        Returns False for a missing object; raises FetchFailure for
        NOT_CONFIGURED, ACCESS_DENIED and TRANSIENT so the caller can decide.
        """
        bucket, key = candidate.bucket, candidate.key
        self._require_configured(bucket, key)
        try:
            self._get_client().head_object(Bucket=bucket, Key=key)
            return True
        except ClientError as exc:
            kind = _classify_client_error(exc)
            if kind is FailureKind.NOT_FOUND:
                return False
            raise FetchFailure(kind, f"head_object s3://{bucket}/{key} failed: {exc}") from exc
        except BotoCoreError as exc:
            raise FetchFailure(FailureKind.TRANSIENT, f"head_object s3://{bucket}/{key} failed: {exc}") from exc
