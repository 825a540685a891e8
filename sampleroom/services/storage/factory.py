"""Factory for configuring asset storage backends from environment variables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .local import LocalStorageBackend
from .remote import RemoteUrlBackend
from .s3 import S3StorageBackend


@dataclass
class StorageSettings:
    local_root: str
    remote_timeout_seconds: float = 10.0
    chunk_size: int = 64 * 1024
    s3_bucket_name: Optional[str] = None
    s3_region: Optional[str] = None
    s3_endpoint_url: Optional[str] = None
    s3_access_key_id: Optional[str] = None
    s3_secret_access_key: Optional[str] = None
    s3_session_token: Optional[str] = None
    s3_use_path_style: bool = False
    s3_verify_ssl: bool = True


def load_storage_settings_from_env() -> StorageSettings:
    # Values come from app_config so env parsing lives in one place.
    from sampleroom.config import app_config

    return StorageSettings(
        local_root=app_config.UPLOAD_FOLDER,
        remote_timeout_seconds=float(app_config.REMOTE_FETCH_TIMEOUT_SECONDS),
        chunk_size=int(app_config.STREAM_CHUNK_SIZE),
        s3_bucket_name=app_config.S3_BUCKET_NAME,
        s3_region=app_config.S3_REGION,
        s3_endpoint_url=app_config.S3_ENDPOINT_URL,
        s3_access_key_id=app_config.S3_ACCESS_KEY_ID,
        s3_secret_access_key=app_config.S3_SECRET_ACCESS_KEY,
        s3_session_token=app_config.S3_SESSION_TOKEN,
        s3_use_path_style=bool(app_config.S3_USE_PATH_STYLE),
        s3_verify_ssl=bool(app_config.S3_VERIFY_SSL),
    )


def build_local_backend(settings: StorageSettings) -> LocalStorageBackend:
    return LocalStorageBackend(settings.local_root, chunk_size=settings.chunk_size)


def build_s3_backend(settings: StorageSettings, client=None) -> S3StorageBackend:
    # Always built: absent credentials degrade to NOT_CONFIGURED at call time.
    return S3StorageBackend(
        default_bucket=settings.s3_bucket_name,
        region=settings.s3_region,
        endpoint_url=settings.s3_endpoint_url,
        access_key_id=settings.s3_access_key_id,
        secret_access_key=settings.s3_secret_access_key,
        session_token=settings.s3_session_token,
        use_path_style=settings.s3_use_path_style,
        verify_ssl=settings.s3_verify_ssl,
        chunk_size=settings.chunk_size,
        client=client,
    )


def build_remote_backend(settings: StorageSettings, client=None) -> RemoteUrlBackend:
    return RemoteUrlBackend(
        timeout_seconds=settings.remote_timeout_seconds,
        chunk_size=settings.chunk_size,
        client=client,
    )
