"""
Shared storage columns for catalog records.

Every collection grew the same set of historical storage fields: a legacy
``image`` string (data URI, bare base64 or a path under the uploads folder),
an embedded ``file`` object, an optional ``files`` list, and a direct
``s3_bucket_name`` / ``s3_key`` pair.
"""

import re
from datetime import datetime

from sampleroom.database import db
from sampleroom.services.storage import AssetRecord, FileDescriptor

_BARE_BASE64_RE = re.compile(r'^[A-Za-z0-9+/]+={0,2}$')

# Shorter values are upload paths; even a 1x1 PNG encodes to ~90 characters.
MIN_BARE_BASE64_LENGTH = 64


def split_legacy_image(image):
    """Classify a legacy image value as (inline_payload, local_path_hint)."""
    if not image:
        return None, None
    value = image.strip()
    if value.startswith('data:'):
        return value, None
    if len(value) >= MIN_BARE_BASE64_LENGTH and len(value) % 4 == 0 and _BARE_BASE64_RE.match(value):
        return value, None
    return None, value


class LegacyAssetMixin:
    """Columns and record mapping shared by Pantone, PrintStrike and PreProduction."""

    image = db.Column(db.Text, nullable=True)
    file = db.Column(db.JSON, nullable=True)
    files = db.Column(db.JSON, nullable=True)
    s3_bucket_name = db.Column(db.String(255), nullable=True)
    s3_key = db.Column(db.String(1024), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_asset_record(self):
        inline_payload, local_path_hint = split_legacy_image(self.image)
        extra_files = [FileDescriptor.from_dict(f) for f in (self.files or []) if isinstance(f, dict)]
        return AssetRecord(
            object_key=self.s3_key or None,
            bucket_name=self.s3_bucket_name or None,
            file_descriptor=FileDescriptor.from_dict(self.file),
            extra_files=[f for f in extra_files if f],
            inline_payload=inline_payload,
            local_path_hint=local_path_hint,
        )

    def safe_file_dict(self):
        """Client-safe subset of the embedded file object (no key, bucket or url)."""
        if not self.file:
            return None
        return {
            'name': self.file.get('name'),
            'size': self.file.get('size'),
            'type': self.file.get('type') or self.file.get('content_type'),
        }
