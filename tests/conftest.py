"""Shared fixtures: a fake S3 client, a mock HTTP transport and an in-memory app."""

import io
import os
import sys
from unittest.mock import MagicMock

import httpx
import pytest
from botocore.exceptions import ClientError

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sampleroom.app import create_app  # noqa: E402
from sampleroom.database import db  # noqa: E402
from sampleroom.services.storage import AssetResolver  # noqa: E402
from sampleroom.services.storage.factory import StorageSettings  # noqa: E402

DEFAULT_BUCKET = 'catalog-assets'


def client_error(code, status, operation='GetObject'):
    return ClientError(
        {'Error': {'Code': code, 'Message': code}, 'ResponseMetadata': {'HTTPStatusCode': status}},
        operation,
    )


def s3_object(data, content_type=None):
    response = {'Body': io.BytesIO(data), 'ContentLength': len(data)}
    if content_type:
        response['ContentType'] = content_type
    return response


def make_settings(uploads, **overrides):
    values = {
        'local_root': str(uploads),
        's3_bucket_name': DEFAULT_BUCKET,
        's3_region': 'us-east-1',
        's3_access_key_id': 'AKIDEXAMPLE',
        's3_secret_access_key': 'example-secret',
        'remote_timeout_seconds': 2.0,
    }
    values.update(overrides)
    return StorageSettings(**values)


class RemoteSite:
    """Routes URLs to canned httpx responses (or exceptions) and records calls."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, url, status=200, content=b'', headers=None, error=None):
        self.routes[url] = (status, content, headers or {}, error)

    def handler(self, request):
        self.calls.append((request.method, str(request.url)))
        status, content, headers, error = self.routes.get(str(request.url), (404, b'', {}, None))
        if error is not None:
            raise error(f"simulated {error.__name__}", request=request)
        return httpx.Response(status, content=content, headers=headers)


@pytest.fixture
def uploads(tmp_path):
    root = tmp_path / 'uploads'
    root.mkdir()
    return root


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def remote_site():
    return RemoteSite()


@pytest.fixture
def http_client(remote_site):
    client = httpx.Client(transport=httpx.MockTransport(remote_site.handler))
    yield client
    client.close()


@pytest.fixture
def resolver(uploads, s3_client, http_client):
    return AssetResolver.from_settings(make_settings(uploads), s3_client=s3_client, http_client=http_client)


@pytest.fixture
def app(uploads, s3_client, http_client):
    app = create_app(
        {'TESTING': True, 'SQLALCHEMY_DATABASE_URI': 'sqlite://'},
        storage_settings=make_settings(uploads),
        s3_client=s3_client,
        http_client=http_client,
    )
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def add_record(app):
    """Insert a model row and return its id."""

    def _add(model, **fields):
        with app.app_context():
            row = model(**fields)
            db.session.add(row)
            db.session.commit()
            return row.id

    return _add
