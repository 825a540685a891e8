#!/usr/bin/env python3
"""
Integration tests for the asset proxy endpoints.

Records are stored in an in-memory SQLite database; S3 and remote hosts are
faked (see conftest.py).
"""

import base64

from botocore.exceptions import EndpointConnectionError

from conftest import DEFAULT_BUCKET, client_error, make_settings, s3_object
from sampleroom.app import create_app
from sampleroom.database import db
from sampleroom.models import Pantone, PreProduction, PrintStrike, Techpack

PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x01\x02\x03\x04' * 16


class TestGetAsset:

    def test_unknown_record_is_404(self, client):
        response = client.get('/assets/pantones/does-not-exist/image')
        assert response.status_code == 404
        assert response.get_json() == {'error': 'Record not found'}

    def test_unknown_collection_is_404(self, client):
        assert client.get('/assets/vendors/1/image').status_code == 404

    def test_record_without_storage_fields(self, client, add_record):
        record_id = add_record(Pantone, season='SS25', pantone_number='19-4052')
        assert client.get(f'/assets/pantones/{record_id}/image').status_code == 404
        assert client.head(f'/assets/pantones/{record_id}/image').status_code == 404

    def test_streams_s3_object_with_disposition(self, client, add_record, s3_client):
        s3_client.get_object.return_value = s3_object(b'swatch-bytes', 'image/png')
        record_id = add_record(Pantone, season='SS25', pantone_number='19-4052',
                               file={'name': 'classic blue.png', 'key': 'pantones/cb.png', 'bucket': 'swatches'})

        response = client.get(f'/assets/pantones/{record_id}/image')

        assert response.status_code == 200
        assert response.data == b'swatch-bytes'
        assert response.headers['Content-Type'] == 'image/png'
        assert response.headers['Content-Disposition'] == 'inline; filename="classic blue.png"'
        s3_client.get_object.assert_called_once_with(Bucket='swatches', Key='pantones/cb.png')

    def test_inline_data_uri(self, client, add_record):
        image = 'data:image/png;base64,' + base64.b64encode(PNG_BYTES).decode()
        record_id = add_record(PreProduction, season='AW25', pantone_number='11-0601', manager='Asha', image=image)

        response = client.get(f'/assets/pre-productions/{record_id}/image')

        assert response.status_code == 200
        assert response.data == PNG_BYTES
        assert response.headers['Content-Type'] == 'image/png'

    def test_access_denied_is_403_and_skips_remote(self, client, add_record, s3_client, remote_site):
        s3_client.get_object.side_effect = client_error('AccessDenied', 403)
        remote_site.add('https://files.example.com/tp.pdf', content=b'%PDF-remote')
        record_id = add_record(Techpack, name='Polo', s3_key='tp/polo.pdf', s3_bucket_name='techpacks',
                               pdfview='https://files.example.com/tp.pdf')

        response = client.get(f'/assets/techpacks/{record_id}/pdf')

        assert response.status_code == 403
        assert remote_site.calls == []

    def test_transient_s3_falls_back_to_local_file(self, client, add_record, s3_client, uploads):
        (uploads / 'strikes').mkdir()
        (uploads / 'strikes' / 'ps-7.jpg').write_bytes(b'jpeg-bytes')
        s3_client.get_object.side_effect = EndpointConnectionError(endpoint_url='https://s3.example')
        record_id = add_record(PrintStrike, season='SS25', print_strike_number='PS-7', manager='Ravi',
                               s3_key='strikes/ps-7.jpg', image='strikes/ps-7.jpg')

        response = client.get(f'/assets/print-strikes/{record_id}/image')

        assert response.status_code == 200
        assert response.data == b'jpeg-bytes'
        assert response.headers['Content-Type'] == 'image/jpeg'
        s3_client.get_object.assert_called_once_with(Bucket=DEFAULT_BUCKET, Key='strikes/ps-7.jpg')

    def test_techpack_s3_url_is_parsed(self, client, add_record, s3_client):
        s3_client.get_object.return_value = s3_object(b'%PDF-1.7')
        record_id = add_record(Techpack, name='Tee', pdf_original_name='Tee v2.pdf',
                               pdf_url='https://tp-files.s3.ap-south-1.amazonaws.com/uploaded%20files/tee.pdf')

        response = client.get(f'/assets/techpacks/{record_id}/pdf')

        assert response.status_code == 200
        assert response.headers['Content-Type'] == 'application/pdf'
        assert response.headers['Content-Disposition'] == 'inline; filename="Tee v2.pdf"'
        s3_client.get_object.assert_called_once_with(Bucket='tp-files', Key='uploaded files/tee.pdf')

    def test_remote_upstream_error_is_502(self, client, add_record, remote_site):
        remote_site.add('https://files.example.com/tp.pdf', status=503)
        record_id = add_record(Techpack, name='Polo', preview_url='https://files.example.com/tp.pdf')
        assert client.get(f'/assets/techpacks/{record_id}/pdf').status_code == 502

    def test_transient_only_is_500_with_generic_body(self, client, add_record, s3_client):
        s3_client.get_object.side_effect = EndpointConnectionError(endpoint_url='https://secret-endpoint.example')
        record_id = add_record(Pantone, s3_key='p.png', s3_bucket_name='private-bucket')

        response = client.get(f'/assets/pantones/{record_id}/image')

        assert response.status_code == 500
        body = response.get_data(as_text=True)
        assert 'private-bucket' not in body
        assert 'secret-endpoint' not in body

    def test_unexpected_error_is_500(self, client, add_record, s3_client):
        s3_client.get_object.side_effect = RuntimeError('boom with credentials AKIDEXAMPLE')
        record_id = add_record(Pantone, s3_key='p.png')

        response = client.get(f'/assets/pantones/{record_id}/image')

        assert response.status_code == 500
        assert response.get_json() == {'error': 'An unexpected error occurred.'}

    def test_repeated_gets_are_identical(self, client, add_record):
        image = base64.b64encode(PNG_BYTES).decode()
        record_id = add_record(Pantone, image=image)

        first = client.get(f'/assets/pantones/{record_id}/image')
        second = client.get(f'/assets/pantones/{record_id}/image')

        assert first.status_code == second.status_code == 200
        assert first.data == second.data == PNG_BYTES
        assert first.headers['Content-Type'] == second.headers['Content-Type'] == 'image/png'

    def test_extensionless_legacy_path_is_served_from_uploads(self, client, add_record, uploads):
        (uploads / 'legacy').mkdir()
        (uploads / 'legacy' / 'swatch012').write_bytes(b'real-local-bytes')
        record_id = add_record(Pantone, image='legacy/swatch012')

        response = client.get(f'/assets/pantones/{record_id}/image')

        assert response.status_code == 200
        assert response.data == b'real-local-bytes'

    def test_missing_credentials_is_403(self, uploads, s3_client, http_client):
        app = create_app(
            {'TESTING': True, 'SQLALCHEMY_DATABASE_URI': 'sqlite://'},
            storage_settings=make_settings(uploads, s3_access_key_id=None, s3_secret_access_key=None),
            s3_client=s3_client,
            http_client=http_client,
        )
        with app.app_context():
            row = Pantone(s3_key='p/1.png', s3_bucket_name='swatches')
            db.session.add(row)
            db.session.commit()
            record_id = row.id

        response = app.test_client().get(f'/assets/pantones/{record_id}/image')

        assert response.status_code == 403
        assert response.get_json() == {'error': 'Object storage access not configured'}
        s3_client.get_object.assert_not_called()

        with app.app_context():
            db.session.remove()
            db.drop_all()


class TestHeadAsset:

    def test_head_s3_exists(self, client, add_record, s3_client):
        record_id = add_record(Pantone, s3_key='p.png', s3_bucket_name='b')
        response = client.head(f'/assets/pantones/{record_id}/image')
        assert response.status_code == 200
        assert response.data == b''
        s3_client.get_object.assert_not_called()

    def test_head_access_denied_is_404(self, client, add_record, s3_client, remote_site):
        s3_client.head_object.side_effect = client_error('403', 403, 'HeadObject')
        record_id = add_record(Techpack, s3_key='tp.pdf', s3_bucket_name='b',
                               pdfview='https://files.example.com/tp.pdf')
        assert client.head(f'/assets/techpacks/{record_id}/pdf').status_code == 404
        assert remote_site.calls == []

    def test_head_matches_get_for_undecodable_inline(self, client, add_record):
        record_id = add_record(PreProduction, season='AW25', pantone_number='11-0601', manager='Asha',
                               image='data:image/png;base64,AAAAA')

        head = client.head(f'/assets/pre-productions/{record_id}/image')
        get = client.get(f'/assets/pre-productions/{record_id}/image')

        assert head.status_code == get.status_code == 404

    def test_head_unknown_record(self, client):
        assert client.head('/assets/techpacks/missing/pdf').status_code == 404


class TestObjectEndpoint:

    def test_missing_key_is_400(self, client):
        response = client.get('/assets/object')
        assert response.status_code == 400
        assert response.get_json() == {'error': 'Missing key'}

    def test_streams_object(self, client, s3_client):
        s3_client.get_object.return_value = s3_object(b'raw', 'text/csv')
        response = client.get('/assets/object', query_string={'key': 'uploaded files/1-sizes.csv'})
        assert response.status_code == 200
        assert response.data == b'raw'
        assert response.headers['Content-Type'].startswith('text/csv')

    def test_fetch_failure_is_500(self, client, s3_client):
        s3_client.get_object.side_effect = client_error('NoSuchKey', 404)
        assert client.get('/assets/object?key=nope').status_code == 500


class TestListing:

    def test_list_hides_storage_details(self, client, add_record):
        add_record(Pantone, season='SS25', pantone_number='19-4052', s3_key='secret/key.png',
                   s3_bucket_name='secret-bucket',
                   file={'name': 'cb.png', 'key': 'secret/key.png', 'bucket': 'secret-bucket',
                         'url': 'https://secret-bucket.s3.us-east-1.amazonaws.com/secret/key.png',
                         'size': 10, 'type': 'image/png'})

        response = client.get('/assets/pantones')

        assert response.status_code == 200
        body = response.get_data(as_text=True)
        assert 'secret' not in body
        [row] = response.get_json()
        assert row['file'] == {'name': 'cb.png', 'size': 10, 'type': 'image/png'}
        assert row['image_url'] == f"/assets/pantones/{row['id']}/image"

    def test_single_techpack_links_to_pdf_proxy(self, client, add_record):
        record_id = add_record(Techpack, name='Polo', status='ACCEPTED', pdf_path='tp/polo.pdf')
        response = client.get(f'/assets/techpacks/{record_id}')
        assert response.status_code == 200
        assert response.get_json()['pdf_url'] == f'/assets/techpacks/{record_id}/pdf'

    def test_unknown_collection(self, client):
        assert client.get('/assets/vendors').status_code == 404
