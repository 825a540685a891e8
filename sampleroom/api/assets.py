"""
Asset proxy routes.

Every asset is served through these endpoints so that buckets, keys, local
paths and third-party URLs never reach the client.
"""

from flask import Blueprint, current_app, jsonify, request, url_for

from sampleroom.services.records import RecordRepository, UnknownCollection
from sampleroom.services.storage import CONTEXT_OBJECT, FailureKind, FetchFailure, build_proxy_response

# Create blueprint
assets_bp = Blueprint('assets', __name__)

FAILURE_MESSAGES = {
    FailureKind.NOT_FOUND: 'Asset not available',
    FailureKind.CORRUPT: 'Asset not available',
    FailureKind.NOT_CONFIGURED: 'Object storage access not configured',
    FailureKind.ACCESS_DENIED: 'Object storage access denied',
    FailureKind.UPSTREAM_ERROR: 'Upstream asset unavailable',
    FailureKind.TRANSIENT: 'Failed to fetch asset',
}


def _resolver():
    return current_app.extensions['asset_resolver']


def _records():
    return current_app.extensions.get('record_repository') or RecordRepository()


def _asset_url(collection, row):
    return url_for('assets.get_asset', collection=collection, record_id=row.id, kind=row.ASSET_KIND)


# --- Routes ---

@assets_bp.route('/assets/object', methods=['GET'])
def get_object():
    """Stream any object from the default bucket by key."""
    key = request.args.get('key', '').strip()
    if not key:
        return jsonify({'error': 'Missing key'}), 400
    try:
        content = _resolver().fetch_object(key, CONTEXT_OBJECT)
    except FetchFailure as e:
        current_app.logger.error(f"Error streaming object: {e.kind.value}")
        return jsonify({'error': 'Failed to fetch object'}), 500
    except Exception as e:
        current_app.logger.error(f"Error streaming object: {e}", exc_info=True)
        return jsonify({'error': 'Failed to fetch object'}), 500
    return build_proxy_response(content)


@assets_bp.route('/assets/<collection>', methods=['GET'])
def list_records(collection):
    """List a collection's records as client-safe metadata with proxy URLs."""
    try:
        rows = _records().list(collection)
        return jsonify([row.to_dict(asset_url=_asset_url(collection, row)) for row in rows])
    except UnknownCollection:
        return jsonify({'error': 'Unknown collection'}), 404
    except Exception as e:
        current_app.logger.error(f"Error listing {collection}: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred.'}), 500


@assets_bp.route('/assets/<collection>/<record_id>', methods=['GET'])
def get_record(collection, record_id):
    try:
        row = _records().get(collection, record_id)
        if row is None:
            return jsonify({'error': 'Record not found'}), 404
        return jsonify(row.to_dict(asset_url=_asset_url(collection, row)))
    except UnknownCollection:
        return jsonify({'error': 'Unknown collection'}), 404
    except Exception as e:
        current_app.logger.error(f"Error fetching {collection}/{record_id}: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred.'}), 500


@assets_bp.route('/assets/<collection>/<record_id>/<any(image, pdf):kind>', methods=['GET', 'HEAD'])
def get_asset(collection, record_id, kind):
    """Serve (GET) or check (HEAD) a record's image or PDF."""
    if request.method == 'HEAD':
        return _head_asset(collection, record_id)

    try:
        record = _records().find_by_id(collection, record_id)
        if record is None:
            return jsonify({'error': 'Record not found'}), 404
        content = _resolver().fetch(record, kind)
    except UnknownCollection:
        return jsonify({'error': 'Unknown collection'}), 404
    except FetchFailure as e:
        current_app.logger.warning(f"Asset {collection}/{record_id}/{kind} unresolved: {e.kind.value}")
        return jsonify({'error': FAILURE_MESSAGES[e.kind]}), e.http_status
    except Exception as e:
        current_app.logger.error(f"Error serving {collection}/{record_id}/{kind}: {e}", exc_info=True)
        return jsonify({'error': 'An unexpected error occurred.'}), 500
    return build_proxy_response(content)


def _head_asset(collection, record_id):
    try:
        record = _records().find_by_id(collection, record_id)
        if record is None:
            return '', 404
        return '', (200 if _resolver().probe(record) else 404)
    except UnknownCollection:
        return '', 404
    except Exception as e:
        current_app.logger.error(f"Error probing {collection}/{record_id}: {e}", exc_info=True)
        return '', 500
