# Sample Room - apparel production catalog and secure asset proxy
import os

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from sampleroom.config import app_config
from sampleroom.database import db
from sampleroom.services.records import RecordRepository
from sampleroom.services.storage import AssetResolver
from sampleroom.services.storage.factory import load_storage_settings_from_env


def create_app(test_config=None, *, storage_settings=None, s3_client=None, http_client=None):
    """Build the Flask app.

    The asset resolver (and with it the boto3 and httpx clients) is created
    once here and shared by every request through ``app.extensions``.
    """
    app_config.configure_logging()

    app = Flask(__name__)
    app.config['SQLALCHEMY_DATABASE_URI'] = app_config.SQLALCHEMY_DATABASE_URI
    app.config['UPLOAD_FOLDER'] = app_config.UPLOAD_FOLDER
    if test_config:
        app.config.update(test_config)

    # Apply ProxyFix to handle headers from a reverse proxy (like Nginx or Caddy)
    trusted_proxy_hops = int(os.environ.get('TRUSTED_PROXY_HOPS', '1'))
    app.wsgi_app = ProxyFix(
        app.wsgi_app,
        x_for=trusted_proxy_hops,
        x_proto=trusted_proxy_hops,
        x_host=trusted_proxy_hops,
        x_prefix=trusted_proxy_hops
    )

    db.init_app(app)

    settings = storage_settings or load_storage_settings_from_env()
    resolver = AssetResolver.from_settings(settings, s3_client=s3_client, http_client=http_client)
    app.extensions['asset_resolver'] = resolver
    app.extensions['record_repository'] = RecordRepository()

    # Import models so their tables are registered before create_all
    from sampleroom import models  # noqa: F401
    with app.app_context():
        db.create_all()

    app_config.initialize_config(app)

    from sampleroom.api.assets import assets_bp
    app.register_blueprint(assets_bp)

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(e):
        return jsonify({'error': 'An unexpected error occurred.'}), 500

    return app


if __name__ == '__main__':
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument('--debug', action='store_true', help='Run in debug mode')
    parser.add_argument('--port', type=int, default=int(os.environ.get('PORT', '3001')))
    args = parser.parse_args()

    # Consider using waitress or gunicorn for production
    # waitress-serve --host 0.0.0.0 --port 3001 sampleroom.wsgi:app
    create_app().run(host='0.0.0.0', port=args.port, debug=args.debug)
