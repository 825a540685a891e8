"""
Application configuration and initialization.
"""

import logging
import os
import sys

from dotenv import load_dotenv

from sampleroom.config.version import get_version

# Load environment variables from .env file
load_dotenv()

SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI', 'sqlite:///sampleroom.db')
UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', os.path.join(os.getcwd(), 'uploads'))

# Object store. Credentials are optional; without them S3 candidates report "not configured".
S3_ACCESS_KEY_ID = os.environ.get('AWS_ACCESS_KEY_ID') or None
S3_SECRET_ACCESS_KEY = os.environ.get('AWS_SECRET_ACCESS_KEY') or None
S3_SESSION_TOKEN = os.environ.get('AWS_SESSION_TOKEN') or None
S3_REGION = os.environ.get('AWS_REGION', 'us-east-1')
S3_BUCKET_NAME = (
    os.environ.get('S3_BUCKET')
    or os.environ.get('S3_BUCKET_NAME')
    or os.environ.get('AWS_S3_BUCKET_NAME')
    or None
)
S3_ENDPOINT_URL = os.environ.get('S3_ENDPOINT_URL') or None
if S3_ENDPOINT_URL:
    S3_ENDPOINT_URL = S3_ENDPOINT_URL.split('#')[0].strip()
S3_USE_PATH_STYLE = os.environ.get('S3_USE_PATH_STYLE', 'false').lower() == 'true'
S3_VERIFY_SSL = os.environ.get('S3_VERIFY_SSL', 'true').lower() == 'true'

# Legacy remote URL fallback
REMOTE_FETCH_TIMEOUT_SECONDS = float(os.environ.get('REMOTE_FETCH_TIMEOUT_SECONDS', '10'))
STREAM_CHUNK_SIZE = int(os.environ.get('STREAM_CHUNK_SIZE', str(64 * 1024)))

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()


def configure_logging():
    """Send all logs to stdout with a single handler."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(LOG_LEVEL)
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)

    # Get the root logger and clear any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(LOG_LEVEL)
    root_logger.addHandler(handler)

    # Silence chatty client libraries
    for name in ('botocore', 'boto3', 'urllib3', 'httpx', 'httpcore'):
        logging.getLogger(name).setLevel(logging.WARNING)


def initialize_config(app):
    """Log the effective storage configuration at startup."""
    version = get_version()
    app.logger.info(f"=== Sample Room {version} Starting Up ===")

    if S3_ACCESS_KEY_ID and S3_SECRET_ACCESS_KEY:
        app.logger.info(f"Object store: region={S3_REGION} default_bucket={S3_BUCKET_NAME or '-'}")
    else:
        app.logger.warning("Object store credentials not configured; S3-backed assets will return 403")

    app.logger.info(f"Legacy uploads root: {UPLOAD_FOLDER}")
    app.logger.info(f"Remote fetch timeout: {REMOTE_FETCH_TIMEOUT_SECONDS}s")
    return version
