"""WSGI entry point: ``waitress-serve --port 3001 sampleroom.wsgi:app``."""

from sampleroom.app import create_app

app = create_app()
