"""
Database initialization module.

This module creates and exports the SQLAlchemy database instance
that is used across all models.
"""

from uuid import uuid4

from flask_sqlalchemy import SQLAlchemy

# Create the SQLAlchemy database instance
# This will be initialized with the Flask app using db.init_app(app)
db = SQLAlchemy()


def new_record_id():
    """Opaque hex id for new catalog records."""
    return uuid4().hex
