"""Read-only record lookup used by the asset proxy."""

from __future__ import annotations

from typing import List, Optional

from sampleroom.database import db
from sampleroom.models import COLLECTIONS
from sampleroom.services.storage import AssetRecord


class UnknownCollection(LookupError):
    pass


class RecordRepository:
    """Maps ``(collection, id)`` to model rows and their AssetRecord view."""

    def model_for(self, collection: str):
        model = COLLECTIONS.get(collection)
        if model is None:
            raise UnknownCollection(collection)
        return model

    def get(self, collection: str, record_id: str):
        return db.session.get(self.model_for(collection), record_id)

    def find_by_id(self, collection: str, record_id: str) -> Optional[AssetRecord]:
        row = self.get(collection, record_id)
        if row is None:
            return None
        return row.to_asset_record()

    def list(self, collection: str) -> List:
        model = self.model_for(collection)
        return db.session.execute(db.select(model).order_by(model.created_at.desc())).scalars().all()
