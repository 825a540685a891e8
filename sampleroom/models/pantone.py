"""
Pantone color reference model.
"""

from sampleroom.database import db, new_record_id
from sampleroom.models.asset_mixin import LegacyAssetMixin


class Pantone(LegacyAssetMixin, db.Model):
    """A Pantone swatch submitted by a sourcing manager, with its reference image."""

    __tablename__ = 'pantones'
    ASSET_KIND = 'image'

    id = db.Column(db.String(32), primary_key=True, default=new_record_id)
    season = db.Column(db.String(100))
    pantone_number = db.Column(db.String(100))
    manager = db.Column(db.String(200))
    selected_techpack = db.Column(db.String(200))
    status = db.Column(db.String(50))

    def to_dict(self, asset_url=None):
        return {
            'id': self.id,
            'season': self.season,
            'pantone_number': self.pantone_number,
            'manager': self.manager,
            'selected_techpack': self.selected_techpack,
            'status': self.status,
            'file': self.safe_file_dict(),
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
            'image_url': asset_url,
        }
