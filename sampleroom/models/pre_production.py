"""
Pre-production sample model.
"""

from sampleroom.database import db, new_record_id
from sampleroom.models.asset_mixin import LegacyAssetMixin


class PreProduction(LegacyAssetMixin, db.Model):
    __tablename__ = 'pre_productions'
    ASSET_KIND = 'image'

    id = db.Column(db.String(32), primary_key=True, default=new_record_id)
    season = db.Column(db.String(100), nullable=False)
    pantone_number = db.Column(db.String(100), nullable=False)
    manager = db.Column(db.String(200), nullable=False)

    def to_dict(self, asset_url=None):
        return {
            'id': self.id,
            'season': self.season,
            'pantone_number': self.pantone_number,
            'manager': self.manager,
            'file': self.safe_file_dict(),
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
            'image_url': asset_url,
        }
