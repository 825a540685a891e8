"""
Print strike model.
"""

from sampleroom.database import db, new_record_id
from sampleroom.models.asset_mixin import LegacyAssetMixin


class PrintStrike(LegacyAssetMixin, db.Model):
    """A print strike-off sample; ``file`` is the preview, ``files`` holds attachments."""

    __tablename__ = 'print_strikes'
    ASSET_KIND = 'image'

    id = db.Column(db.String(32), primary_key=True, default=new_record_id)
    season = db.Column(db.String(100), nullable=False)
    print_strike_number = db.Column(db.String(100), nullable=False)
    manager = db.Column(db.String(200), nullable=False)
    selected_techpack = db.Column(db.String(200))

    def to_dict(self, asset_url=None):
        return {
            'id': self.id,
            'season': self.season,
            'print_strike_number': self.print_strike_number,
            'manager': self.manager,
            'selected_techpack': self.selected_techpack,
            'file': self.safe_file_dict(),
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
            'image_url': asset_url,
        }
