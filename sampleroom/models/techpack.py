"""
Techpack model.

Tech packs predate the shared storage columns: the PDF may live at a local
``pdf_path``, in S3 via ``s3_key``/``s3_bucket_name``, behind a stored S3
``pdf_url``, or at a third-party ``pdfview``/``preview_url`` link.
"""

from datetime import datetime

from sampleroom.database import db, new_record_id
from sampleroom.services.storage import AddressParseError, AssetRecord, FileDescriptor, parse_object_store_url


class Techpack(db.Model):
    """An accepted or pending tech pack and its PDF."""

    __tablename__ = 'techpacks'
    ASSET_KIND = 'pdf'

    id = db.Column(db.String(32), primary_key=True, default=new_record_id)
    name = db.Column(db.String(300))
    description = db.Column(db.Text)
    articletype = db.Column(db.String(100))
    colour = db.Column(db.String(100))
    fit = db.Column(db.String(100))
    gender = db.Column(db.String(50))
    printtechnique = db.Column(db.String(100))
    status = db.Column(db.String(50))  # PENDING, ACCEPTED, REJECTED
    brand_manager = db.Column(db.String(200))
    brand = db.Column(db.String(200))
    style_id = db.Column(db.String(100))
    total_pages = db.Column(db.Integer)
    extracted_colors = db.Column(db.JSON, nullable=True)

    # Storage fields, oldest first
    pdf_path = db.Column(db.String(1024))
    preview_url = db.Column(db.String(2048))
    pdfview = db.Column(db.String(2048))
    pdf_url = db.Column(db.String(2048))
    s3_key = db.Column(db.String(1024))
    s3_bucket_name = db.Column(db.String(255))
    pdf_original_name = db.Column(db.String(500))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_asset_record(self):
        descriptor = None
        if self.pdf_url:
            try:
                parse_object_store_url(self.pdf_url)
            except AddressParseError:
                pass
            else:
                descriptor = FileDescriptor(name=self.pdf_original_name, url=self.pdf_url)

        return AssetRecord(
            object_key=self.s3_key or None,
            bucket_name=self.s3_bucket_name or None,
            file_descriptor=descriptor,
            local_path_hint=self.pdf_path or None,
            remote_url=self.pdfview or self.pdf_url or self.preview_url or None,
            display_name=self.pdf_original_name or None,
        )

    def to_dict(self, asset_url=None):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'articletype': self.articletype,
            'colour': self.colour,
            'fit': self.fit,
            'gender': self.gender,
            'printtechnique': self.printtechnique,
            'status': self.status,
            'brand_manager': self.brand_manager,
            'brand': self.brand,
            'style_id': self.style_id,
            'total_pages': self.total_pages,
            'extracted_colors': self.extracted_colors or [],
            'pdf_original_name': self.pdf_original_name,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'pdf_url': asset_url,
        }
