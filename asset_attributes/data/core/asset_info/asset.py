from asset_attributes.data.core.timestamped_base import TimestampedBase
from asset_attributes import db


class Asset(TimestampedBase):
    __tablename__ = 'assets'

    code = db.Column(db.String(50), unique=True, nullable=True)
    name = db.Column(db.String(100), nullable=False)
    asset_type_id = db.Column(db.Integer, db.ForeignKey('asset_types.id'), nullable=True)
    # Sparse key -> value (or {"value", "unit_id"}) document, rewritten wholesale on save
    attributes_json = db.Column(db.JSON, nullable=True)
    is_active = db.Column(db.Boolean, default=True)

    asset_type = db.relationship('AssetType', back_populates='assets')

    def __repr__(self):
        return f'<Asset {self.name} ({self.code})>'
