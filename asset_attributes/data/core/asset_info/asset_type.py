from asset_attributes.data.core.timestamped_base import TimestampedBase
from asset_attributes import db


class AssetType(TimestampedBase):
    __tablename__ = 'asset_types'

    code = db.Column(db.String(50), unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)
    is_active = db.Column(db.Boolean, default=True)

    # Relationships
    fields = db.relationship(
        'AssetTypeField',
        back_populates='asset_type',
        order_by='AssetTypeField.sort_order',
        cascade='all, delete-orphan'
    )
    assets = db.relationship('Asset', back_populates='asset_type')

    def __repr__(self):
        return f'<AssetType {self.code}: {self.name}>'


class AssetTypeField(TimestampedBase):
    """One declared attribute field; `name` is the key written into asset attribute documents"""
    __tablename__ = 'asset_type_fields'

    asset_type_id = db.Column(db.Integer, db.ForeignKey('asset_types.id'), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    label = db.Column(db.String(200), nullable=True)
    input_type = db.Column(db.String(20), nullable=False, default='text')  # text, number, boolean, date
    required = db.Column(db.Boolean, default=False)
    unit_id = db.Column(db.Integer, db.ForeignKey('units.id'), nullable=True)
    sort_order = db.Column(db.Integer, default=0)
    is_active = db.Column(db.Boolean, default=True)

    asset_type = db.relationship('AssetType', back_populates='fields')
    unit = db.relationship('Unit')

    def __repr__(self):
        return f'<AssetTypeField {self.name} ({self.input_type})>'
