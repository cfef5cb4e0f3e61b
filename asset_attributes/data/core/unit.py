from asset_attributes.data.core.timestamped_base import TimestampedBase
from asset_attributes import db


class Unit(TimestampedBase):
    __tablename__ = 'units'

    code = db.Column(db.String(50), unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)
    symbol = db.Column(db.String(20), nullable=True)
    is_active = db.Column(db.Boolean, default=True)

    def __repr__(self):
        return f'<Unit {self.code} ({self.symbol or self.name})>'
