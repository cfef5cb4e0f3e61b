"""
Pytest configuration and fixtures for the attribute engine and its services
"""
import pytest
from asset_attributes import create_app
from asset_attributes import db as _db
from asset_attributes.build import insert_units
from asset_attributes.config import TestConfig


@pytest.fixture(scope='function')
def app():
    """Create Flask application with a fresh in-memory database"""
    app = create_app(TestConfig)

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def db(app):
    return _db


@pytest.fixture(scope='function')
def units(app):
    """Seeded unit catalog keyed by unit code"""
    from asset_attributes.data.core.unit import Unit

    insert_units()
    return {unit.code: unit for unit in Unit.query.all()}
