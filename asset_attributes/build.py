#!/usr/bin/env python3
"""
Database build for the asset attribute store
Creates the tables and seeds the unit catalog
"""

from pathlib import Path
import json

from asset_attributes import create_app, db
from asset_attributes.utils.logger import get_logger

logger = get_logger("asset_attributes.build")

UNITS_FILE = Path(__file__).parent / 'data' / 'core' / 'build_data_units.json'


def build_models():
    """Create all tables for the registered models"""
    db.create_all()
    logger.info("All database tables created")


def insert_units(units_file=UNITS_FILE):
    """
    Insert the default unit catalog, skipping units already present by code

    Raises:
        FileNotFoundError: If the unit data file is missing
    """
    from asset_attributes.data.core.unit import Unit

    units_file = Path(units_file)
    if not units_file.exists():
        error_msg = f"Unit data file not found: {units_file}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    with open(units_file, 'r', encoding='utf-8') as f:
        unit_data = json.load(f)

    created = 0
    try:
        for unit_key, unit_row in unit_data.get('Units', {}).items():
            _, was_created = Unit.find_or_create_from_dict(unit_row, lookup_fields=['code'], commit=False)
            if was_created:
                created += 1
                logger.debug(f"Inserted unit: {unit_row.get('code')}")
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.error(f"Unit insertion failed: {e}")
        raise

    logger.info(f"Unit catalog ready ({created} inserted)")
    return created


def build_database(app=None, seed_units=None):
    """
    Build orchestrator

    Args:
        app: Flask app to build in; a default app is created when None
        seed_units (bool): Seed the unit catalog; defaults to the SEED_UNITS config value
    """
    app = app or create_app()

    with app.app_context():
        logger.info("Starting database build")
        build_models()

        if seed_units is None:
            seed_units = app.config.get('SEED_UNITS', True)
        if seed_units:
            insert_units()

        logger.info("Database build completed successfully")
    return app
