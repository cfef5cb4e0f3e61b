from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from asset_attributes.config import Config
from asset_attributes.utils.logger import setup_logging_from_config, get_logger

# Initialize extensions
db = SQLAlchemy()


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    setup_logging_from_config(app.config)
    logger = get_logger("asset_attributes")
    logger.info("Initializing Flask application")

    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') and \
            ':memory:' not in app.config['SQLALCHEMY_DATABASE_URI']:
        from pathlib import Path
        db_path = Path(app.config['SQLALCHEMY_DATABASE_URI'][len('sqlite:///'):])
        db_path.parent.mkdir(parents=True, exist_ok=True)

    db.init_app(app)
    logger.debug("Extensions initialized")

    # Import models to ensure they're registered with SQLAlchemy
    from asset_attributes.data.core.unit import Unit
    from asset_attributes.data.core.asset_info.asset_type import AssetType, AssetTypeField
    from asset_attributes.data.core.asset_info.asset import Asset

    logger.debug("Models registered: Unit, AssetType, AssetTypeField, Asset")

    return app
