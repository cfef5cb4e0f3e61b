#!/usr/bin/env python3
"""
Run script for the asset attribute store
"""

import argparse
import json
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from asset_attributes import create_app, db
from asset_attributes.build import build_database
from asset_attributes.utils.logger import get_logger

logger = get_logger("asset_attributes.run")


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Asset attribute store')
    parser.add_argument('--build-only', action='store_true',
                        help='Create tables and seed the unit catalog, then exit')
    parser.add_argument('--no-seed-units', action='store_false', dest='seed_units',
                        help='Do not seed the default unit catalog')
    parser.add_argument('--show-asset', type=int, metavar='ASSET_ID',
                        help='Print the attribute rows of an asset as JSON')
    parser.add_argument('--show-schema', type=int, metavar='ASSET_TYPE_ID',
                        help='Print the parsed field schema of an asset type as JSON')
    return parser.parse_args()


def show_asset(asset_id):
    from dataclasses import asdict
    from asset_attributes.data.core.asset_info.asset import Asset
    from asset_attributes.services.assets.asset_attribute_service import AssetAttributeService

    asset = db.session.get(Asset, asset_id)
    if asset is None:
        logger.error(f"Asset {asset_id} not found")
        return 1
    rows = AssetAttributeService().display(asset)
    print(json.dumps([asdict(row) for row in rows], indent=2, ensure_ascii=False))
    return 0


def show_schema(asset_type_id):
    from dataclasses import asdict
    from asset_attributes.services.assets.asset_attribute_service import AssetAttributeService

    schema = AssetAttributeService.load_schema(asset_type_id)
    print(json.dumps([asdict(definition) for definition in schema], indent=2, ensure_ascii=False))
    return 0


if __name__ == '__main__':
    args = parse_arguments()

    app = create_app()
    build_database(app, seed_units=args.seed_units)

    if args.build_only:
        logger.debug("Build completed. Exiting.")
        sys.exit(0)

    with app.app_context():
        if args.show_asset is not None:
            sys.exit(show_asset(args.show_asset))
        if args.show_schema is not None:
            sys.exit(show_schema(args.show_schema))

    logger.info("Nothing to show; pass --show-asset or --show-schema")
