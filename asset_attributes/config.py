import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_flag(name, default='False'):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


class Config:
    # Prefer an explicit DATABASE_URL; otherwise keep the SQLite file in instance/
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        f"sqlite:///{(BASE_DIR / 'instance' / 'asset_attributes.db').resolve()}"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR') or None

    # Seed the default unit catalog on build
    SEED_UNITS = _env_flag('SEED_UNITS', 'True')


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'WARNING')
    LOG_DIR = None
    SEED_UNITS = False
