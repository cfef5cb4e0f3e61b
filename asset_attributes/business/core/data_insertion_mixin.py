"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and to_dict methods so models can be seeded from plain
dictionaries and handed to the attribute engine as raw rows.
"""

from asset_attributes import db
from datetime import datetime
from sqlalchemy import inspect
from asset_attributes.utils.logger import get_logger

logger = get_logger("asset_attributes.domain.core.data_insertion")


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models

    This mixin adds:
    - from_dict(): Create model instance from dictionary
    - to_dict(): Convert model instance to dictionary
    - find_or_create_from_dict(): Look up by unique columns before creating
    """

    @classmethod
    def from_dict(cls, data_dict, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            skip_fields (list, optional): Fields to skip during creation

        Returns:
            Model instance (not saved to database)
        """
        if skip_fields is None:
            skip_fields = []

        mapper = inspect(cls)
        columns = {c.key for c in mapper.columns}

        filtered_data = {}
        for key, value in data_dict.items():
            if key not in columns or key in skip_fields:
                continue
            if key in ['created_at', 'updated_at'] and value is None:
                continue
            filtered_data[key] = value

        return cls(**filtered_data)

    def to_dict(self, include_timestamps=True):
        """
        Convert model instance to dictionary

        Args:
            include_timestamps (bool): Whether to include created_at / updated_at

        Returns:
            dict: Dictionary representation of the model
        """
        result = {}
        mapper = inspect(self.__class__)

        for column in mapper.columns:
            if not include_timestamps and column.key in ['created_at', 'updated_at']:
                continue
            value = getattr(self, column.key)
            if isinstance(value, datetime):
                result[column.key] = value.isoformat()
            else:
                result[column.key] = value

        return result

    @classmethod
    def find_or_create_from_dict(cls, data_dict, lookup_fields, commit=True):
        """
        Find existing instance or create new one from dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            lookup_fields (list): Fields to use for lookup
            commit (bool): Whether to commit the transaction

        Returns:
            tuple: (instance, created) where created is boolean
        """
        lookup_data = {field: data_dict[field] for field in lookup_fields if field in data_dict}
        existing = cls.query.filter_by(**lookup_data).first() if lookup_data else None
        if existing:
            logger.debug(f"Found existing {cls.__name__}: {existing}")
            return existing, False

        instance = cls.from_dict(data_dict)
        try:
            db.session.add(instance)
            if commit:
                db.session.commit()
                logger.info(f"Created {cls.__name__}: {instance}")
            return instance, True
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error creating {cls.__name__}: {e}")
            raise
