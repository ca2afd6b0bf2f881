"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and to_dict methods for seeding and for handing plain
records to the calling layer.
"""

from fleet_maintenance import db
from datetime import date, datetime
from decimal import Decimal
from sqlalchemy import inspect
from fleet_maintenance.logger import get_logger

logger = get_logger("fleet_maintenance.buisness.core.data_insertion")

AUDIT_FIELDS = ('created_at', 'updated_at', 'created_by_id', 'updated_by_id')


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models

    This mixin adds:
    - from_dict(): Create model instance from dictionary
    - to_dict(): Convert model instance to a plain dictionary
    - create_from_dict(): Create and add model instance from dictionary
    """

    @classmethod
    def from_dict(cls, data_dict, user_id=None, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            user_id (int, optional): User ID for audit fields
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
            if key in ('created_at', 'updated_at') and value is None:
                continue
            filtered_data[key] = value

        instance = cls(**filtered_data)

        if user_id is not None:
            if hasattr(instance, 'created_by_id') and not instance.created_by_id:
                instance.created_by_id = user_id
            if hasattr(instance, 'updated_by_id'):
                instance.updated_by_id = user_id

        return instance

    def to_dict(self, include_audit_fields=True):
        """
        Convert model instance to dictionary

        Decimals are rendered as strings so totals keep their scale,
        dates and datetimes as ISO strings.
        """
        result = {}
        mapper = inspect(self.__class__)

        for column in mapper.columns:
            if not include_audit_fields and column.key in AUDIT_FIELDS:
                continue
            value = getattr(self, column.key)
            if isinstance(value, (datetime, date)):
                result[column.key] = value.isoformat()
            elif isinstance(value, Decimal):
                result[column.key] = str(value)
            else:
                result[column.key] = value

        return result

    @classmethod
    def create_from_dict(cls, data_dict, user_id=None, skip_fields=None, commit=True):
        """
        Create and save a model instance from dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            user_id (int, optional): User ID for audit fields
            skip_fields (list, optional): Fields to skip during creation
            commit (bool): Whether to commit the transaction, otherwise only flush

        Returns:
            Model instance (saved to database)
        """
        instance = cls.from_dict(data_dict, user_id, skip_fields)

        try:
            db.session.add(instance)
            if commit:
                db.session.commit()
                logger.info(f"Created {cls.__name__}: {instance}")
            else:
                db.session.flush()
            return instance
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error creating {cls.__name__}: {e}")
            raise
