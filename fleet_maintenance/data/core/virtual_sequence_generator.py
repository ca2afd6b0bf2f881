"""
Virtual Sequence Generator Base Class
Per-key counters stored in a dedicated table, shared by every business number prefix
"""

from fleet_maintenance import db
from sqlalchemy import text
import threading
from abc import ABC, abstractmethod


class VirtualSequenceGenerator(ABC):
    """
    Abstract base class for keyed sequence generators

    One counter row per sequence key. Increments run as UPDATE ... SET
    current_value = current_value + 1 inside the caller's transaction, so a
    rolled back unit of work also rolls back the allocation.
    """

    _lock = threading.Lock()

    SEQUENCE_TABLE_NAME = "_sequence_counters"

    @classmethod
    @abstractmethod
    def get_sequence_key(cls):
        """
        Return the key of the counter row used by this generator
        Must be implemented by subclasses
        """
        pass

    @classmethod
    def seed_value(cls):
        """
        Value the counter starts from when its row does not exist yet.
        Subclasses override this to continue existing history.
        """
        return 0

    @classmethod
    def get_next_id(cls):
        """
        Get the next value from the sequence, creating the counter row on first use
        """
        key = cls.get_sequence_key()
        with cls._lock:
            result = db.session.execute(
                text(f"UPDATE {cls.SEQUENCE_TABLE_NAME} SET current_value = current_value + 1 WHERE sequence_key = :key"),
                {"key": key}
            )
            if result.rowcount == 0:
                db.session.execute(
                    text(f"INSERT INTO {cls.SEQUENCE_TABLE_NAME} (sequence_key, current_value) VALUES (:key, :value)"),
                    {"key": key, "value": cls.seed_value() + 1}
                )
            return cls.get_current_sequence_value()

    @classmethod
    def create_sequence_table_if_not_exists(cls):
        """
        Create the shared counter table if it doesn't exist
        """
        try:
            db.session.execute(text(f"""
                CREATE TABLE IF NOT EXISTS {cls.SEQUENCE_TABLE_NAME} (
                    sequence_key VARCHAR(50) PRIMARY KEY,
                    current_value INTEGER NOT NULL DEFAULT 0
                )
            """))
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            raise e

    @classmethod
    def reset_sequence(cls, start_value=1):
        """
        Reset the sequence so the next allocation returns start_value
        Useful for testing or data migration
        """
        with cls._lock:
            db.session.execute(
                text(f"DELETE FROM {cls.SEQUENCE_TABLE_NAME} WHERE sequence_key = :key"),
                {"key": cls.get_sequence_key()}
            )
            db.session.execute(
                text(f"INSERT INTO {cls.SEQUENCE_TABLE_NAME} (sequence_key, current_value) VALUES (:key, :value)"),
                {"key": cls.get_sequence_key(), "value": start_value - 1}
            )
            db.session.commit()

    @classmethod
    def get_current_sequence_value(cls):
        """
        Get the current value of the sequence, None if it was never used
        """
        result = db.session.execute(
            text(f"SELECT current_value FROM {cls.SEQUENCE_TABLE_NAME} WHERE sequence_key = :key"),
            {"key": cls.get_sequence_key()}
        )
        return result.scalar()
