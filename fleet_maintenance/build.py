#!/usr/bin/env python3
"""
Database build for the fleet maintenance back office
Creates model tables and the business number counter table
"""

from fleet_maintenance import db
from fleet_maintenance.data.core.virtual_sequence_generator import VirtualSequenceGenerator
from fleet_maintenance.logger import get_logger

logger = get_logger("fleet_maintenance.build")


def build_database():
    """
    Create all tables. Safe to run repeatedly; existing tables and counters are kept.

    Must be called inside an application context.
    """
    logger.info("Creating model tables")
    db.create_all()

    logger.info(f"Ensuring counter table {VirtualSequenceGenerator.SEQUENCE_TABLE_NAME}")
    VirtualSequenceGenerator.create_sequence_table_if_not_exists()

    logger.info("Database build complete")
