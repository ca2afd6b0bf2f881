from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
import os
from fleet_maintenance.logger import get_logger

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()


def _env_flag(name, default='False'):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


def create_app(config_overrides=None):
    """
    Application factory for the fleet maintenance back office

    Args:
        config_overrides (dict, optional): Values applied on top of the
            environment-derived configuration (used by tests)
    """
    from pathlib import Path

    app = Flask(__name__)

    logger = get_logger("fleet_maintenance")
    logger.info("Initializing Flask application")

    config_overrides = config_overrides or {}

    # Configuration
    app.config['TESTING'] = config_overrides.get('TESTING', _env_flag('FLASK_TESTING'))
    app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')
    if not app.config['SECRET_KEY'] and not app.config['TESTING']:
        logger.critical("SECRET_KEY not set in environment! Application cannot start.")
        raise RuntimeError("SECRET_KEY environment variable is required")

    # Prefer an explicit DATABASE_URL env var; otherwise keep the SQLite
    # database inside the project's `instance/` directory.
    db_env = os.environ.get('DATABASE_URL')
    if db_env:
        app.config['SQLALCHEMY_DATABASE_URI'] = db_env
    else:
        base_dir = Path(__file__).parent.parent
        instance_dir = base_dir / 'instance'
        instance_dir.mkdir(parents=True, exist_ok=True)
        default_db_path = instance_dir / 'fleet_maintenance.db'
        app.config['SQLALCHEMY_DATABASE_URI'] = f"sqlite:///{str(default_db_path.resolve())}"

    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    # Business number formatting (OS-001, PR-001)
    app.config['BUSINESS_NUMBER_WIDTH'] = int(os.environ.get('BUSINESS_NUMBER_WIDTH', '3'))

    app.config.update(config_overrides)

    logger.debug(f"Database configured: {app.config['SQLALCHEMY_DATABASE_URI'].split(':', 1)[0]}")

    # Initialize extensions with app
    db.init_app(app)
    migrate.init_app(app, db)

    logger.debug("Extensions initialized")

    # Import models to ensure they're registered with SQLAlchemy
    from fleet_maintenance.data.core.user_info.user import User
    from fleet_maintenance.data.fleet.vehicle import Vehicle
    from fleet_maintenance.data.fleet.driver import Driver
    from fleet_maintenance.data.supply.supplier import Supplier
    from fleet_maintenance.data.supply.inventory_item import InventoryItem
    from fleet_maintenance.data.maintenance.service_order import ServiceOrder
    from fleet_maintenance.data.maintenance.service_order_item import ServiceOrderItem
    from fleet_maintenance.data.maintenance.maintenance_record import MaintenanceRecord
    from fleet_maintenance.data.purchasing.purchase_request import PurchaseRequest

    logger.debug("Models imported and registered")

    logger.info("Flask application initialization complete")

    return app
