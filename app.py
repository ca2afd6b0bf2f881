#!/usr/bin/env python3
"""
Run script for the fleet maintenance back office
"""

from fleet_maintenance import create_app
from fleet_maintenance.build import build_database
from fleet_maintenance.logger import get_logger
import argparse
import os
import sys
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

app = create_app()
logger = get_logger("fleet_maintenance.run")


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='Fleet Maintenance Back Office')
    parser.add_argument('--build-only', action='store_true',
                        help='Create database tables and exit without starting the web server')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_arguments()

    logger.debug("Starting Fleet Maintenance Back Office...")

    with app.app_context():
        build_database()

    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        sys.exit(0)

    # FLASK_DEBUG: Enable/disable debug mode (default: False)
    debug_mode = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1', 'yes', 'on')

    # FLASK_HOST / FLASK_PORT: bind address (default 127.0.0.1:5000)
    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode})")
    app.run(debug=debug_mode, host=host, port=port)
