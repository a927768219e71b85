#!/usr/bin/env python3
"""
Run script for MaquiRent
"""

import argparse
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from maquirent import create_app  # noqa: E402
from maquirent.build import build_database, clear_data  # noqa: E402
from maquirent.server import AppServer  # noqa: E402
from maquirent.utils.logger import get_logger  # noqa: E402

logger = get_logger("maquirent.run")


def parse_arguments():
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='MaquiRent server')
    parser.add_argument('--host', default=None,
                        help='Interface to bind (default: HOST env var or 0.0.0.0)')
    parser.add_argument('--port', type=int, default=None,
                        help='Port to listen on (default: PORT env var or 8080)')
    parser.add_argument('--build-only', action='store_true',
                        help='Create the storage tables and seed data, then exit without serving')
    parser.add_argument('--clear-data', action='store_true',
                        help='Remove every stored collection and notification before starting')
    return parser.parse_args()


def main():
    args = parse_arguments()
    app = create_app()

    if args.clear_data:
        clear_data(app)

    build_database(app)

    if args.build_only:
        logger.debug("Build completed. Exiting without starting web server.")
        return 0

    host = args.host or app.config['HOST']
    port = args.port or app.config['PORT']
    AppServer(app, host, port).serve_forever()
    return 0


if __name__ == '__main__':
    sys.exit(main())
