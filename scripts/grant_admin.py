"""
Grant administrator rights to an existing user.

Usage: python scripts/grant_admin.py user@example.com
"""

import sys
import os
import logging

# Add parent directory to path to allow importing app modules
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'backend'))

from app.database import get_db_context, init_db
from app.services.admin_service import admin_service

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main(argv):
    if len(argv) != 2:
        print(__doc__.strip())
        return 2

    init_db()
    with get_db_context() as db:
        user = admin_service.grant_admin(db, argv[1])

    if user is None:
        logger.error(f"No user registered with email {argv[1]}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
