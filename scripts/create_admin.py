"""
Create the portal admin account if it does not exist yet.

Usage:
    python scripts/create_admin.py [--username admin1] [--email admin1@example.com] [--password admin1]
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings
from app.db.base import Base
from app.db.migrations import apply_column_migrations
from app.db.seed import seed_admin_user_if_missing
from app.db.session import SessionLocal, engine
import app.models  # noqa: F401

logger = logging.getLogger("app.scripts.create_admin")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create the default admin user")
    parser.add_argument("--username", default=settings.admin_username)
    parser.add_argument("--email", default=settings.admin_email)
    parser.add_argument("--password", default=settings.admin_password)
    args = parser.parse_args(argv)

    Base.metadata.create_all(bind=engine)
    apply_column_migrations(engine)
    db = SessionLocal()
    try:
        created = seed_admin_user_if_missing(db, username=args.username, email=args.email, password=args.password)
    finally:
        db.close()
    if created:
        logger.info("admin_created username=%s", args.username)
    else:
        logger.info("admin_exists username=%s", args.username)
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s %(message)s")
    sys.exit(main())
