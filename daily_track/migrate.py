import logging
import os
import sys

from flask_migrate import upgrade
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from . import create_app
from .models import db

logger = logging.getLogger(__name__)


def bootstrap_database(app, directory="migrations"):
    """Apply migrations when a migrations directory exists, otherwise create the tables."""
    with app.app_context():
        # Test database connection
        with db.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        if os.path.isdir(directory):
            upgrade(directory=directory)
            logger.info("Database migrations applied successfully")
            return "upgraded"
        db.create_all()
        logger.info("Database tables created")
        return "created"


def main():
    app = create_app()
    try:
        bootstrap_database(app)
    except OperationalError as e:
        logger.error(f"Database connection failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to apply migrations: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
