import sys
import os
import logging

# Add parent directory to path to allow importing app modules
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..', 'backend'))

from app.database import engine, Base
# Import all models to ensure metadata is populated
from app.models import user, category, product, favorite, purchase

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def reset_database():
    logger.info("Starting database reset...")

    # Drop all tables
    logger.info("Dropping all tables...")
    Base.metadata.drop_all(bind=engine)

    # Create all tables
    logger.info("Recreating all tables...")
    Base.metadata.create_all(bind=engine)

    logger.info("Database reset completed successfully.")

if __name__ == "__main__":
    reset_database()
