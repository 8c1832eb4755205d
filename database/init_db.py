import logging

from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from database.database import DatabaseManager, get_database_manager

logger = logging.getLogger(__name__)


@retry(
    retry=retry_if_exception_type(OperationalError),
    stop=stop_after_attempt(5),
    wait=wait_fixed(2),
    reraise=True
)
def _wait_for_database(manager: DatabaseManager) -> None:
    with manager.engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def init_db(manager: DatabaseManager = None) -> None:
    """Wait for the database to accept connections, then create missing tables."""
    manager = manager or get_database_manager()
    logger.info("Initializing database...")
    _wait_for_database(manager)
    manager.create_tables()
