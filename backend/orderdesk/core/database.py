"""
Conexión a base de datos PostgreSQL

Repositories get their connections from here. Every helper returns a
psycopg2 connection whose cursors yield dictionaries (RealDictCursor), which
is what the repositories map into domain models.

Author: TM3
Updated: 2025-10-17
"""
import time
import logging
from pathlib import Path

import psycopg2
from psycopg2.extras import RealDictCursor

from .config import settings

logger = logging.getLogger(__name__)

# Seconds psycopg2 waits for the server before giving up on one attempt
CONNECTION_TIMEOUT = 10

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def _database_url() -> str:
    # Use settings.DATABASE_URL which loads from .env file
    database_url = settings.DATABASE_URL
    if not database_url:
        raise RuntimeError("DATABASE_URL not configured")
    return database_url


def get_db_connection_dict():
    """
    Get a database connection with RealDictCursor (returns dictionaries)

    Returns:
        psycopg2 connection with RealDictCursor

    Example:
        conn = get_db_connection_dict()
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM orders")
        results = cursor.fetchall()  # Returns list of dicts
        cursor.close()
        conn.close()
    """
    return psycopg2.connect(
        _database_url(),
        cursor_factory=RealDictCursor,
        connect_timeout=CONNECTION_TIMEOUT,
    )


def get_db_connection_dict_with_retry(max_retries=None, retry_delay=None):
    """
    Get a psycopg2 connection with RealDictCursor and automatic retry

    Retries failed connections with exponential backoff between attempts.
    Only connection failures (OperationalError) are retried; anything else
    is raised immediately.

    Args:
        max_retries: Maximum number of connection attempts (default: settings.DB_CONNECT_RETRIES)
        retry_delay: Initial delay between retries in seconds (default: settings.DB_RETRY_DELAY)

    Returns:
        psycopg2 connection with RealDictCursor

    Raises:
        psycopg2.OperationalError: If all retry attempts fail
    """
    if max_retries is None:
        max_retries = settings.DB_CONNECT_RETRIES
    if retry_delay is None:
        retry_delay = settings.DB_RETRY_DELAY

    last_error = None

    for attempt in range(1, max_retries + 1):
        try:
            logger.debug(f"Database connection (dict) attempt {attempt}/{max_retries}")
            conn = get_db_connection_dict()
            logger.debug(f"Database connection (dict) successful on attempt {attempt}")
            return conn

        except psycopg2.OperationalError as e:
            last_error = e
            error_msg = str(e)

            if "SSL connection has been closed unexpectedly" in error_msg:
                logger.warning(f"SSL connection error on attempt {attempt}/{max_retries}: {error_msg}")
            else:
                logger.warning(f"Connection error on attempt {attempt}/{max_retries}: {error_msg}")

            if attempt < max_retries:
                delay = retry_delay * (2 ** (attempt - 1))
                logger.info(f"Retrying in {delay:.2f} seconds...")
                time.sleep(delay)
            else:
                logger.error(f"All {max_retries} connection attempts failed")

    raise last_error if last_error else RuntimeError("Connection failed after all retries")


def check_connection() -> float:
    """
    Run SELECT 1 against the database

    Returns:
        Round-trip latency in milliseconds
    """
    conn = get_db_connection_dict_with_retry(max_retries=1)
    cursor = conn.cursor()

    try:
        start = time.time()
        cursor.execute("SELECT 1")
        cursor.fetchone()
        return round((time.time() - start) * 1000, 2)
    finally:
        cursor.close()
        conn.close()


def apply_schema(drop_existing: bool = False) -> None:
    """
    Create the tables from schema.sql (idempotent)

    Args:
        drop_existing: Drop the order desk tables first
    """
    conn = get_db_connection_dict_with_retry()
    cursor = conn.cursor()

    try:
        if drop_existing:
            cursor.execute("DROP TABLE IF EXISTS order_items, orders, products, customers CASCADE")
        cursor.execute(SCHEMA_PATH.read_text())
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cursor.close()
        conn.close()
