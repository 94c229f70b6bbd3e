import logging
import threading
from fastapi import Request
import psycopg2
from psycopg2.pool import ThreadedConnectionPool
from psycopg2.extras import RealDictCursor

from joyas.config import DB_CONFIG, DB_POOL_MIN, DB_POOL_MAX
from joyas.exceptions import StoreError

logger = logging.getLogger(__name__)


class InventoryStore:
    """
    Read-only access to the `inventario` table through a pooled psycopg2 client.
    One instance lives for the whole process; handlers receive it via `get_store`.
    Callers beyond `maxconn` wait for a connection to be returned instead of failing.
    """

    def __init__(self, db_config=None, minconn=DB_POOL_MIN, maxconn=DB_POOL_MAX):
        config = db_config if db_config is not None else DB_CONFIG
        try:
            self.pool = ThreadedConnectionPool(minconn, maxconn, **config)
        except psycopg2.Error as e:
            raise StoreError(str(e)) from e
        # one slot per pooled connection; getconn never sees an exhausted pool
        self.slots = threading.BoundedSemaphore(maxconn)

    def fetch_all(self, query, params=()):
        logger.debug("SQL: %s | params: %s", query, params)
        with self.slots:
            return self._fetch_all(query, params)

    def _fetch_all(self, query, params):
        try:
            conn = self.pool.getconn()
        except psycopg2.Error as e:
            raise StoreError(str(e)) from e
        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cursor:
                cursor.execute(query, params)
                rows = cursor.fetchall()
            # close the implicit read transaction before handing the connection back
            conn.rollback()
            return [dict(row) for row in rows]
        except psycopg2.Error as e:
            if not conn.closed:
                conn.rollback()
            raise StoreError(str(e).strip()) from e
        finally:
            self.pool.putconn(conn)

    def close(self):
        self.pool.closeall()


def get_store(request: Request) -> InventoryStore:
    return request.app.state.store
