from typing import Any, Dict, List, Optional

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb
from psycopg_pool import ConnectionPool

from fitweek.config import settings
from fitweek.data_access.dal import DataAccessLayer, DocumentNotFoundError, Snapshot
from fitweek.data_access.documents import apply_updates, collection_of, deep_merge, resolve
from fitweek.infra import log_utils


class PostgresDal(DataAccessLayer):
    """
    A Data Access Layer implementation that uses a PostgreSQL database as the backend.
    Every document is one row of the `documents` table (see init-db/schema.sql),
    keyed by its full path, with the body stored as JSONB.
    """

    def __init__(self, conninfo: Optional[str] = None, pool: Optional[ConnectionPool] = None):
        # Rows come back as dicts, and JSONB columns as Python objects.
        self.pool = pool or ConnectionPool(
            conninfo=conninfo or settings.DATABASE_URL,
            min_size=1,
            max_size=3,
            kwargs={"row_factory": dict_row},
            open=True,
        )

    def close(self) -> None:
        self.pool.close()

    def get_document(self, path: str) -> Snapshot:
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT data FROM documents WHERE path = %s;", (path,))
                row = cur.fetchone()
        return row["data"] if row else None

    def set_document(self, path: str, data: Dict[str, Any], merge: bool = False) -> None:
        log_utils.log_message(f"[PostgresDal] Writing {path} (merge={merge})")
        collection = collection_of(path)
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                if merge:
                    # Lock the row so concurrent merges apply one after the other
                    cur.execute("SELECT data FROM documents WHERE path = %s FOR UPDATE;", (path,))
                    row = cur.fetchone()
                    body = deep_merge(row["data"] if row else None, data)
                else:
                    body = resolve(data)
                cur.execute(
                    """
                    INSERT INTO documents (path, collection, data)
                    VALUES (%s, %s, %s)
                    ON CONFLICT (path) DO UPDATE SET
                        data = EXCLUDED.data,
                        updated_at = now();
                    """,
                    (path, collection, Jsonb(body)),
                )
        self._notify(path)

    def create_document(self, path: str, data: Dict[str, Any]) -> bool:
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO documents (path, collection, data)
                    VALUES (%s, %s, %s)
                    ON CONFLICT (path) DO NOTHING
                    RETURNING path;
                    """,
                    (path, collection_of(path), Jsonb(resolve(data))),
                )
                created = cur.fetchone() is not None
        if created:
            log_utils.log_message(f"[PostgresDal] Created {path}")
            self._notify(path)
        else:
            log_utils.log_message(f"[PostgresDal] {path} already exists, not created")
        return created

    def update_fields(self, path: str, updates: Dict[str, Any]) -> None:
        log_utils.log_message(f"[PostgresDal] Updating {sorted(updates)} on {path}")
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT data FROM documents WHERE path = %s FOR UPDATE;", (path,))
                row = cur.fetchone()
                if row is None:
                    raise DocumentNotFoundError(path)
                cur.execute(
                    "UPDATE documents SET data = %s, updated_at = now() WHERE path = %s;",
                    (Jsonb(apply_updates(row["data"], updates)), path),
                )
        self._notify(path)

    def list_documents(self, collection: str) -> List[Dict[str, Any]]:
        with self.pool.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT data FROM documents WHERE collection = %s ORDER BY path ASC;",
                    (collection,),
                )
                return [row["data"] for row in cur.fetchall()]
