import sqlite3
import os
from utils.constants import DB_FILE, APPEARANCE_KEY
from utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """Flat key -> value store backed by one SQLite table.

    Stands in for browser local storage: every value is a string and every
    write is committed immediately.
    """

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self):
        """Create schema and seed defaults."""
        conn = self.get_connection()
        self._create_schema(conn)
        self._seed_defaults(conn)
        conn.commit()

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS local_storage (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        conn.execute(
            "INSERT OR IGNORE INTO local_storage(key, value) VALUES (?, ?)",
            (APPEARANCE_KEY, "system"),
        )

    def get_item(self, key: str, default: str | None = None) -> str | None:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM local_storage WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def set_item(self, key: str, value: str):
        conn = self.get_connection()
        conn.execute(
            "INSERT OR REPLACE INTO local_storage(key, value) VALUES (?, ?)",
            (key, value),
        )
        conn.commit()

    def remove_item(self, key: str):
        conn = self.get_connection()
        conn.execute("DELETE FROM local_storage WHERE key = ?", (key,))
        conn.commit()

    def keys(self) -> list[str]:
        conn = self.get_connection()
        rows = conn.execute("SELECT key FROM local_storage ORDER BY key").fetchall()
        return [row["key"] for row in rows]

    @staticmethod
    def open(storage_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: opens (creating if needed) the store file.

        storage_folder: if provided, the DB file lives in that directory
        instead of the CWD.
        """
        if storage_folder:
            os.makedirs(storage_folder, exist_ok=True)
            path = os.path.join(storage_folder, DB_FILE)
        else:
            path = DB_FILE
        logger.info("Opening store at %s", os.path.abspath(path))
        db = DatabaseManager(path)
        db.initialize()
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
