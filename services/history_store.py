"""
Persistent history of generated tweets, scoped by visitor id.
Uses SQLite; rows are only ever inserted or deleted.
"""
import sqlite3
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from config import Config
from models.result_models import HistoryEntry, HistoryRecord
from utils.exceptions import PersistenceError
from utils.logger import app_logger, log_duration


class HistoryStore:
    """
    SQLite-backed store for the tweets_history table.
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Args:
            db_path: Path to SQLite database file (default: Config.HISTORY_DB_PATH)
        """
        self._db_path = db_path or Config.HISTORY_DB_PATH
        self._local = threading.local()
        self._schema_ready = False

        try:
            self._ensure_schema()
            app_logger.info(f"History store initialized with SQLite: {self._db_path}")
        except PersistenceError as e:
            app_logger.error(f"History store unavailable, will retry on next write: {e}")

    def _get_conn(self) -> sqlite3.Connection:
        """Get thread-local database connection."""
        if not hasattr(self._local, 'conn'):
            self._local.conn = sqlite3.connect(self._db_path, check_same_thread=False)
            self._local.conn.row_factory = sqlite3.Row
        return self._local.conn

    def _ensure_schema(self) -> None:
        """
        Create the database file and schema once.

        Raises:
            PersistenceError: if the path is not writable or the schema can't be created
        """
        if self._schema_ready:
            return

        try:
            if self._db_path != ":memory:":
                Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
            self._init_db()
        except (OSError, sqlite3.Error) as e:
            raise PersistenceError(f"History database setup failed: {e}") from e

        self._schema_ready = True

    def _init_db(self) -> None:
        """Initialize database schema."""
        conn = self._get_conn()
        cursor = conn.cursor()

        cursor.execute("PRAGMA busy_timeout=5000")

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS tweets_history (
                id TEXT PRIMARY KEY,
                visitor_id TEXT NOT NULL,
                original_text TEXT NOT NULL,
                improved_text TEXT NOT NULL,
                is_thread INTEGER NOT NULL DEFAULT 0,
                mode TEXT NOT NULL DEFAULT 'auto',
                created_at TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_visitor_created
            ON tweets_history(visitor_id, created_at)
        """)

        conn.commit()

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> HistoryRecord:
        return HistoryRecord(
            id=row['id'],
            visitor_id=row['visitor_id'],
            original_text=row['original_text'],
            improved_text=row['improved_text'],
            is_thread=bool(row['is_thread']),
            mode=row['mode'],
            created_at=datetime.fromisoformat(row['created_at'])
        )

    def insert(self, entry: HistoryEntry) -> HistoryRecord:
        """
        Insert a history row.

        Raises:
            PersistenceError: if the write fails
        """
        record = HistoryRecord(
            id=uuid.uuid4().hex,
            visitor_id=entry.visitor_id,
            original_text=entry.original_text,
            improved_text=entry.improved_text,
            is_thread=entry.is_thread,
            mode=entry.mode,
            created_at=datetime.now(timezone.utc)
        )

        self._ensure_schema()

        try:
            conn = self._get_conn()
            conn.execute("""
                INSERT INTO tweets_history
                (id, visitor_id, original_text, improved_text, is_thread, mode, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (
                record.id, record.visitor_id, record.original_text, record.improved_text,
                int(record.is_thread), record.mode, record.created_at.isoformat()
            ))
            conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"History insert failed: {e}") from e

        return record

    def record(self, entry: HistoryEntry) -> Optional[HistoryRecord]:
        """Best-effort insert: failures are logged and never reach the caller."""
        try:
            with log_duration("DB Save"):
                return self.insert(entry)
        except PersistenceError as e:
            app_logger.error(f"DB Save Failed: {e}")
            return None

    def list(self, visitor_id: str, limit: int = Config.HISTORY_PAGE_SIZE) -> List[HistoryRecord]:
        """History for one visitor, newest first."""
        self._ensure_schema()
        conn = self._get_conn()
        cursor = conn.cursor()

        cursor.execute("""
            SELECT * FROM tweets_history
            WHERE visitor_id = ?
            ORDER BY created_at DESC, rowid DESC
            LIMIT ?
        """, (visitor_id, limit))

        return [self._row_to_record(row) for row in cursor.fetchall()]

    def delete(self, record_id: str, visitor_id: str) -> bool:
        """
        Delete a row owned by visitor_id.

        Returns:
            True if a row was removed; False when it doesn't exist or belongs
            to another visitor.
        """
        self._ensure_schema()
        conn = self._get_conn()
        cursor = conn.cursor()

        cursor.execute(
            "DELETE FROM tweets_history WHERE id = ? AND visitor_id = ?",
            (record_id, visitor_id)
        )
        conn.commit()

        deleted = cursor.rowcount > 0
        if not deleted:
            app_logger.info(f"History delete no-op: {record_id} not found for visitor")
        return deleted

# Global store instance
_history_store: Optional[HistoryStore] = None


def get_history_store() -> HistoryStore:
    """Get the global history store instance."""
    global _history_store
    if _history_store is None:
        _history_store = HistoryStore()
    return _history_store
