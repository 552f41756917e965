"""SQLite-backed key-value store — the persistent state every operation runs against.

Two tables, created automatically on open:
  - kv:     (namespace, key) -> JSON value
  - events: append-only notification log

A Store is passed explicitly into every ledger operation. Mutating operations
wrap their writes in `transaction()` so they apply all-or-nothing.
"""

import json
import sqlite3
import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator

from habitledger.config import DB_PATH

logger = logging.getLogger(__name__)

_MEMORY = ":memory:"


def _connect(path: Path | str) -> sqlite3.Connection:
    """Return an autocommit connection with row_factory set."""
    if str(path) != _MEMORY:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    # isolation_level=None: transactions are opened explicitly by Store.transaction()
    conn = sqlite3.connect(str(path), isolation_level=None)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


def _encode_key(key: Any) -> str:
    # JSON keeps types apart: 1 -> '1', "1" -> '"1"', ("a:1", 2) -> '["a:1",2]'
    if isinstance(key, tuple):
        key = list(key)
    return json.dumps(key, separators=(",", ":"))


class Store:
    """Key-value substrate with an append-only event log and a host clock."""

    def __init__(self, path: Path | str | None = None,
                 clock: Callable[[], float] | None = None):
        self.path = path if path is not None else DB_PATH
        self._clock = clock or time.time
        self._conn = _connect(self.path)
        self.init()

    def init(self) -> None:
        """Create tables if they don't exist."""
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS kv (
                namespace TEXT NOT NULL,
                key       TEXT NOT NULL,
                value     TEXT NOT NULL,
                PRIMARY KEY (namespace, key)
            );

            CREATE TABLE IF NOT EXISTS events (
                id         INTEGER PRIMARY KEY AUTOINCREMENT,
                name       TEXT    NOT NULL,
                payload    TEXT    NOT NULL,
                created_at INTEGER NOT NULL
            );
            CREATE INDEX IF NOT EXISTS idx_events_name
                ON events(name, id);
        """)
        logger.info("Store initialized at %s", self.path)

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def now(self) -> int:
        """Current host timestamp in whole unix seconds."""
        return int(self._clock())

    # ═══════════════════════════════════════════════════════════════════════
    # Transactions
    # ═══════════════════════════════════════════════════════════════════════

    @contextmanager
    def transaction(self) -> Iterator["Store"]:
        """Apply every write inside the block atomically.

        Nested blocks join the outer transaction.
        """
        if self._conn.in_transaction:
            yield self
            return
        self._conn.execute("BEGIN IMMEDIATE")
        try:
            yield self
        except BaseException:
            self._conn.execute("ROLLBACK")
            raise
        try:
            self._conn.execute("COMMIT")
        except BaseException:
            # A failed COMMIT can leave the transaction open
            if self._conn.in_transaction:
                self._conn.execute("ROLLBACK")
            raise

    # ═══════════════════════════════════════════════════════════════════════
    # Key-value access
    # ═══════════════════════════════════════════════════════════════════════

    def get(self, namespace: str, key: Any, default: Any = None) -> Any:
        row = self._conn.execute(
            "SELECT value FROM kv WHERE namespace = ? AND key = ?",
            (namespace, _encode_key(key)),
        ).fetchone()
        return json.loads(row["value"]) if row else default

    def put(self, namespace: str, key: Any, value: Any) -> None:
        self._conn.execute(
            """INSERT INTO kv (namespace, key, value) VALUES (?, ?, ?)
               ON CONFLICT(namespace, key) DO UPDATE SET value = excluded.value""",
            (namespace, _encode_key(key), json.dumps(value)),
        )

    def increment(self, namespace: str, key: Any, by: int = 1) -> int:
        """Add `by` to an integer slot (missing = 0) and return the new value."""
        value = self.get(namespace, key, 0) + by
        self.put(namespace, key, value)
        return value

    # ═══════════════════════════════════════════════════════════════════════
    # Append-only sequences
    # ═══════════════════════════════════════════════════════════════════════
    # A sequence is a count slot `count_ns[owner]` plus 1-based item slots
    # `item_ns[(owner, index)]`. Indexes are contiguous and never reused.

    def append(self, count_ns: str, item_ns: str, owner: Any, value: Any) -> int:
        """Append `value` to owner's sequence. Returns its 1-based index."""
        index = self.get(count_ns, owner, 0) + 1
        self.put(item_ns, (owner, index), value)
        self.put(count_ns, owner, index)
        return index

    def items(self, count_ns: str, item_ns: str, owner: Any,
              first: int = 1, last: int | None = None) -> list:
        """Return items first..last (1-based, inclusive), clamped to the sequence."""
        count = self.get(count_ns, owner, 0)
        last = count if last is None else min(last, count)
        return [self.get(item_ns, (owner, i)) for i in range(max(first, 1), last + 1)]

    # ═══════════════════════════════════════════════════════════════════════
    # Event log
    # ═══════════════════════════════════════════════════════════════════════

    def append_event(self, name: str, payload: dict) -> int:
        cur = self._conn.execute(
            "INSERT INTO events (name, payload, created_at) VALUES (?, ?, ?)",
            (name, json.dumps(payload), self.now()),
        )
        return cur.lastrowid

    def events(self, name: str | None = None, since_id: int = 0) -> list[dict]:
        """Events with id > since_id, oldest first, optionally filtered by name."""
        sql = "SELECT id, name, payload, created_at FROM events WHERE id > ?"
        params: list = [since_id]
        if name:
            sql += " AND name = ?"
            params.append(name)
        sql += " ORDER BY id"
        rows = self._conn.execute(sql, params).fetchall()
        return [
            {"id": r["id"], "name": r["name"], "payload": json.loads(r["payload"]),
             "created_at": r["created_at"]}
            for r in rows
        ]
