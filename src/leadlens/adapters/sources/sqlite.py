"""SQLite reporting source backed by aiosqlite."""

import asyncio
import logging
from collections.abc import AsyncIterable
from datetime import tzinfo

import aiosqlite

from leadlens.core.encoding.delimited import format_instant
from leadlens.core.models import LeadRecord, MessageEvent

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS conversations (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    session_id TEXT NOT NULL,
    sender TEXT NOT NULL,
    message TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_conversations_user_created
    ON conversations(user_id, created_at);
CREATE TABLE IF NOT EXISTS leads (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    name TEXT NOT NULL DEFAULT '',
    email TEXT NOT NULL DEFAULT '',
    phone TEXT NOT NULL DEFAULT '',
    message TEXT NOT NULL DEFAULT '',
    source TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_leads_user ON leads(user_id);
"""

_INSERT_MESSAGE = """
INSERT INTO conversations (id, user_id, session_id, sender, message, created_at)
VALUES (?, ?, ?, ?, ?, ?)
"""

_INSERT_LEAD = """
INSERT INTO leads (id, user_id, name, email, phone, message, source, created_at)
VALUES (?, ?, ?, ?, ?, ?, ?, ?)
"""

_SELECT_MESSAGES = """
SELECT id, session_id, sender, message, created_at
FROM conversations
WHERE user_id = ?
ORDER BY created_at ASC, rowid ASC
"""

_SELECT_LEADS = """
SELECT id, name, email, phone, message, source, created_at
FROM leads
WHERE user_id = ?
ORDER BY rowid ASC
"""


class SQLiteReportingSource:
    """SQLite implementation of ReportingSourcePort.

    Reads the ``conversations`` and ``leads`` tables, scoping every query
    to one user id. Timestamps are stored as ISO-8601 text; naive values
    are read in ``default_tz``.

    For :memory: databases, a persistent connection is maintained since
    in-memory databases are connection-scoped in SQLite.
    """

    def __init__(self, db_path: str, default_tz: tzinfo | None = None) -> None:
        self._db_path = db_path
        self._default_tz = default_tz
        self._initialized = False
        self._init_lock: asyncio.Lock | None = None
        self._persistent_conn: aiosqlite.Connection | None = None

    def _get_lock(self) -> asyncio.Lock:
        """Get or create the initialization lock (lazy to avoid event loop issues)."""
        if self._init_lock is None:
            self._init_lock = asyncio.Lock()
        return self._init_lock

    async def _ensure_initialized(self) -> None:
        """Initialize database schema once."""
        if self._initialized:
            return
        async with self._get_lock():
            if self._initialized:
                return
            if self._db_path == ":memory:":
                self._persistent_conn = await aiosqlite.connect(":memory:")
                await self._persistent_conn.executescript(_SCHEMA)
            else:
                async with aiosqlite.connect(self._db_path) as db:
                    await db.execute("PRAGMA journal_mode=WAL")
                    await db.executescript(_SCHEMA)
            logger.debug("Reporting schema ready at %s", self._db_path)
            self._initialized = True

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get a database connection."""
        await self._ensure_initialized()
        if self._db_path == ":memory:":
            if self._persistent_conn is None:
                raise RuntimeError("Memory database connection not initialized")
            return self._persistent_conn
        return await aiosqlite.connect(self._db_path)

    async def _release(self, db: aiosqlite.Connection) -> None:
        if self._db_path != ":memory:":
            await db.close()

    async def add_message(self, user_id: str, event: MessageEvent) -> None:
        """Insert a message event for a user."""
        db = await self._get_connection()
        try:
            await db.execute(
                _INSERT_MESSAGE,
                (
                    event.id,
                    user_id,
                    event.session_id,
                    event.sender,
                    event.text,
                    format_instant(event.occurred_at),
                ),
            )
            await db.commit()
        finally:
            await self._release(db)

    async def add_lead(self, user_id: str, lead: LeadRecord) -> None:
        """Insert a lead for a user."""
        db = await self._get_connection()
        try:
            await db.execute(
                _INSERT_LEAD,
                (
                    lead.id,
                    user_id,
                    lead.name,
                    lead.email,
                    lead.phone,
                    lead.message,
                    lead.source,
                    format_instant(lead.occurred_at),
                ),
            )
            await db.commit()
        finally:
            await self._release(db)

    async def messages(self, user_id: str) -> AsyncIterable[MessageEvent]:
        """Read a user's messages ordered by created_at ascending."""
        db = await self._get_connection()
        try:
            async with db.execute(_SELECT_MESSAGES, (user_id,)) as cursor:
                async for row in cursor:
                    yield MessageEvent.from_row(
                        {
                            "id": row[0],
                            "session_id": row[1],
                            "sender": row[2],
                            "message": row[3],
                            "created_at": row[4],
                        },
                        self._default_tz,
                    )
        finally:
            await self._release(db)

    async def leads(self, user_id: str) -> AsyncIterable[LeadRecord]:
        """Read a user's leads in insertion order."""
        db = await self._get_connection()
        try:
            async with db.execute(_SELECT_LEADS, (user_id,)) as cursor:
                async for row in cursor:
                    yield LeadRecord.from_row(
                        {
                            "id": row[0],
                            "name": row[1],
                            "email": row[2],
                            "phone": row[3],
                            "message": row[4],
                            "source": row[5],
                            "created_at": row[6],
                        },
                        self._default_tz,
                    )
        finally:
            await self._release(db)

    async def close(self) -> None:
        """Close persistent connection (for :memory: databases)."""
        if self._persistent_conn is not None:
            await self._persistent_conn.close()
            self._persistent_conn = None
            self._initialized = False
