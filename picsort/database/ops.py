import sqlite3
import logging
from datetime import datetime, UTC
from typing import Optional

from ..exceptions import DatabaseError
from ..models import Event

class EventStore:
    """
    Persists event time ranges so captures from later runs (or other
    people's cameras) can be matched to events sorted before.
    """
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get(self, name: str) -> Optional[Event]:
        cur = self.conn.cursor()
        cur.execute("SELECT name, begin_ts, end_ts FROM events WHERE name = ?", (name,))
        row = cur.fetchone()
        return Event(*row) if row else None

    def find_enclosing(self, instant: int, slack: int = 0) -> Optional[Event]:
        """
        Returns an event whose range (padded by slack seconds) contains instant.
        Prefers the most recently touched event, then the narrowest one.
        """
        try:
            cur = self.conn.cursor()
            cur.execute("""
                SELECT name, begin_ts, end_ts
                FROM events
                WHERE begin_ts - ? <= ? AND end_ts + ? >= ?
                ORDER BY updated_at DESC, (end_ts - begin_ts) ASC
                LIMIT 1
            """, (slack, instant, slack, instant))
            row = cur.fetchone()
        except sqlite3.Error as e:
            raise DatabaseError(f"Event lookup failed: {e}") from e
        return Event(*row) if row else None

    def widen(self, name: str, instant: int) -> Event:
        """
        Grows the named event so its range includes instant.
        Creates the event if it does not exist yet. Never narrows.
        """
        now_iso = datetime.now(UTC).isoformat()
        try:
            with self.conn:
                existing = self.get(name)
                if existing is None:
                    self.conn.execute("""
                        INSERT INTO events (name, begin_ts, end_ts, created_at, updated_at)
                        VALUES (?, ?, ?, ?, ?)
                    """, (name, instant, instant, now_iso, now_iso))
                    logging.debug(f"Created event '{name}'")
                else:
                    self.conn.execute("""
                        UPDATE events
                        SET begin_ts = MIN(begin_ts, ?), end_ts = MAX(end_ts, ?), updated_at = ?
                        WHERE name = ?
                    """, (instant, instant, now_iso, name))
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to update event '{name}': {e}") from e

        return self.get(name)
