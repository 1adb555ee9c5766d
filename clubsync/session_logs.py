"""
Per-session progress logs for long-running imports, readable by polling or
as a server-sent event stream.
"""
import asyncio
import threading
import time
from datetime import datetime
from typing import AsyncIterator, Dict, List, Optional

from loguru import logger

from clubsync.config import LOG_POLL_INTERVAL, LOG_SESSION_TTL, SSE_RETRY_MS
from clubsync.models import LogEntry


class SessionLogStore:
    """
    Thread-safe, append-only log lines keyed by a caller-supplied session id.

    A session is created by its first append and expires `ttl` seconds later,
    or when cleared explicitly.
    """

    def __init__(self, ttl: float = LOG_SESSION_TTL):
        self.ttl = ttl
        self._lock = threading.Lock()
        self._sessions: Dict[str, List[LogEntry]] = {}
        self._created: Dict[str, float] = {}

    def append(self, session_id: Optional[str], message: str) -> None:
        """Append a line; a missing session id is a no-op."""
        if not session_id:
            return
        with self._lock:
            if session_id not in self._sessions:
                self._sessions[session_id] = []
                self._created[session_id] = time.monotonic()
            self._sessions[session_id].append(LogEntry(timestamp=datetime.now(), message=message))

    def read(self, session_id: Optional[str], since: int = 0) -> List[LogEntry]:
        """Return a copy of the entries from index `since` onwards."""
        if not session_id:
            return []
        with self._lock:
            return list(self._sessions.get(session_id, [])[since:])

    def clear(self, session_id: Optional[str]) -> None:
        if not session_id:
            return
        with self._lock:
            self._sessions.pop(session_id, None)
            self._created.pop(session_id, None)

    def expire(self, now: Optional[float] = None) -> List[str]:
        """
        Drop sessions older than the TTL.

        Args:
            now (Optional[float]): Monotonic clock reading; defaults to now.

        Returns:
            List[str]: Ids of the expired sessions.
        """
        now = time.monotonic() if now is None else now
        with self._lock:
            expired = [sid for sid, created in self._created.items() if now - created >= self.ttl]
            for sid in expired:
                self._sessions.pop(sid, None)
                self._created.pop(sid, None)
        if expired:
            logger.debug(f"🧹 Expired {len(expired)} log session(s)")
        return expired

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions


async def stream_session_logs(
    store: SessionLogStore,
    session_id: str,
    poll_interval: float = LOG_POLL_INTERVAL,
    duration: float = LOG_SESSION_TTL,
) -> AsyncIterator[str]:
    """
    Yield server-sent event frames for new lines of one session.

    Polls the store every `poll_interval` seconds and stops after `duration`
    seconds, clearing the session on the way out.

    Args:
        store (SessionLogStore): Log store to read from.
        session_id (str): Session to follow.
        poll_interval (float): Seconds between polls.
        duration (float): Seconds before the stream closes.

    Yields:
        str: "retry: ..." first, then one "data: ..." frame per log line.
    """
    yield f"retry: {SSE_RETRY_MS}\n"
    last_index = 0
    loop = asyncio.get_running_loop()
    deadline = loop.time() + duration
    try:
        while True:
            for entry in store.read(session_id, since=last_index):
                last_index += 1
                yield f"data: {entry.message}\n\n"
            if loop.time() >= deadline:
                break
            await asyncio.sleep(poll_interval)
    finally:
        store.clear(session_id)
        store.expire()
