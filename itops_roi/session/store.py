"""In-memory registry of live calculator sessions."""

from __future__ import annotations

import logging
import time
from typing import Optional
from uuid import uuid4

from itops_roi.config.settings import Settings, get_settings
from itops_roi.engine.calculator import CalculationEngine
from itops_roi.streaming.events import SessionEventType
from itops_roi.streaming.manager import StreamManager

from .errors import SessionNotFoundError
from .state import CalculatorSession

logger = logging.getLogger(__name__)


class SessionStore:
    """Holds sessions in process memory; nothing survives a restart.

    Sessions idle for longer than `session_idle_timeout_seconds` are closed
    whenever a new session is created.
    """

    def __init__(
        self,
        stream_manager: Optional[StreamManager] = None,
        settings: Optional[Settings] = None,
        engine: Optional[CalculationEngine] = None,
    ):
        self._streams = stream_manager
        self._settings = settings or get_settings()
        self._engine = engine or CalculationEngine()
        self._sessions: dict[str, CalculatorSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    async def create(self) -> CalculatorSession:
        await self.evict_idle()
        session_id = str(uuid4())
        session = CalculatorSession(
            session_id,
            engine=self._engine,
            settings=self._settings,
            stream_manager=self._streams,
        )
        self._sessions[session_id] = session
        logger.info("Created calculator session %s", session_id)
        if self._streams is not None:
            await self._streams.publish(
                session_id, SessionEventType.SESSION_CREATED, {"results": session.result.to_dict()}
            )
        return session

    def get(self, session_id: str) -> CalculatorSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        session.touch()
        return session

    async def close(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFoundError(session_id)
        session.cancel_pending()
        logger.info("Closed calculator session %s", session_id)
        if self._streams is not None:
            await self._streams.publish(session_id, SessionEventType.SESSION_CLOSED, {})
            self._streams.discard(session_id)

    async def evict_idle(self, now: Optional[float] = None) -> list[str]:
        """Close every session idle past the timeout. Returns the evicted ids."""
        now = time.monotonic() if now is None else now
        timeout = self._settings.session_idle_timeout_seconds
        expired = [
            sid for sid, session in self._sessions.items() if session.idle_for(now) > timeout
        ]
        for sid in expired:
            logger.info("Evicting idle calculator session %s", sid)
            await self.close(sid)
        return expired
