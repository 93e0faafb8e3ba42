"""StreamManager — per-session event buffering and SSE subscriber management."""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Any, AsyncGenerator

from .events import SessionEventType, SSEEvent

DEFAULT_BUFFER_SIZE = 200


class StreamManager:
    """Fans session events out to SSE subscribers.

    Per session it keeps the live subscriber queues, a bounded replay buffer
    holding the most recent `buffer_size` events, and the next sequence id.
    A stream ends once it has delivered SESSION_CLOSED.
    """

    def __init__(self, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        self._buffer_size = buffer_size
        self._subscribers: dict[str, list[asyncio.Queue[SSEEvent]]] = {}
        self._buffers: dict[str, deque[SSEEvent]] = {}
        self._sequences: dict[str, int] = {}

    @property
    def buffer_size(self) -> int:
        return self._buffer_size

    async def subscribe(self, session_id: str) -> asyncio.Queue[SSEEvent]:
        queue: asyncio.Queue[SSEEvent] = asyncio.Queue()
        self._subscribers.setdefault(session_id, []).append(queue)
        return queue

    async def unsubscribe(self, session_id: str, queue: asyncio.Queue[SSEEvent]) -> None:
        subs = self._subscribers.get(session_id)
        if subs is None:
            return
        if queue in subs:
            subs.remove(queue)
        if not subs:
            del self._subscribers[session_id]

    async def emit(self, session_id: str, event: SSEEvent) -> None:
        """Buffer an event for replay and hand it to every live subscriber."""
        buffer = self._buffers.get(session_id)
        if buffer is None:
            buffer = self._buffers[session_id] = deque(maxlen=self._buffer_size)
        buffer.append(event)
        for queue in self._subscribers.get(session_id, []):
            await queue.put(event)

    async def publish(
        self, session_id: str, event_type: SessionEventType, data: dict[str, Any]
    ) -> SSEEvent:
        """Build an event with the session's next sequence id and emit it."""
        sequence_id = self._sequences.get(session_id, 0) + 1
        self._sequences[session_id] = sequence_id
        event = SSEEvent(
            event_type=event_type,
            data={"session_id": session_id, **data},
            sequence_id=sequence_id,
        )
        await self.emit(session_id, event)
        return event

    def buffered(self, session_id: str) -> list[SSEEvent]:
        return list(self._buffers.get(session_id, ()))

    def subscriber_count(self, session_id: str) -> int:
        return len(self._subscribers.get(session_id, []))

    def discard(self, session_id: str) -> None:
        """Drop all bookkeeping for a closed session.

        Open generators keep their own queue and drain it before ending.
        """
        self._buffers.pop(session_id, None)
        self._sequences.pop(session_id, None)
        self._subscribers.pop(session_id, None)

    async def event_generator(
        self, session_id: str, last_event_id: int | None = None
    ) -> AsyncGenerator[str, None]:
        """Yield SSE strings for a session until it is closed.

        With last_event_id, buffered events after that id are replayed first.
        Events queued while the replay ran are not sent a second time.
        """
        queue = await self.subscribe(session_id)
        last_sent = last_event_id if last_event_id is not None else 0
        try:
            # SSE comment as connection heartbeat (ignored by browsers)
            yield ": connected\n\n"

            if last_event_id is not None:
                for event in list(self._buffers.get(session_id, ())):
                    if event.sequence_id > last_sent:
                        last_sent = event.sequence_id
                        yield event.to_sse_string()
                        if event.event_type is SessionEventType.SESSION_CLOSED:
                            return

            while True:
                event = await queue.get()
                if event.sequence_id <= last_sent:
                    continue
                last_sent = event.sequence_id
                yield event.to_sse_string()
                if event.event_type is SessionEventType.SESSION_CLOSED:
                    return
        finally:
            await self.unsubscribe(session_id, queue)
