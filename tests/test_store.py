"""Tests for the in-memory session store and the events it publishes."""

import asyncio

import pytest

from itops_roi.session.errors import SessionNotFoundError
from itops_roi.session.store import SessionStore
from itops_roi.streaming.events import SessionEventType
from itops_roi.streaming.manager import StreamManager


class TestSessionStore:
    @pytest.mark.asyncio
    async def test_create_and_get(self, fast_settings):
        store = SessionStore(settings=fast_settings)
        session = await store.create()
        assert store.get(session.session_id) is session
        assert session.session_id in store
        assert len(store) == 1

    def test_get_missing_raises(self, fast_settings):
        store = SessionStore(settings=fast_settings)
        with pytest.raises(SessionNotFoundError, match="not found"):
            store.get("missing")

    @pytest.mark.asyncio
    async def test_close_removes_session(self, fast_settings):
        store = SessionStore(settings=fast_settings)
        session = await store.create()
        await store.close(session.session_id)
        assert session.session_id not in store
        with pytest.raises(SessionNotFoundError):
            await store.close(session.session_id)

    @pytest.mark.asyncio
    async def test_lifecycle_events(self, fast_settings):
        streams = StreamManager()
        store = SessionStore(stream_manager=streams, settings=fast_settings)
        session = await store.create()
        await session.update_use_case("Incident Management", "selected", True)
        await session.settle()

        types = [e.event_type for e in streams.buffered(session.session_id)]
        assert types == [
            SessionEventType.SESSION_CREATED,
            SessionEventType.INPUT_CHANGED,
            SessionEventType.RECALCULATION_SCHEDULED,
            SessionEventType.RECALCULATION_COMPLETED,
        ]
        ids = [e.sequence_id for e in streams.buffered(session.session_id)]
        assert ids == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_close_ends_live_stream(self, fast_settings):
        streams = StreamManager()
        store = SessionStore(stream_manager=streams, settings=fast_settings)
        session = await store.create()
        gen = streams.event_generator(session.session_id)
        assert await gen.__anext__() == ": connected\n\n"

        await store.close(session.session_id)
        closed = await asyncio.wait_for(gen.__anext__(), timeout=1.0)
        assert "session_closed" in closed
        with pytest.raises(StopAsyncIteration):
            await asyncio.wait_for(gen.__anext__(), timeout=1.0)
        assert streams.subscriber_count(session.session_id) == 0
        assert streams.buffered(session.session_id) == []

    @pytest.mark.asyncio
    async def test_many_edits_keep_buffer_bounded(self, fast_settings):
        streams = StreamManager(buffer_size=50)
        store = SessionStore(stream_manager=streams, settings=fast_settings)
        session = await store.create()
        for i in range(200):
            await session.update_use_case("Incident Management", "ftes", str(i))
        await session.settle()
        assert len(streams.buffered(session.session_id)) == 50

    @pytest.mark.asyncio
    async def test_idle_sessions_evicted(self, fast_settings):
        settings = fast_settings.model_copy(update={"session_idle_timeout_seconds": 60})
        store = SessionStore(settings=settings)
        stale = await store.create()
        fresh = await store.create()
        stale.last_active -= 120

        evicted = await store.evict_idle()
        assert evicted == [stale.session_id]
        assert stale.session_id not in store
        assert fresh.session_id in store

    @pytest.mark.asyncio
    async def test_create_evicts_idle_sessions(self, fast_settings):
        settings = fast_settings.model_copy(update={"session_idle_timeout_seconds": 60})
        store = SessionStore(settings=settings)
        stale = await store.create()
        stale.last_active -= 120
        await store.create()
        assert stale.session_id not in store
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_get_counts_as_activity(self, fast_settings):
        store = SessionStore(settings=fast_settings)
        session = await store.create()
        session.last_active -= 120
        store.get(session.session_id)
        assert session.idle_for() < 60
