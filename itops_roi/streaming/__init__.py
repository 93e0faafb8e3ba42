"""SSE streaming of calculator session changes."""

from .events import SessionEventType, SSEEvent
from .manager import StreamManager

__all__ = ["SessionEventType", "SSEEvent", "StreamManager"]
