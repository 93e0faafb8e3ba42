"""SSE event types and serialization for calculator sessions."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class SessionEventType(str, Enum):
    """All event types emitted over the life of a calculator session."""

    SESSION_CREATED = "session_created"
    SESSION_CLOSED = "session_closed"

    INPUT_CHANGED = "input_changed"

    RECALCULATION_SCHEDULED = "recalculation_scheduled"
    RECALCULATION_COMPLETED = "recalculation_completed"


@dataclass
class SSEEvent:
    """A single Server-Sent Event ready for wire serialization."""

    event_type: SessionEventType
    data: dict[str, Any]
    sequence_id: int
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))

    def to_sse_string(self) -> str:
        """Serialize to SSE wire format.

        Format:
            event: <type>
            data: <json>
            id: <seq>

            (terminated by double newline)
        """
        payload = {
            **self.data,
            "timestamp": self.timestamp.isoformat(),
        }
        data_json = json.dumps(payload, default=str)
        return f"event: {self.event_type.value}\ndata: {data_json}\nid: {self.sequence_id}\n\n"
