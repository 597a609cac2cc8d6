"""Runtime trace infrastructure for endpoint loading.

Trace is runtime infrastructure - it does not take part in results.
Parent ids are passed explicitly because parallel branches interleave on
the event loop, so there is no single "current" node to nest under.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """One recorded loading event (e.g. "request_begin", "parallel_end")."""

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)
    duration_ms: float | None = None


class Trace:
    """Collects Evidence while a tree is being loaded.

    Performance guarantees:
    - Trace disabled -> single check overhead
    - Evidence append is O(1)
    - No tree construction during execution
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
        duration_ms: float | None = None,
    ) -> int | None:
        """Append one event.

        Args:
            action: What happened (e.g., "request_begin", "parallel_end")
            info: Additional context
            parent_id: Event id of the enclosing node, if any
            duration_ms: How long the traced step took

        Returns:
            The new event id, to pass as `parent_id` of nested events;
            None when tracing is disabled
        """
        if not self.enabled:
            return None

        event_id = self._next_id
        self._next_id += 1
        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                parent_id=parent_id,
                timestamp=datetime.now(UTC),
                info=info or {},
                duration_ms=duration_ms,
            )
        )
        return event_id

    def get_events(self) -> list[Evidence]:
        return list(self._events)

    def find_all(self, action: str) -> list[Evidence]:
        return [ev for ev in self._events if ev.action == action]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Group event ids by the id of the event they are nested under.

        Returns:
            Mapping of parent id (None for top-level events) to child ids,
            in recording order
        """
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        self._events.clear()
        self._next_id = 0
