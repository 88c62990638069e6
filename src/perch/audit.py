"""Route-table and session audit events.

Opt-in event channel for the navigation lifecycle. Event names:

- ``routes.installed`` / ``routes.reset``: ``names`` holds the top-level
  route names added or removed, sorted.
- ``guard.install.failed``: ``path`` is the navigation target that
  triggered the install; ``error`` or ``details["code"]`` says why.
- ``auth.logout.success`` / ``auth.logout.failed``: ``error`` is set on
  failure.
"""

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from time import time
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True)
class AuditEvent:
    """One navigation lifecycle event."""

    name: str
    timestamp: float = field(default_factory=time)
    path: str | None = None
    names: tuple[str, ...] = ()
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return self.error is not None or self.name.endswith(".failed")


AuditEventSink: TypeAlias = Callable[[AuditEvent], None]


_sink_lock = threading.Lock()
_sink: AuditEventSink | None = None


def set_audit_event_sink(sink: AuditEventSink | None) -> None:
    """Install the process-wide sink, or ``None`` to stop delivery."""
    global _sink
    with _sink_lock:
        _sink = sink


def emit_audit_event(
    name: str,
    *,
    path: str | None = None,
    names: Iterable[str] = (),
    error: BaseException | str | None = None,
    details: dict[str, Any] | None = None,
) -> None:
    """Deliver an event to the sink, if one is set."""
    with _sink_lock:
        sink = _sink
    if sink is None:
        return

    sink(
        AuditEvent(
            name=name,
            path=path,
            names=tuple(sorted(names)),
            error=str(error) if error is not None else None,
            details=details or {},
        )
    )
