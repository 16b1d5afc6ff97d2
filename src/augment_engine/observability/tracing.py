"""Per-turn timing: one TurnTrace spans a check and its confirmation."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from uuid import uuid4


@dataclass
class Span:
    name: str
    start_ms: float
    end_ms: float = 0.0
    failed: bool = False
    metadata: dict = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        return self.end_ms - self.start_ms


class TurnTrace:
    def __init__(self, turn_id: str | None = None, clock=time.monotonic) -> None:
        self.turn_id = turn_id or uuid4().hex[:12]
        self.spans: list[Span] = []
        self._clock = clock
        self._started = clock()

    def _offset_ms(self) -> float:
        return (self._clock() - self._started) * 1000

    @contextmanager
    def span(self, name: str, **metadata):
        """Time the enclosed block; a span whose block raises is marked failed."""
        current = Span(name=name, start_ms=self._offset_ms(), metadata=metadata)
        try:
            yield current
        except BaseException:
            current.failed = True
            raise
        finally:
            current.end_ms = self._offset_ms()
            self.spans.append(current)

    @property
    def elapsed_ms(self) -> float:
        return self._offset_ms()

    def summary(self) -> dict[str, float]:
        """Span name to rounded duration, with failed spans suffixed ``!``."""
        return {
            (s.name + "!" if s.failed else s.name): round(s.duration_ms, 2) for s in self.spans
        }
