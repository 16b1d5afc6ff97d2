"""Protocol for priority-ordered data providers."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Protocol

from augment_engine.models.domain import ExternalContext


class Provider(Protocol):
    """A data source for one domain. Lower ``priority`` is tried first."""

    name: str
    priority: int

    def supports(self, key: Hashable) -> bool: ...

    async def is_available(self) -> bool: ...

    async def fetch(self, key: Hashable) -> ExternalContext: ...
