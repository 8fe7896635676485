"""Protocol interfaces for fieldcast abstractions.

Record sources and casters are plugged together through these Protocols:
structural typing, no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from fieldcast.core.types import Record


# ---------------------------------------------------------------------------
# Upstream: Record Source
# ---------------------------------------------------------------------------

@runtime_checkable
class IRecordSource(Protocol):
    """A data-access layer returning raw, loosely-typed records."""

    def get(self, key: str) -> dict[str, Any] | None: ...

    def query(self, partition: str) -> list[dict[str, Any]]: ...


# ---------------------------------------------------------------------------
# Caster
# ---------------------------------------------------------------------------

@runtime_checkable
class ICaster(Protocol):
    """Anything that coerces a record given bound options."""

    def cast(self, record: Record) -> Any: ...
