"""fieldcast exception hierarchy."""

from __future__ import annotations


class FieldCastError(Exception):
    """Base exception for all fieldcast errors."""


class InvalidOptionsError(FieldCastError):
    """Caster options could not be resolved into a valid configuration."""


class RecordSourceError(FieldCastError):
    """A record backend operation failed."""


class RecordNotFoundError(FieldCastError):
    """A required record does not exist in the source."""

    def __init__(self, key: str, source: str = "") -> None:
        self.key = key
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Record {key!r} not found{where}")
