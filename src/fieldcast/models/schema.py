"""Per-field schema models: target type tags and field rules."""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel


class SchemaTag(StrEnum):
    """Target types a schema can force a field into."""

    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    OBJECT = "object"


class RuleKind(StrEnum):
    SKIP = "skip"  # schema value False
    RECOGNIZE = "recognize"  # schema value True
    FORCE = "force"  # schema value is a SchemaTag


class FieldRule(BaseModel):
    """How the schema treats one field.

    Schemas arrive as ``{field: bool | tag}`` mappings; each value is
    normalized into one of three variants so the engine never has to
    inspect raw schema values:

    * ``False`` → :meth:`skip`: the field is never coerced.
    * ``True`` → :meth:`recognize`: the field is known, heuristics apply.
    * ``"number"`` etc. → :meth:`force`: the field is cast to that type.
    """

    kind: RuleKind
    target: Optional[SchemaTag] = None

    model_config = {"frozen": True}

    @classmethod
    def skip(cls) -> FieldRule:
        return cls(kind=RuleKind.SKIP)

    @classmethod
    def recognize(cls) -> FieldRule:
        return cls(kind=RuleKind.RECOGNIZE)

    @classmethod
    def force(cls, target: SchemaTag | str) -> FieldRule:
        return cls(kind=RuleKind.FORCE, target=SchemaTag(target))

    @classmethod
    def parse(cls, value: bool | str | FieldRule) -> FieldRule:
        """Normalize a raw schema value.

        Raises:
            ValueError: If ``value`` is neither a bool nor a known type tag.
        """
        if isinstance(value, FieldRule):
            return value
        if isinstance(value, bool):
            return cls.recognize() if value else cls.skip()
        if isinstance(value, str):
            try:
                return cls.force(value)
            except ValueError:
                pass
        allowed = ", ".join(tag.value for tag in SchemaTag)
        raise ValueError(f"schema value must be a bool or one of: {allowed}; got {value!r}")

    @property
    def forced(self) -> Optional[SchemaTag]:
        """The forced target type, or None for skip/recognize rules."""
        return self.target if self.kind is RuleKind.FORCE else None

    def to_raw(self) -> bool | str:
        """Inverse of :meth:`parse`."""
        if self.kind is RuleKind.FORCE:
            return str(self.target)
        return self.kind is RuleKind.RECOGNIZE
