"""Coercion engine: casts the loosely-typed fields of a record.

Typical use after loading a row whose values all came back as strings::

    product = cast(row, {
        "rewriteFields": True,
        "stringsToNumbers": True,
        "deepCasters": {"prices": {"stringsToNumbers": True}},
    })

Per field, in order:

1. Blank values pass through: ``None``, ``""``, ``False``, zero and NaN.
2. Fields the schema skips, or (with ``only_schema`` and a schema) does not
   name, pass through.
3. Non-empty strings go through the string heuristics
   (number, date, boolean, object); a type forced by the schema makes its
   heuristic eligible regardless of toggles and length gates.
4. Mappings and lists with a registered deep caster are cast recursively.
5. Other values are cast to the type the schema forces, when supported.

Nothing in this path raises for record content: a value that cannot be
converted is left as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, MutableMapping
from typing import Any

from fieldcast.caster.heuristics import cast_forced, cast_string, is_blank
from fieldcast.core.types import Record
from fieldcast.models.options import CasterOptions, resolve_options
from fieldcast.models.schema import RuleKind

logger = logging.getLogger(__name__)


class Caster:
    """Engine bound to one set of resolved options."""

    def __init__(self, options: CasterOptions | Mapping[str, Any] | None = None) -> None:
        self._options = resolve_options(options)
        self._children: dict[str, Caster] = {}

    @property
    def options(self) -> CasterOptions:
        return self._options

    def cast(self, record: Any) -> Any:
        """Cast ``record``; anything that is not a mapping is returned unchanged."""
        if not isinstance(record, Mapping):
            logger.debug("Skipping non-mapping record of type %s", type(record).__name__)
            return record

        opts = self._options
        if not (opts.heuristics_enabled or opts.field_rules or opts.deep_casters):
            return self._assemble(record, {})

        casted: dict[str, Any] = {}
        for key, value in record.items():
            new_value = self._cast_field(key, value)
            if new_value is not None:
                casted[key] = new_value

        if casted:
            logger.debug("Cast %d of %d fields: %s", len(casted), len(record), sorted(casted))
        return self._assemble(record, casted)

    def cast_many(self, records: Iterable[Any]) -> list[Any]:
        return [self.cast(record) for record in records]

    # ---- per-field steps ----

    def _cast_field(self, key: str, value: Any) -> Any:
        """Return the coerced value for one field, or None to keep the original."""
        if is_blank(value):
            return None

        opts = self._options
        rule = opts.rule_for(key)
        if rule is not None and rule.kind is RuleKind.SKIP:
            return None
        if opts.only_schema and opts.field_rules is not None and rule is None:
            return None
        forced = rule.forced if rule is not None else None

        if isinstance(value, str):
            return cast_string(value, opts, forced)

        child = self._child(key)
        if child is not None and isinstance(value, (Mapping, list, tuple)):
            if isinstance(value, Mapping):
                return child.cast(value)
            return [child.cast(item) for item in value]

        if forced is not None:
            return cast_forced(value, forced)
        return None

    def _child(self, key: str) -> Caster | None:
        if key in self._children:
            return self._children[key]
        nested = self._options.deep_caster_for(key)
        if nested is None:
            return None
        child = self._children[key] = Caster(nested)
        return child

    def _assemble(self, record: Record, casted: dict[str, Any]) -> Any:
        if self._options.rewrite_fields and isinstance(record, MutableMapping):
            record.update(casted)
            return record
        result = dict(record)
        result.update(casted)
        return result


def cast(record: Any, options: CasterOptions | Mapping[str, Any] | None = None) -> Any:
    """Cast one record with the given (possibly partial) options.

    Raises:
        InvalidOptionsError: If ``options`` cannot be resolved.
    """
    return Caster(options).cast(record)


def cast_many(records: Iterable[Any], options: CasterOptions | Mapping[str, Any] | None = None) -> list[Any]:
    """Cast several records, resolving ``options`` once."""
    return Caster(options).cast_many(records)
