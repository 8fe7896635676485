"""Schema-aware coercion of loosely-typed records."""

from __future__ import annotations

from fieldcast.caster.engine import Caster, cast, cast_many
from fieldcast.core.exceptions import FieldCastError, InvalidOptionsError
from fieldcast.models.options import DATES_MATCH_REGEX_DEFAULT, CasterOptions, resolve_options
from fieldcast.models.schema import FieldRule, RuleKind, SchemaTag

__all__ = [
    "DATES_MATCH_REGEX_DEFAULT",
    "Caster",
    "CasterOptions",
    "FieldCastError",
    "FieldRule",
    "InvalidOptionsError",
    "RuleKind",
    "SchemaTag",
    "cast",
    "cast_many",
    "resolve_options",
]
