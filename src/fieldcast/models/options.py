"""Caster options: the immutable configuration a coercion call runs with.

Options are usually built from a partial mapping, e.g. straight from a
request body or a repository's post-load hook::

    opts = CasterOptions.model_validate({
        "rewriteFields": True,
        "stringsToNumbers": True,
        "deepCasters": {"prices": {"stringsToNumbers": True}},
    })

Every field is also accepted under its snake_case name. ``enable_all`` is
expanded once, while the model is being validated, and wins over any
heuristic toggle given alongside it.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from fieldcast.core.config import get_settings
from fieldcast.core.exceptions import InvalidOptionsError
from fieldcast.models.schema import FieldRule

# (\d{4}-\d{2}-\d{2}): yyyy-mm-dd
# (?:T\d{2}:\d{2}:\d{2}Z)?: optional THH:MM:SSZ suffix
# (?:\d{2}-\d{2}-(?:\d{2}|\d{4})): dd-mm-yy or dd-mm-yyyy
DATES_MATCH_REGEX_DEFAULT: tuple[re.Pattern[str], ...] = (
    re.compile(r"^(?:(\d{4}-\d{2}-\d{2})(?:T\d{2}:\d{2}:\d{2}Z)?)|(?:\d{2}-\d{2}-(?:\d{2}|\d{4}))$"),
)

HEURISTIC_TOGGLES = (
    "strings_to_numbers",
    "strings_to_dates",
    "strings_to_booleans",
    "strings_to_objects",
)
_TOGGLE_KEYS = frozenset(HEURISTIC_TOGGLES) | {to_camel(name) for name in HEURISTIC_TOGGLES}


class CasterOptions(BaseModel):
    """Default caster options: every heuristic off, no schema."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    # shortcut that turns every heuristic toggle on
    enable_all: bool = False
    # only fields named in the schema are eligible for coercion
    only_schema: bool = False
    # write coerced fields onto the input instead of returning a copy
    rewrite_fields: bool = False

    strings_to_numbers: bool = False
    # longer strings are never tried as numbers (ids, phone numbers, ...)
    number_max_chars: int = Field(default_factory=lambda: get_settings().caster.number_max_chars, ge=0)

    strings_to_dates: bool = False
    # a string must match one of these before it is parsed as a date
    dates_match_regex: tuple[re.Pattern[str], ...] = DATES_MATCH_REGEX_DEFAULT
    # strptime formats tried when ISO-8601 parsing fails
    date_formats: tuple[str, ...] = Field(default_factory=lambda: get_settings().caster.date_formats)

    # only "true" and "false", case-insensitive
    strings_to_booleans: bool = False
    # JSON text holding an object or array
    strings_to_objects: bool = False

    field_rules: Optional[dict[str, FieldRule]] = Field(default=None, alias="schema")
    # nested options, keyed by the field holding a child record or a list of them
    deep_casters: Optional[dict[str, CasterOptions]] = None

    @model_validator(mode="before")
    @classmethod
    def _expand_enable_all(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        if not (data.get("enable_all") or data.get("enableAll")):
            return data
        expanded = {key: value for key, value in data.items() if key not in _TOGGLE_KEYS}
        expanded.update(dict.fromkeys(HEURISTIC_TOGGLES, True))
        return expanded

    @field_validator("field_rules", mode="before")
    @classmethod
    def _parse_schema(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {key: FieldRule.parse(rule) for key, rule in value.items()}
        return value

    @field_serializer("field_rules")
    def _dump_schema(self, value: Optional[dict[str, FieldRule]]) -> Optional[dict[str, bool | str]]:
        if value is None:
            return None
        return {key: rule.to_raw() for key, rule in value.items()}

    @property
    def heuristics_enabled(self) -> bool:
        """Whether any string heuristic runs without a schema forcing it."""
        return any(getattr(self, name) for name in HEURISTIC_TOGGLES)

    def rule_for(self, field: str) -> Optional[FieldRule]:
        """The schema rule for ``field``, or None when it is not in the schema."""
        if self.field_rules is None:
            return None
        return self.field_rules.get(field)

    def deep_caster_for(self, field: str) -> Optional[CasterOptions]:
        if self.deep_casters is None:
            return None
        return self.deep_casters.get(field)


def resolve_options(options: CasterOptions | Mapping[str, Any] | None = None) -> CasterOptions:
    """Turn whatever the caller passed into effective caster options.

    Raises:
        InvalidOptionsError: If ``options`` is not a mapping or fails validation.
    """
    if options is None:
        return CasterOptions()
    if isinstance(options, CasterOptions):
        return options
    if not isinstance(options, Mapping):
        raise InvalidOptionsError(
            f"caster options must be a mapping or CasterOptions, got {type(options).__name__}"
        )
    try:
        return CasterOptions.model_validate(dict(options))
    except ValidationError as exc:
        raise InvalidOptionsError(f"invalid caster options: {exc}") from exc
