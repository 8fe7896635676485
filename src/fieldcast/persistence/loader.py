"""Casting loader: runs the caster on every record a source returns."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fieldcast.caster.engine import Caster
from fieldcast.core.exceptions import RecordNotFoundError
from fieldcast.core.protocols import IRecordSource
from fieldcast.models.options import CasterOptions

logger = logging.getLogger(__name__)


class CastingLoader:
    """Post-load hook pairing a record source with caster options.

    Options are resolved once at construction, so an invalid configuration
    fails when the loader is wired rather than on the first read.
    """

    def __init__(
        self,
        source: IRecordSource,
        options: CasterOptions | Mapping[str, Any] | None = None,
    ) -> None:
        self._source = source
        self._caster = Caster(options)

    @property
    def options(self) -> CasterOptions:
        return self._caster.options

    def load(self, key: str) -> dict[str, Any] | None:
        record = self._source.get(key)
        if record is None:
            logger.debug("No record for key=%r in %s", key, type(self._source).__name__)
            return None
        return self._caster.cast(record)

    def require(self, key: str) -> dict[str, Any]:
        record = self.load(key)
        if record is None:
            raise RecordNotFoundError(key, type(self._source).__name__)
        return record

    def load_many(self, partition: str) -> list[dict[str, Any]]:
        return self._caster.cast_many(self._source.query(partition))
