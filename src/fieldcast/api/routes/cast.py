"""Cast endpoints: run the caster over records posted as JSON."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from fieldcast.caster.engine import Caster
from fieldcast.core.types import JsonDict
from fieldcast.models.options import CasterOptions

router = APIRouter(tags=["cast"])


class CastRequest(BaseModel):
    record: JsonDict
    options: Optional[CasterOptions] = None


class CastBatchRequest(BaseModel):
    records: list[JsonDict] = Field(default_factory=list)
    options: Optional[CasterOptions] = None


@router.post("/cast")
async def cast_record(request: CastRequest) -> JsonDict:
    """Return the record with its fields cast."""
    return Caster(request.options).cast(request.record)


@router.post("/cast/batch")
async def cast_records(request: CastBatchRequest) -> list[JsonDict]:
    """Cast every record with the same options."""
    return Caster(request.options).cast_many(request.records)
