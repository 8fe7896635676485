"""Type aliases used across fieldcast."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

Record = Mapping[str, Any]
JsonDict = dict[str, Any]
