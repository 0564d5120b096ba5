from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from ..core.errors import SignalValidationError
from .schema import Signal


def _strip_code_fences(text: str) -> str:
    if "```" not in text:
        return text.strip()
    return text.replace("```json", "").replace("```", "").strip()


def _loads_object(text: str | None) -> dict[str, Any]:
    """Parse the response as a JSON object; anything else counts as no fields at all."""
    if not text:
        return {}
    try:
        data = json.loads(_strip_code_fences(text))
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def local_timestamp(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return now.strftime("%I:%M:%S %p").lstrip("0")


def parse_signal(text: str | None, *, now: datetime | None = None) -> Signal:
    """Raw response text -> Signal stamped with local time.

    All of type, confidence, timeframe, validity and reasoning must be present
    and valid; otherwise SignalValidationError is raised and no Signal exists.
    A timestamp supplied by the service is discarded.
    """
    data = _loads_object(text)
    data.pop("timestamp", None)

    try:
        return Signal.model_validate({**data, "timestamp": local_timestamp(now)})
    except ValidationError as e:
        missing = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise SignalValidationError(f"invalid signal fields: {', '.join(missing)}") from e
