from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

# ----------------------------
# Trading signal (Vision)
# ----------------------------
SignalType = Literal["BUY", "SELL"]


class Signal(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    type: SignalType
    confidence: float  # percent, 0-100 advisory
    timeframe: str
    validity: str
    reasoning: str

    # local time of acceptance, never taken from the model output
    timestamp: str

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v
