from __future__ import annotations

INSTRUCTION = (
    "Act as a professional OTC trading expert. Analyze this chart for a 'SURE SHOT' signal. "
    "Predict if the next move is a BUY or SELL. Provide deep technical reasoning "
    "(support/resistance, candle patterns, trend) and a confidence score. "
    "Aim for the highest possible accuracy."
)

SIGNAL_SCHEMA = {
    "type": "object",
    "properties": {
        "type": {
            "type": "string",
            "description": "The signal type: BUY or SELL",
        },
        "confidence": {
            "type": "number",
            "description": "Confidence percentage (0-100)",
        },
        "timeframe": {
            "type": "string",
            "description": "The chart timeframe (e.g., 1M, 5M)",
        },
        "validity": {
            "type": "string",
            "description": "How long the signal is valid (e.g., 5 min)",
        },
        "reasoning": {
            "type": "string",
            "description": "Technical analysis reasoning for the signal",
        },
    },
    "required": ["type", "confidence", "timeframe", "validity", "reasoning"],
    "additionalProperties": False,
}

SCHEMA_NAME = "trading_signal"
