from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from ..core.errors import InputMissing
from .prompt import INSTRUCTION, SCHEMA_NAME, SIGNAL_SCHEMA


class SignalRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    image_b64: str
    mime_type: str = "image/png"
    instruction: str = INSTRUCTION
    schema_name: str = SCHEMA_NAME
    output_schema: dict[str, Any] = SIGNAL_SCHEMA

    @property
    def image_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.image_b64}"

    def to_messages(self) -> list[dict[str, Any]]:
        return [
            {
                "role": "user",
                "content": [
                    {"type": "image_url", "image_url": {"url": self.image_url}},
                    {"type": "text", "text": self.instruction},
                ],
            },
        ]

    def response_format(self) -> dict[str, Any]:
        return {
            "type": "json_schema",
            "json_schema": {
                "name": self.schema_name,
                "schema": self.output_schema,
                "strict": True,
            },
        }


def _base64_payload(data_uri: str) -> str:
    head, sep, payload = data_uri.partition(",")
    return payload if sep else head


def build_signal_request(image: str | None) -> SignalRequest:
    """Wrap the loaded data-URI image into the one fixed analysis request.

    Raises InputMissing when no image is loaded.
    """
    if not image:
        raise InputMissing()
    return SignalRequest(image_b64=_base64_payload(image))
