from __future__ import annotations

from typing import Optional, Protocol

from openai import AsyncOpenAI

from .request import SignalRequest


class InferenceClient(Protocol):
    async def analyze(self, request: SignalRequest) -> Optional[str]: ...


class OpenAIInferenceClient:
    """One non-streamed vision completion per analysis."""

    def __init__(self, model: str, api_key: str | None = None):
        self.model = model
        self.api_key = api_key or None

    async def analyze(self, request: SignalRequest) -> Optional[str]:
        client = AsyncOpenAI(api_key=self.api_key)

        resp = await client.chat.completions.create(
            model=self.model,
            messages=request.to_messages(),
            temperature=0,
            response_format=request.response_format(),
        )
        if not resp.choices:
            return None
        return resp.choices[0].message.content
