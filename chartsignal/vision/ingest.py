from __future__ import annotations

import base64
import io
import mimetypes
from typing import Optional, Protocol

from PIL import Image, UnidentifiedImageError

UNKNOWN_MIME = "application/octet-stream"


class Upload(Protocol):
    filename: Optional[str]
    content_type: Optional[str]

    async def read(self, size: int = -1) -> bytes: ...


def to_data_uri(raw: bytes, mime_type: str | None) -> str:
    b64 = base64.b64encode(raw).decode("utf-8")
    return f"data:{mime_type or UNKNOWN_MIME};base64,{b64}"


def guess_mime_type(raw: bytes, filename: str | None = None) -> str:
    """
    Best guess at the MIME type of an upload:
    - Pillow's format detection for anything it can open
    - otherwise the filename extension
    - otherwise application/octet-stream
    Bytes are never rejected here.
    """
    try:
        with Image.open(io.BytesIO(raw)) as img:
            mime = img.get_format_mimetype()
        if mime:
            return mime
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError):
        pass

    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return UNKNOWN_MIME


async def read_as_data_uri(upload: Upload) -> str:
    raw = await upload.read()
    mime = upload.content_type
    if not mime or mime == UNKNOWN_MIME:
        mime = guess_mime_type(raw, upload.filename)
    return to_data_uri(raw, mime)
