"""Image intake: turn an uploaded file into a preview data URL and an inline payload.

Nothing here validates the image; the page's file picker only offers images and
anything it lets through is passed on to the model as-is.
"""

from __future__ import annotations

import asyncio
import base64
import io
import mimetypes
import re
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[^;,]*)(?P<params>(;[^;,]*)*?);base64,(?P<payload>.*)$", re.DOTALL)

_GENERIC_TYPES = {"", "application/octet-stream", "binary/octet-stream"}
_FALLBACK_MIME = "image/jpeg"


def encode_data_url(data: bytes, mime_type: str) -> str:
    """Base64-encode bytes as a ``data:<mime>;base64,...`` URL."""
    b64 = base64.standard_b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{b64}"


def split_data_url(data_url: str) -> tuple[str, str]:
    """Strip the data-URL header. Returns (mime_type, base64 payload)."""
    m = _DATA_URL_RE.match(data_url)
    if not m:
        raise ValueError("Not a base64 data URL")
    return m.group("mime"), m.group("payload")


def decode_data_url(data_url: str) -> bytes:
    _, payload = split_data_url(data_url)
    return base64.standard_b64decode(payload)


def _sniff_mime(data: bytes) -> str | None:
    try:
        with Image.open(io.BytesIO(data)) as img:
            return Image.MIME.get(img.format or "")
    except (UnidentifiedImageError, OSError):
        return None


def resolve_mime_type(data: bytes, content_type: str | None, filename: str | None) -> str:
    """Declared type wins; otherwise sniff the bytes, then guess from the filename."""
    declared = (content_type or "").split(";", 1)[0].strip().lower()
    if declared not in _GENERIC_TYPES:
        return declared
    sniffed = _sniff_mime(data)
    if sniffed:
        return sniffed
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return _FALLBACK_MIME


@dataclass(frozen=True)
class ImageSelection:
    """The currently selected file and its preview encoding."""

    filename: str
    mime_type: str
    data: bytes
    preview: str  # data URL, reused verbatim as the transmission encoding

    @classmethod
    def from_upload(cls, data: bytes, content_type: str | None, filename: str | None) -> "ImageSelection":
        mime = resolve_mime_type(data, content_type, filename)
        return cls(
            filename=filename or "upload",
            mime_type=mime,
            data=data,
            preview=encode_data_url(data, mime),
        )

    def inline_payload(self) -> tuple[str, str]:
        """(mime_type, base64 payload) with the data-URL header stripped."""
        return split_data_url(self.preview)

    @property
    def size(self) -> int:
        return len(self.data)


async def read_upload(data: bytes, content_type: str | None, filename: str | None) -> ImageSelection:
    """Encode off the event loop; large photos take a moment to base64."""
    return await asyncio.to_thread(ImageSelection.from_upload, data, content_type, filename)
