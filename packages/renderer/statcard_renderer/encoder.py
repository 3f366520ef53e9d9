"""PNG serialization of finished canvases."""

from __future__ import annotations

import base64
from io import BytesIO

from PIL import Image

CONTENT_TYPE = "image/png"


class EncodeError(RuntimeError):
    """Raised when a canvas cannot be serialized to PNG."""


def encode_png(canvas: Image.Image) -> bytes:
    buf = BytesIO()
    try:
        canvas.save(buf, format="PNG")
    except (OSError, ValueError) as exc:
        raise EncodeError(f"PNG encoding failed: {exc}") from exc
    return buf.getvalue()


def data_url(png: bytes) -> str:
    b64 = base64.b64encode(png).decode("ascii")
    return f"data:{CONTENT_TYPE};base64,{b64}"
