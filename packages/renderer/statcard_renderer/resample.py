"""Nearest-neighbor resampling into fixed-size RGBA bitmaps."""

from __future__ import annotations

import numpy as np
from PIL import Image

WIDE_GRAY_MODES = ("I;16", "I;16L", "I;16B", "I;16N", "I")


def source_indices(src_len: int, dst_len: int) -> np.ndarray:
    """Map each destination index to ``floor(i * src_len / dst_len)``, clamped to the source."""
    idx = (np.arange(dst_len, dtype=np.int64) * src_len) // dst_len
    return np.minimum(idx, src_len - 1)


def to_rgba8(src: Image.Image) -> Image.Image:
    """Return ``src`` as unpremultiplied 8-bit RGBA.

    16-bit grayscale (``I;16*``, and ``I`` as Pillow opens 16-bit PNGs) keeps
    the high byte of each sample. Pillow's own ``I`` -> ``RGBA`` conversion
    clips to 255 instead.
    """
    if src.mode == "RGBA":
        return src
    if src.mode in WIDE_GRAY_MODES:
        high = np.right_shift(np.asarray(src).astype(np.int64), 8)
        src = Image.fromarray(np.clip(high, 0, 255).astype(np.uint8))
    elif src.mode == "La":
        src = src.convert("LA")
    elif src.mode == "RGBa":
        src = src.convert("RGBA")
    return src.convert("RGBA")


def resample(src: Image.Image, width: int, height: int) -> Image.Image:
    """Resize ``src`` to exactly ``width`` x ``height`` by copying the nearest source pixel.

    Pillow's own ``NEAREST`` filter samples pixel centers, which shifts the
    picked source pixels; this keeps the plain ``floor(x * srcW / dstW)``
    mapping so output stays stable across Pillow releases.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Target size must be positive, got {width}x{height}")
    src_w, src_h = src.size
    if src_w <= 0 or src_h <= 0:
        raise ValueError(f"Source bitmap must be at least 1x1, got {src_w}x{src_h}")

    pixels = np.asarray(to_rgba8(src), dtype=np.uint8).reshape((src_h, src_w, 4))

    ys = source_indices(src_h, height)
    xs = source_indices(src_w, width)
    out = pixels[ys[:, None], xs[None, :]]
    return Image.fromarray(np.ascontiguousarray(out))
