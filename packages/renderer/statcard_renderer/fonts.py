"""Font face resolution with a per-size, process-wide cache."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Union

from PIL import ImageFont

logger = logging.getLogger("statcard.renderer.fonts")

# Monospace fonts, most preferred first. Inconsolata regular wins over bold variants.
DEFAULT_FONT_CANDIDATES: tuple[str, ...] = (
    "/usr/share/fonts/truetype/inconsolata/Inconsolata.ttf",
    "/usr/share/fonts/truetype/inconsolata/Inconsolata-Regular.ttf",
    "/usr/share/fonts/opentype/inconsolata/Inconsolata-Regular.otf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/System/Library/Fonts/Menlo.ttc",
    "C:\\Windows\\Fonts\\consola.ttf",
)

FontLoader = Callable[[str, int], ImageFont.FreeTypeFont]


@dataclass(frozen=True)
class FontResolved:
    face: ImageFont.FreeTypeFont
    path: str
    size: int


@dataclass(frozen=True)
class FontUnavailable:
    size: int
    tried: tuple[str, ...]


FontResolution = Union[FontResolved, FontUnavailable]


class _FontSlot:
    """Initializer for a single size that keeps the first face it builds."""

    __slots__ = ("_lock", "result")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.result: FontResolved | None = None

    def get(self, factory: Callable[[], FontResolution]) -> FontResolution:
        result = self.result
        if result is not None:
            return result
        with self._lock:
            if self.result is not None:
                return self.result
            resolution = factory()
            # A miss is not stored; the next caller scans the candidates again.
            if isinstance(resolution, FontResolved):
                self.result = resolution
            return resolution


def _truetype(path: str, size: int) -> ImageFont.FreeTypeFont:
    # Pillow sizes are pixels; at 72 DPI one point is one pixel.
    return ImageFont.truetype(path, size)


class FontCache:
    """Resolves one shared font face per point size.

    Lookups that hit the cache take no lock. A miss builds the face inside a
    per-size slot so concurrent callers for the same size wait on that slot
    only, and all of them receive the same face. Resolved faces live as long
    as the cache. An unavailable result is returned but not kept, so a later
    call scans the candidates again.
    """

    def __init__(self, candidates: Iterable[str] | None = None, loader: FontLoader | None = None) -> None:
        self.candidates = tuple(str(p) for p in (DEFAULT_FONT_CANDIDATES if candidates is None else candidates))
        self._loader = loader or _truetype
        self._slots: dict[int, _FontSlot] = {}
        self._slots_lock = threading.Lock()

    def resolve(self, size: int) -> FontResolution:
        slot = self._slots.get(size)
        if slot is None:
            with self._slots_lock:
                slot = self._slots.setdefault(size, _FontSlot())
        return slot.get(lambda: self._load(size))

    def preload(self, sizes: Iterable[int]) -> dict[int, FontResolution]:
        return {size: self.resolve(size) for size in sizes}

    def cached_sizes(self) -> list[int]:
        return sorted(size for size, slot in list(self._slots.items()) if slot.result is not None)

    def _load(self, size: int) -> FontResolution:
        for path in self.candidates:
            if not Path(path).is_file():
                continue
            try:
                face = self._loader(path, size)
            except (OSError, ValueError, ImportError) as exc:
                logger.debug("font candidate rejected path=%s size=%s: %s", path, size, exc)
                continue
            logger.info("font resolved path=%s size=%s", path, size, extra={"event": "font_resolved"})
            return FontResolved(face=face, path=path, size=size)

        logger.warning("no usable font for size=%s", size, extra={"event": "font_unavailable"})
        return FontUnavailable(size=size, tried=self.candidates)
