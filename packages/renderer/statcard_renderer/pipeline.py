"""Theme resolution, composition and encoding for one card."""

from __future__ import annotations

from PIL import Image

from .card import CardRenderer
from .encoder import encode_png
from .fonts import FontCache
from .models import StatsRecord
from .themes import get_theme


class StatCardPipeline:
    def __init__(self, fonts: FontCache) -> None:
        self.fonts = fonts
        self.renderer = CardRenderer(fonts)

    def render_image(self, record: StatsRecord, theme_name: str | None = None) -> Image.Image:
        return self.renderer.render(record, get_theme(theme_name))

    def render_png(self, record: StatsRecord, theme_name: str | None = None) -> bytes:
        return encode_png(self.render_image(record, theme_name))
