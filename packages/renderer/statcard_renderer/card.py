"""Stats card composer for 1200x800 PNG output."""

from __future__ import annotations

import logging

from PIL import Image, ImageDraw

from .fonts import FontCache, FontUnavailable
from .models import StatsRecord, ThemeConfig
from .resample import resample
from .themes import hex_to_rgba

logger = logging.getLogger("statcard.renderer.card")

CANVAS_WIDTH = 1200
CANVAS_HEIGHT = 800

MARGIN = 53
AVATAR_SIZE = 160
TITLE_FONT_SIZE = 72
TITLE_BASELINE = 147

STAT_FONT_SIZE = 48
STAT_ROW_Y = 293
STAT_ROW_SPACING = 67
STAT_COLUMN_X = (MARGIN, 640)


class CardRenderer:
    """Draws the avatar, name and four stats onto a fresh canvas."""

    def __init__(self, fonts: FontCache, width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT) -> None:
        self.fonts = fonts
        self.width = width
        self.height = height

    def render(self, record: StatsRecord, theme: ThemeConfig) -> Image.Image:
        canvas = Image.new("RGBA", (self.width, self.height), hex_to_rgba(theme.background))
        self._draw_avatar(canvas, record.avatar)

        draw = ImageDraw.Draw(canvas)
        self._draw_title(draw, theme, record.name)
        self._draw_stats(draw, theme, record)
        return canvas

    def _draw_avatar(self, canvas: Image.Image, avatar: Image.Image) -> None:
        # paste() without a mask overwrites, including alpha.
        canvas.paste(resample(avatar, AVATAR_SIZE, AVATAR_SIZE), (MARGIN, MARGIN))

    def _draw_title(self, draw: ImageDraw.ImageDraw, theme: ThemeConfig, name: str) -> None:
        x = MARGIN + AVATAR_SIZE + MARGIN
        self._draw_label(draw, (x, TITLE_BASELINE), name, theme.title_text, TITLE_FONT_SIZE)

    def _draw_stats(self, draw: ImageDraw.ImageDraw, theme: ThemeConfig, r: StatsRecord) -> None:
        rows = [
            (f"Followers: {r.followers}", f"Following: {r.following}"),
            (f"Public Repos: {r.public_repos}", f"Total Stars: {r.total_stars}"),
        ]
        for row, labels in enumerate(rows):
            y = STAT_ROW_Y + row * STAT_ROW_SPACING
            for x, label in zip(STAT_COLUMN_X, labels):
                self._draw_label(draw, (x, y), label, theme.stat_text, STAT_FONT_SIZE)

    def _draw_label(self, draw: ImageDraw.ImageDraw, xy: tuple[int, int], text: str, color: str, size: int) -> bool:
        resolution = self.fonts.resolve(size)
        if isinstance(resolution, FontUnavailable):
            logger.warning("font unavailable, skipping label size=%s text=%r", size, text, extra={"event": "label_skipped"})
            return False
        # "ls": xy is the left end of the text baseline.
        draw.text(xy, text, font=resolution.face, fill=hex_to_rgba(color), anchor="ls")
        return True
