"""Process-level card rendering service shared by all request handlers."""

from __future__ import annotations

import logging
import time

from statcard_renderer import EncodeError, FontCache, FontResolution, StatCardPipeline, StatsRecord, get_theme

from .config import AppConfig

logger = logging.getLogger("statcard.service")


class CardService:
    """Owns the font cache for the process and renders cards on demand.

    Create one instance at startup and share it between request threads;
    every ``render_png`` call allocates its own canvas.
    """

    def __init__(self, cfg: AppConfig | None = None, fonts: FontCache | None = None) -> None:
        self.cfg = cfg or AppConfig()
        self.fonts = fonts or FontCache(self.cfg.fonts.candidates)
        self.pipeline = StatCardPipeline(self.fonts)

    def warm_up(self) -> dict[int, FontResolution]:
        return self.fonts.preload(self.cfg.fonts.preload_sizes)

    def render_png(self, record: StatsRecord, theme_name: str | None = None) -> bytes:
        theme = get_theme(theme_name)
        start = time.perf_counter()
        try:
            data = self.pipeline.render_png(record, theme.name)
        except EncodeError:
            logger.exception("card encoding failed name=%r", record.name, extra={"event": "encode_failed"})
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        logger.info(
            "card rendered name=%r theme=%s",
            record.name,
            theme.name,
            extra={"event": "card_rendered", "theme": theme.name, "render_ms": round(elapsed_ms, 2), "bytes": len(data)},
        )
        return data
