"""Renderer package for stats card composition."""

from .card import CANVAS_HEIGHT, CANVAS_WIDTH, CardRenderer
from .encoder import CONTENT_TYPE, EncodeError, data_url, encode_png
from .fonts import DEFAULT_FONT_CANDIDATES, FontCache, FontResolution, FontResolved, FontUnavailable
from .models import StatsRecord, ThemeConfig
from .pipeline import StatCardPipeline
from .resample import resample
from .themes import DEFAULT_THEME_NAME, THEMES, get_theme, list_themes

__all__ = [
    "CANVAS_HEIGHT",
    "CANVAS_WIDTH",
    "CONTENT_TYPE",
    "CardRenderer",
    "DEFAULT_FONT_CANDIDATES",
    "DEFAULT_THEME_NAME",
    "EncodeError",
    "FontCache",
    "FontResolution",
    "FontResolved",
    "FontUnavailable",
    "StatCardPipeline",
    "StatsRecord",
    "THEMES",
    "ThemeConfig",
    "data_url",
    "encode_png",
    "get_theme",
    "list_themes",
    "resample",
]
