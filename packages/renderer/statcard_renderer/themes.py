"""Built-in card themes."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .models import ThemeConfig

DEFAULT_THEME_NAME = "light"

THEMES: Mapping[str, ThemeConfig] = MappingProxyType(
    {
        "light": ThemeConfig(
            name="light",
            background="#FFFFFF",
            body_text="#000000",
            title_text="#2878C8",
            stat_text="#323232",
        ),
        "dark": ThemeConfig(
            name="dark",
            background="#1E1E1E",
            body_text="#E6E6E6",
            title_text="#64B4FF",
            stat_text="#C8C8C8",
        ),
        "a": ThemeConfig(
            name="a",
            background="#FFF0F0",
            body_text="#501414",
            title_text="#C83232",
            stat_text="#782828",
        ),
    }
)


def list_themes() -> list[str]:
    return sorted(THEMES.keys())


def get_theme(name: str | None) -> ThemeConfig:
    if not name:
        return THEMES[DEFAULT_THEME_NAME]
    return THEMES.get(name, THEMES[DEFAULT_THEME_NAME])


def hex_to_rgba(value: str) -> tuple[int, int, int, int]:
    r, g, b = (int(value[i : i + 2], 16) for i in (1, 3, 5))
    return (r, g, b, 255)
