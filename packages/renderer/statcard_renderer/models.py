"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image


@dataclass(frozen=True)
class ThemeConfig:
    name: str
    background: str
    body_text: str
    title_text: str
    stat_text: str


@dataclass(frozen=True)
class StatsRecord:
    name: str
    avatar: Image.Image
    followers: int
    following: int
    public_repos: int
    total_stars: int
