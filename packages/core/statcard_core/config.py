"""Persistent service settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from statcard_renderer.fonts import DEFAULT_FONT_CANDIDATES


CONFIG_VERSION = 2
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class FontsConfig:
    candidates: list[str] = field(default_factory=lambda: list(DEFAULT_FONT_CANDIDATES))
    preload_sizes: list[int] = field(default_factory=lambda: [72, 48])


@dataclass
class LoggingConfig:
    console: bool = True
    level: str = "INFO"


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7
    max_bundle_mb: int = 20


@dataclass
class PerformanceConfig:
    render_ms_max: float = 250.0
    rss_mb_max: float = 300.0


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    fonts: FontsConfig = field(default_factory=FontsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "StatCard"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "StatCard"
    return Path.home() / ".config" / "statcard"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_fonts(cfg: AppConfig) -> None:
    candidates = [str(p) for p in (cfg.fonts.candidates or []) if p]
    cfg.fonts.candidates = candidates or list(DEFAULT_FONT_CANDIDATES)
    sizes = []
    for size in cfg.fonts.preload_sizes or []:
        size = int(size)
        if size > 0 and size not in sizes:
            sizes.append(size)
    cfg.fonts.preload_sizes = sizes


def _normalize_logging(cfg: AppConfig) -> None:
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in LOG_LEVELS else "INFO"
    cfg.logging.console = bool(cfg.logging.console)


def _normalize_performance(cfg: AppConfig) -> None:
    cfg.performance.render_ms_max = float(max(1.0, cfg.performance.render_ms_max))
    cfg.performance.rss_mb_max = float(max(64.0, cfg.performance.rss_mb_max))


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept a flat "font_paths" list and had no logging/performance sections.
        fonts = dict(data.get("fonts", {}) or {})
        if "font_paths" in data:
            fonts.setdefault("candidates", data.pop("font_paths"))
        data["fonts"] = fonts
        data.setdefault("logging", {})
        data.setdefault("performance", {})
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        fonts=_merge(FontsConfig, data.get("fonts", {})),
        logging=_merge(LoggingConfig, data.get("logging", {})),
        diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics", {})),
        performance=_merge(PerformanceConfig, data.get("performance", {})),
    )

    _normalize_fonts(cfg)
    _normalize_logging(cfg)
    _normalize_performance(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
