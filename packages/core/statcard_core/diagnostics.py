"""Diagnostics export helpers for local support bundles."""

from __future__ import annotations

import json
import platform
import re
import tempfile
import zipfile
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import PIL
from PIL import features

from statcard_renderer import FontCache, FontResolved, list_themes

from .config import AppConfig, config_path
from .logging_setup import log_dir


_SECRET_RE = re.compile(r"(token|secret|password|apikey|api_key|auth)", re.IGNORECASE)


def _jsonable(value: Any) -> Any:
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, Path):
        return str(value)
    return value


def redact(value: Any) -> Any:
    if isinstance(value, dict):
        out: dict[str, Any] = {}
        for k, v in value.items():
            if _SECRET_RE.search(k):
                out[k] = "***REDACTED***"
            else:
                out[k] = redact(v)
        return out
    if isinstance(value, list):
        return [redact(v) for v in value]
    return value


def font_report(cfg: AppConfig) -> list[dict[str, Any]]:
    """Probe every candidate on its own so the report shows all of them, not just the winner."""
    size = cfg.fonts.preload_sizes[0] if cfg.fonts.preload_sizes else 48
    rows = []
    for path in cfg.fonts.candidates:
        resolution = FontCache([path]).resolve(size)
        rows.append(
            {
                "path": path,
                "exists": Path(path).is_file(),
                "loadable": isinstance(resolution, FontResolved),
            }
        )
    return rows


def build_doctor_payload(cfg: AppConfig) -> dict[str, Any]:
    fonts = font_report(cfg)
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "pillow": PIL.__version__,
        "freetype": bool(features.check("freetype2")),
        "config": redact(asdict(cfg)),
        "themes": list_themes(),
        "fonts": fonts,
        "font_available": any(row["loadable"] for row in fonts),
    }


class DiagnosticsExporter:
    def __init__(self, app_name: str = "StatCard") -> None:
        self.app_name = app_name

    def bundle(
        self,
        cfg: AppConfig,
        doctor_payload: dict[str, Any],
        output_dir: Path | None = None,
    ) -> Path:
        output_base = output_dir or Path(tempfile.gettempdir())
        output_base.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        zip_path = output_base / f"statcard-diagnostics-{stamp}.zip"

        logs = sorted(log_dir().glob("*.log*"))
        max_bytes = cfg.diagnostics.max_bundle_mb * 1024 * 1024
        written = 0

        with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            manifest = {
                "app": self.app_name,
                "created_utc": datetime.now(timezone.utc).isoformat(),
                "host": platform.platform(),
                "python": platform.python_version(),
                "config_path": str(config_path()),
                "log_dir": str(log_dir()),
            }
            zf.writestr("manifest.json", json.dumps(manifest, indent=2, sort_keys=True))
            zf.writestr("doctor.json", json.dumps(redact(doctor_payload), indent=2, sort_keys=True, default=_jsonable))
            zf.writestr("config.redacted.json", json.dumps(redact(asdict(cfg)), indent=2, sort_keys=True))

            # Newest logs first; older files are dropped once the bundle cap is reached.
            for item in reversed(logs):
                size = item.stat().st_size
                if written + size > max_bytes:
                    break
                zf.write(item, arcname=f"logs/{item.name}")
                written += size

        return zip_path
