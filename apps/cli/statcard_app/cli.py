"""CLI entrypoints for rendering cards, inspecting fonts, diagnostics, and benchmarks."""

from __future__ import annotations

import argparse
import json
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict
from pathlib import Path

from PIL import Image

from statcard_core import (
    CardService,
    DiagnosticsExporter,
    PerformanceController,
    PerformanceTargets,
    build_doctor_payload,
    load_config,
)
from statcard_core.logging_setup import configure_logging, install_crash_hooks
from statcard_renderer import FontResolved, StatsRecord, data_url, get_theme, list_themes


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _non_negative(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be a non-negative integer")
    return number


def _load_avatar(path: str) -> Image.Image:
    with Image.open(path) as img:
        img.load()
        return img.copy()


def _record_from_args(args: argparse.Namespace) -> StatsRecord:
    return StatsRecord(
        name=args.name,
        avatar=_load_avatar(args.avatar),
        followers=args.followers,
        following=args.following,
        public_repos=args.public_repos,
        total_stars=args.total_stars,
    )


def cmd_render(args: argparse.Namespace) -> int:
    service = CardService(load_config())
    record = _record_from_args(args)

    data = service.render_png(record, args.theme)
    if args.data_url:
        print(data_url(data))
        return 0

    if args.out == "-":
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return 0

    out = Path(args.out).expanduser()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(data)
    _print_json({"success": True, "path": str(out.resolve()), "bytes": len(data), "theme": get_theme(args.theme).name})
    return 0


def cmd_themes(_args: argparse.Namespace) -> int:
    _print_json([asdict(get_theme(name)) for name in list_themes()])
    return 0


def cmd_fonts(args: argparse.Namespace) -> int:
    cfg = load_config()
    service = CardService(cfg)
    sizes = args.size or cfg.fonts.preload_sizes
    rows = []
    for size, resolution in service.fonts.preload(sizes).items():
        if isinstance(resolution, FontResolved):
            rows.append({"size": size, "resolved": True, "path": resolution.path})
        else:
            rows.append({"size": size, "resolved": False, "tried": list(resolution.tried)})
    _print_json(rows)
    return 0 if all(r["resolved"] for r in rows) else 2


def cmd_doctor(args: argparse.Namespace) -> int:
    cfg = load_config()
    payload = build_doctor_payload(cfg)

    if args.export:
        exporter = DiagnosticsExporter()
        out_dir = Path(args.out_dir).expanduser().resolve() if args.out_dir else None
        bundle = exporter.bundle(cfg=cfg, doctor_payload=payload, output_dir=out_dir)
        payload["diagnostics_bundle"] = str(bundle)

    _print_json(payload)
    return 0


def cmd_benchmark(args: argparse.Namespace) -> int:
    cfg = load_config()
    service = CardService(cfg)
    service.warm_up()
    perf = PerformanceController(
        PerformanceTargets(
            render_ms_max=cfg.performance.render_ms_max,
            rss_mb_max=cfg.performance.rss_mb_max,
        )
    )

    avatar = _load_avatar(args.avatar) if args.avatar else Image.new("RGBA", (460, 460), (40, 120, 200, 255))
    themes = list_themes()

    def _one(i: int) -> tuple[float, int]:
        record = StatsRecord(
            name=f"bench-{i}",
            avatar=avatar,
            followers=i,
            following=i * 2,
            public_repos=i % 100,
            total_stars=i * 7,
        )
        start = time.perf_counter()
        data = service.render_png(record, themes[i % len(themes)])
        return (time.perf_counter() - start) * 1000.0, len(data)

    frames = 0
    bytes_out = 0
    samples = []
    start = time.perf_counter()
    deadline = start + args.seconds

    with ThreadPoolExecutor(max_workers=args.workers) as pool:
        while time.perf_counter() < deadline:
            batch = list(pool.map(_one, range(frames, frames + args.workers)))
            frames += len(batch)
            for render_ms, size in batch:
                bytes_out += size
                samples.append(asdict(perf.sample(render_ms)))

    elapsed = max(time.perf_counter() - start, 1e-9)
    render_ms_max = max((s["render_ms"] for s in samples), default=0.0)
    rss_max = max((s["rss_mb"] for s in samples), default=0.0)

    pass_render = render_ms_max <= cfg.performance.render_ms_max
    pass_mem = rss_max <= cfg.performance.rss_mb_max

    _print_json(
        {
            "seconds": args.seconds,
            "workers": args.workers,
            "cards": frames,
            "cards_per_second": frames / elapsed,
            "bytes_out": bytes_out,
            "font_sizes_cached": service.fonts.cached_sizes(),
            "budget": {
                "targets": asdict(perf.targets),
                "max_observed": {"render_ms": render_ms_max, "rss_mb": rss_max},
                "pass": bool(pass_render and pass_mem),
                "checks": {"render": pass_render, "memory": pass_mem},
            },
        }
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="statcard", description="Stats card renderer and tools")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Render a stats card PNG from a local avatar")
    render_cmd.add_argument("--name", required=True, help="Display name drawn as the title")
    render_cmd.add_argument("--avatar", required=True, help="Path to the avatar image")
    render_cmd.add_argument("--followers", type=_non_negative, default=0)
    render_cmd.add_argument("--following", type=_non_negative, default=0)
    render_cmd.add_argument("--public-repos", type=_non_negative, default=0)
    render_cmd.add_argument("--total-stars", type=_non_negative, default=0)
    render_cmd.add_argument("--theme", default="", help="Theme name; unknown names fall back to light")
    render_cmd.add_argument("--out", default="card.png", help="Output path, or - for stdout")
    render_cmd.add_argument("--data-url", action="store_true", help="Print a data: URL instead of writing a file")
    render_cmd.set_defaults(func=cmd_render)

    themes_cmd = sub.add_parser("themes", help="List built-in themes")
    themes_cmd.set_defaults(func=cmd_themes)

    fonts_cmd = sub.add_parser("fonts", help="Show which font file resolves for each size")
    fonts_cmd.add_argument("--size", type=int, action="append", default=None, help="Point size; repeatable")
    fonts_cmd.set_defaults(func=cmd_fonts)

    doctor_cmd = sub.add_parser("doctor", help="Print diagnostics and font availability")
    doctor_cmd.add_argument("--export", action="store_true", help="Export offline diagnostics bundle")
    doctor_cmd.add_argument("--out-dir", default=None, help="Optional output directory for diagnostics bundle")
    doctor_cmd.set_defaults(func=cmd_doctor)

    bench_cmd = sub.add_parser("benchmark", help="Render cards concurrently and report throughput")
    bench_cmd.add_argument("--seconds", type=int, default=10)
    bench_cmd.add_argument("--workers", type=int, default=4)
    bench_cmd.add_argument("--avatar", default=None, help="Optional avatar image; defaults to a solid square")
    bench_cmd.set_defaults(func=cmd_benchmark)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(cfg)
    install_crash_hooks()
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
