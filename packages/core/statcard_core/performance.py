"""Render-time budgeting against configured targets."""

from __future__ import annotations

from dataclasses import dataclass

import psutil


@dataclass(frozen=True)
class PerformanceTargets:
    render_ms_max: float = 250.0
    rss_mb_max: float = 300.0


@dataclass(frozen=True)
class BudgetStatus:
    render_ms: float
    cpu_percent: float
    rss_mb: float
    overloaded: bool
    warning: str | None


class PerformanceController:
    def __init__(self, targets: PerformanceTargets | None = None) -> None:
        self.targets = targets or PerformanceTargets()
        self._process = psutil.Process()
        # Prime non-blocking CPU measurement.
        self._process.cpu_percent(interval=None)

    def sample(self, render_ms: float) -> BudgetStatus:
        cpu = float(self._process.cpu_percent(interval=None))
        rss_mb = float(self._process.memory_info().rss) / (1024 * 1024)

        warning = None
        if rss_mb > self.targets.rss_mb_max:
            warning = "memory_over_budget"
        elif render_ms > self.targets.render_ms_max:
            warning = "render_over_budget"

        return BudgetStatus(
            render_ms=float(render_ms),
            cpu_percent=cpu,
            rss_mb=rss_mb,
            overloaded=warning is not None,
            warning=warning,
        )
