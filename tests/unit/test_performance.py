import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from statcard_core.performance import PerformanceController, PerformanceTargets


class PerformanceTests(unittest.TestCase):
    def test_within_budget(self):
        ctl = PerformanceController(PerformanceTargets(render_ms_max=1000.0, rss_mb_max=1_000_000.0))
        status = ctl.sample(render_ms=12.5)
        self.assertFalse(status.overloaded)
        self.assertIsNone(status.warning)
        self.assertEqual(status.render_ms, 12.5)
        self.assertGreater(status.rss_mb, 0.0)

    def test_slow_render_flagged(self):
        ctl = PerformanceController(PerformanceTargets(render_ms_max=10.0, rss_mb_max=1_000_000.0))
        status = ctl.sample(render_ms=50.0)
        self.assertTrue(status.overloaded)
        self.assertEqual(status.warning, "render_over_budget")


if __name__ == "__main__":
    unittest.main()
