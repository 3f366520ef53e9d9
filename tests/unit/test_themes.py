import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from statcard_renderer.themes import DEFAULT_THEME_NAME, THEMES, get_theme, hex_to_rgba, list_themes


class ThemeTests(unittest.TestCase):
    def test_unknown_and_empty_fall_back_to_light(self):
        light = get_theme("light")
        self.assertEqual(get_theme(""), light)
        self.assertEqual(get_theme("nonexistent"), light)
        self.assertEqual(get_theme(None), light)
        self.assertEqual(DEFAULT_THEME_NAME, "light")

    def test_lookup_is_case_sensitive(self):
        self.assertEqual(get_theme("Dark"), get_theme("light"))
        self.assertEqual(get_theme("dark").background, "#1E1E1E")

    def test_palettes(self):
        self.assertEqual(hex_to_rgba(get_theme("light").title_text), (40, 120, 200, 255))
        self.assertEqual(hex_to_rgba(get_theme("dark").stat_text), (200, 200, 200, 255))
        self.assertEqual(hex_to_rgba(get_theme("a").background), (255, 240, 240, 255))

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            THEMES["neon"] = THEMES["light"]  # type: ignore[index]
        self.assertEqual(list_themes(), ["a", "dark", "light"])


if __name__ == "__main__":
    unittest.main()
