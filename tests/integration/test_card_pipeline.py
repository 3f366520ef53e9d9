import sys
import tempfile
import unittest
from concurrent.futures import ThreadPoolExecutor
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageChops, ImageFont, features

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from statcard_renderer import CardRenderer, FontCache, FontResolved, StatCardPipeline, StatsRecord, get_theme

DARK_BG = (30, 30, 30, 255)
BLUE = (0, 0, 255, 255)


def _octocat(avatar: Image.Image | None = None) -> StatsRecord:
    return StatsRecord(
        name="octocat",
        avatar=avatar or Image.new("RGBA", (32, 32), BLUE),
        followers=10,
        following=5,
        public_repos=3,
        total_stars=42,
    )


class CardPipelineTests(unittest.TestCase):
    def test_dark_octocat_without_fonts(self):
        pipeline = StatCardPipeline(FontCache([]))
        with self.assertLogs("statcard.renderer.card", level="WARNING") as logs:
            canvas = pipeline.render_image(_octocat(), "dark")

        self.assertEqual(canvas.size, (1200, 800))
        self.assertEqual(canvas.getpixel((5, 5)), DARK_BG)
        self.assertEqual(canvas.getpixel((1199, 799)), DARK_BG)
        self.assertEqual(canvas.getpixel((60, 60)), BLUE)
        self.assertEqual(canvas.getpixel((53, 53)), BLUE)
        self.assertEqual(canvas.getpixel((212, 212)), BLUE)
        self.assertEqual(canvas.getpixel((213, 213)), DARK_BG)
        # Title plus four stat labels skipped.
        self.assertEqual(len(logs.records), 5)

        with Image.open(BytesIO(pipeline.render_png(_octocat(), "dark"))) as decoded:
            rgba = decoded.convert("RGBA")
            self.assertEqual(rgba.size, (1200, 800))
            self.assertEqual(rgba.getpixel((5, 5)), DARK_BG)
            self.assertEqual(rgba.getpixel((60, 60)), BLUE)

    def test_same_inputs_same_bytes(self):
        pipeline = StatCardPipeline(FontCache([]))
        avatar = Image.effect_noise((41, 29), 90).convert("RGBA")
        self.assertEqual(pipeline.render_png(_octocat(avatar), "a"), pipeline.render_png(_octocat(avatar), "a"))

    def test_avatar_alpha_overwrites_background(self):
        renderer = CardRenderer(FontCache([]))
        canvas = renderer.render(_octocat(Image.new("RGBA", (4, 4), (255, 0, 0, 0))), get_theme("light"))
        self.assertEqual(canvas.getpixel((100, 100)), (255, 0, 0, 0))
        self.assertEqual(canvas.getpixel((20, 20)), (255, 255, 255, 255))

    def test_zero_size_avatar_is_rejected(self):
        renderer = CardRenderer(FontCache([]))
        with self.assertRaises(ValueError):
            renderer.render(_octocat(Image.new("RGBA", (0, 0))), get_theme("dark"))

    def test_labels_drawn_when_font_resolves(self):
        if not features.check("freetype2"):
            self.skipTest("Pillow built without FreeType")

        with tempfile.TemporaryDirectory() as tmp:
            font_path = Path(tmp) / "Mono.ttf"
            font_path.write_bytes(b"placeholder")
            loads = []

            def loader(path, size):
                loads.append(size)
                return ImageFont.load_default(size=size)

            fonts = FontCache([str(font_path)], loader=loader)
            canvas = StatCardPipeline(fonts).render_image(_octocat(), "dark")

        self.assertEqual(sorted(loads), [48, 72])
        title_band = canvas.crop((266, 60, 1200, 160))
        self.assertGreater(len(title_band.getcolors(maxcolors=1 << 16)), 1)
        stats_band = canvas.crop((0, 240, 1200, 380))
        self.assertGreater(len(stats_band.getcolors(maxcolors=1 << 16)), 1)
        self.assertEqual(canvas.getpixel((60, 60)), BLUE)
        self.assertEqual(canvas.getpixel((5, 5)), DARK_BG)

    def test_system_font_sits_on_layout_baselines(self):
        fonts = FontCache()
        title = fonts.resolve(72)
        if not isinstance(title, FontResolved):
            self.skipTest("no monospace system font installed")

        canvas = CardRenderer(fonts).render(_octocat(), get_theme("dark"))
        background = Image.new("RGBA", canvas.size, DARK_BG)

        def ink(box):
            bbox = ImageChops.difference(canvas.crop(box), background.crop(box)).getbbox()
            self.assertIsNotNone(bbox)
            left, top, right, bottom = bbox
            return left + box[0], top + box[1], right + box[0], bottom + box[1]

        # "octocat" has no descenders, so its ink ends on the 147 baseline.
        left, top, _, bottom = ink((214, 0, 1200, 220))
        self.assertGreaterEqual(left, 266)
        self.assertLess(left, 290)
        self.assertLess(top, 120)
        self.assertTrue(140 <= bottom <= 150, bottom)

        left, _, right, bottom = ink((0, 220, 620, 316))
        self.assertGreaterEqual(left, 53)
        self.assertLess(left, 70)
        self.assertTrue(286 <= bottom <= 296, bottom)
        self.assertLess(right, 620)

    def test_concurrent_renders_share_faces(self):
        if not features.check("freetype2"):
            self.skipTest("Pillow built without FreeType")

        with tempfile.TemporaryDirectory() as tmp:
            font_path = Path(tmp) / "Mono.ttf"
            font_path.write_bytes(b"placeholder")
            loads = []
            fonts = FontCache(
                [str(font_path)],
                loader=lambda path, size: loads.append(size) or ImageFont.load_default(size=size),
            )
            pipeline = StatCardPipeline(fonts)

            with ThreadPoolExecutor(max_workers=6) as pool:
                outputs = list(pool.map(lambda _: pipeline.render_png(_octocat(), "light"), range(12)))

        self.assertEqual(sorted(loads), [48, 72])
        self.assertEqual(len(set(outputs)), 1)


if __name__ == "__main__":
    unittest.main()
