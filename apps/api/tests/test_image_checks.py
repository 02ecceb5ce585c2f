#!/usr/bin/env python3

from __future__ import annotations

from io import BytesIO
import unittest

from PIL import Image

from packages.iconkit_core.errors import InvalidBackgroundColorError, UnreadableImageError
from packages.iconkit_core.icons.flatten import flatten_alpha, flatten_image_bytes, parse_color
from packages.iconkit_core.icons.validator import detect_alpha, validate_image
from packages.iconkit_core.imaging.codec import PillowImageCodec


def _png_bytes(image: Image.Image) -> bytes:
    buf = BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def _with_transparent_corner(size: int) -> Image.Image:
    image = Image.new("RGBA", (size, size), (200, 40, 40, 255))
    for x in range(8):
        for y in range(8):
            image.putpixel((x, y), (0, 0, 0, 0))
    return image


class ImageValidatorTests(unittest.TestCase):
    def test_small_opaque_square(self) -> None:
        result = validate_image(Image.new("RGB", (512, 512), (10, 20, 30)))
        self.assertTrue(result.is_square)
        self.assertFalse(result.is_min_size)
        self.assertFalse(result.has_alpha)
        self.assertEqual(len(result.warnings), 1)
        self.assertIn("1024", result.warnings[0])

    def test_non_square_warning_mentions_dimensions(self) -> None:
        result = validate_image(Image.new("RGB", (300, 500)))
        self.assertFalse(result.is_square)
        self.assertIn("300", result.warnings[0])
        self.assertIn("500", result.warnings[0])
        self.assertIn("square", result.warnings[0])

    def test_clean_master_has_no_warnings(self) -> None:
        result = validate_image(Image.new("RGBA", (1024, 1024), (0, 128, 255, 255)))
        self.assertEqual(result.warnings, [])
        self.assertTrue(result.is_min_size)
        self.assertFalse(result.has_alpha)

    def test_warning_order_is_square_size_alpha(self) -> None:
        image = Image.new("RGBA", (600, 400), (0, 0, 0, 0))
        result = validate_image(image)
        self.assertEqual(len(result.warnings), 3)
        self.assertIn("square", result.warnings[0])
        self.assertIn("recommended", result.warnings[1])
        self.assertIn("transparency", result.warnings[2])

    def test_alpha_detected_on_downscaled_sample(self) -> None:
        image = _with_transparent_corner(2048)
        self.assertTrue(detect_alpha(image, sample_size=256))
        self.assertTrue(validate_image(image).has_alpha)

    def test_single_transparent_pixel_survives_downscaling(self) -> None:
        # 32x32 box cells average one clear pixel back up to 255.
        image = Image.new("RGBA", (2048, 2048), (90, 90, 90, 255))
        image.putpixel((1000, 1000), (0, 0, 0, 0))
        self.assertTrue(detect_alpha(image, sample_size=64))
        self.assertTrue(validate_image(image, sample_size=64).has_alpha)

    def test_uniformly_opaque_rgba_is_not_alpha(self) -> None:
        image = Image.new("RGBA", (2048, 2048), (1, 2, 3, 255))
        self.assertFalse(detect_alpha(image))

    def test_palette_transparency_is_detected(self) -> None:
        image = Image.new("P", (64, 64), 1)
        image.putpalette([0, 0, 0, 200, 40, 40] + [0, 0, 0] * 254)
        image.putpixel((0, 0), 0)
        image.info["transparency"] = 0
        self.assertTrue(detect_alpha(image))


class AlphaFlattenerTests(unittest.TestCase):
    def test_flatten_removes_all_transparency(self) -> None:
        source = _with_transparent_corner(64)
        flat = flatten_alpha(source, "#FFFFFF")
        self.assertEqual(flat.size, source.size)
        alpha_low, _ = flat.convert("RGBA").getchannel("A").getextrema()
        self.assertEqual(alpha_low, 255)
        self.assertEqual(flat.getpixel((0, 0)), (255, 255, 255))
        self.assertEqual(flat.getpixel((32, 32)), (200, 40, 40))

    def test_flatten_leaves_source_untouched(self) -> None:
        source = _with_transparent_corner(32)
        flatten_alpha(source, "black")
        self.assertEqual(source.mode, "RGBA")
        self.assertEqual(source.getpixel((0, 0)), (0, 0, 0, 0))

    def test_invalid_color_is_rejected_before_any_work(self) -> None:
        source = _with_transparent_corner(32)
        with self.assertRaises(InvalidBackgroundColorError) as raised:
            flatten_alpha(source, "not-a-colour")
        self.assertEqual(raised.exception.error_code, "invalid_background_color")
        self.assertEqual(source.getpixel((0, 0)), (0, 0, 0, 0))

    def test_parse_color_accepts_common_forms(self) -> None:
        self.assertEqual(parse_color("#fff"), (255, 255, 255))
        self.assertEqual(parse_color("#102030"), (16, 32, 48))
        self.assertEqual(parse_color("rgb(1, 2, 3)"), (1, 2, 3))

    def test_flatten_image_bytes_round_trip(self) -> None:
        data = flatten_image_bytes(_png_bytes(_with_transparent_corner(48)), "#00FF00")
        with Image.open(BytesIO(data)) as out:
            self.assertEqual(out.size, (48, 48))
            self.assertEqual(out.mode, "RGB")
            self.assertEqual(out.getpixel((0, 0)), (0, 255, 0))


class PillowCodecTests(unittest.TestCase):
    def test_decode_rejects_garbage(self) -> None:
        codec = PillowImageCodec()
        with self.assertRaises(UnreadableImageError):
            codec.decode(b"definitely not an image")
        with self.assertRaises(UnreadableImageError):
            codec.decode(b"")

    def test_render_produces_exact_square_png(self) -> None:
        codec = PillowImageCodec()
        image = codec.decode(_png_bytes(Image.new("RGB", (300, 200), (9, 9, 9))))
        data = codec.render(image, 167)
        with Image.open(BytesIO(data)) as out:
            self.assertEqual(out.format, "PNG")
            self.assertEqual(out.size, (167, 167))

    def test_decode_normalizes_palette_images(self) -> None:
        codec = PillowImageCodec()
        image = codec.decode(_png_bytes(Image.new("P", (16, 16))))
        self.assertIn(image.mode, ("RGB", "RGBA"))

    def test_unknown_resample_filter(self) -> None:
        with self.assertRaises(ValueError):
            PillowImageCodec(resample="nearest")


if __name__ == "__main__":
    unittest.main()
