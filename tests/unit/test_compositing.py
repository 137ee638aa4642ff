"""Unit tests for tone filters and text overlays."""

from io import BytesIO

import pytest
from PIL import Image

from mythos.core.compositing import (
    adjust_pixels,
    apply_filters,
    load_font,
    overlay_text,
    parse_data_uri,
    scrim_alpha,
    scrim_height,
    to_data_uri,
    wrap_words,
)


class TestDataUri:
    def test_round_trip(self, png_bytes):
        data, mime = parse_data_uri(to_data_uri(png_bytes, "image/jpeg"))
        assert data == png_bytes
        assert mime == "image/jpeg"

    def test_bare_base64_defaults_to_png(self, png_bytes):
        uri = to_data_uri(png_bytes)
        bare = uri.split(",", 1)[1]
        assert parse_data_uri(bare) == (png_bytes, "image/png")


class TestAdjustPixels:
    """Tests for the pure RGBA transform."""

    def test_defaults_return_same_object(self):
        pixels = bytes([10, 20, 30, 255])
        assert adjust_pixels(pixels) is pixels

    def test_rejects_partial_pixel(self):
        with pytest.raises(ValueError):
            adjust_pixels(bytes([1, 2, 3]), brightness=50)

    def test_brightness_scales_channels(self):
        assert adjust_pixels(bytes([100, 200, 50, 255]), brightness=50) == bytes([50, 100, 25, 255])

    def test_brightness_clamps(self):
        assert adjust_pixels(bytes([200, 10, 0, 255]), brightness=200) == bytes([255, 20, 0, 255])

    def test_contrast_stretches_around_mid_grey(self):
        out = adjust_pixels(bytes([128, 138, 118, 255]), contrast=200)
        assert out == bytes([128, 148, 108, 255])

    def test_zero_contrast_is_flat_grey(self):
        out = adjust_pixels(bytes([0, 255, 60, 255]), contrast=0)
        assert out == bytes([128, 128, 128, 255])

    def test_zero_saturation_is_greyscale(self):
        out = adjust_pixels(bytes([255, 0, 0, 255]), saturation=0)
        assert out[0] == out[1] == out[2]
        assert out[0] == round(0.2126 * 255)

    def test_alpha_is_preserved(self):
        out = adjust_pixels(bytes([100, 100, 100, 37]), brightness=150, saturation=20)
        assert out[3] == 37

    def test_grey_pixel_ignores_saturation(self):
        pixels = bytes([90, 90, 90, 255])
        assert adjust_pixels(pixels, saturation=180) == pixels


class TestApplyFilters:
    def test_defaults_return_input(self, png_bytes):
        assert apply_filters(png_bytes) is png_bytes

    def test_filters_re_encode_as_png(self, png_factory):
        source = png_factory(4, 4, (100, 100, 100, 255))
        result = apply_filters(source, brightness=50)

        with Image.open(BytesIO(result)) as img:
            assert img.format == "PNG"
            assert img.size == (4, 4)
            assert img.convert("RGBA").getpixel((0, 0)) == (50, 50, 50, 255)

    @pytest.mark.parametrize(
        "levels",
        [
            {"brightness": 130, "contrast": 80},
            {"saturation": 0},
            {"saturation": 170},
            {"brightness": 160, "contrast": 140, "saturation": 40},
        ],
    )
    def test_matches_pixel_transform(self, levels):
        source = Image.new("RGBA", (16, 16))
        source.putdata([(x * 16, y * 16, (x * y) % 256, 200) for y in range(16) for x in range(16)])
        buffer = BytesIO()
        source.save(buffer, format="PNG")

        with Image.open(BytesIO(apply_filters(buffer.getvalue(), **levels))) as img:
            baked = img.convert("RGBA").tobytes()
        expected = adjust_pixels(source.tobytes(), **levels)

        assert len(baked) == len(expected)
        assert max(abs(a - b) for a, b in zip(baked, expected)) <= 2
        assert baked[3::4] == expected[3::4]

    def test_large_image(self, png_factory):
        source = png_factory(1024, 1024, (100, 150, 200, 255))

        with Image.open(BytesIO(apply_filters(source, brightness=50, saturation=0))) as img:
            r, g, b, a = img.convert("RGBA").getpixel((1023, 1023))

        assert r == g == b
        assert abs(r - (0.2126 * 50 + 0.7152 * 75 + 0.0722 * 100)) <= 1
        assert a == 255


class TestWrapWords:
    """Tests for greedy word wrapping."""

    def test_packs_greedily(self):
        lines = wrap_words("aa bb cc dd", 5, len)
        assert lines == ["aa bb", "cc dd"]

    def test_overlong_word_gets_own_line(self):
        assert wrap_words("a enormous b", 3, len) == ["a", "enormous", "b"]

    def test_empty_text(self):
        assert wrap_words("   ", 10, len) == []

    def test_every_line_fits_unless_single_word(self):
        text = "the quick brown fox jumps over the lazy dog again and again"
        for line in wrap_words(text, 12, len):
            assert len(line) <= 12 or " " not in line


class TestScrim:
    def test_height_by_aspect_ratio(self):
        assert scrim_height(1000, "9:16") == 250
        assert scrim_height(1000, "4:3") == 300

    @pytest.mark.parametrize("position,alpha", [(0.0, 0.0), (0.1, 0.45), (0.2, 0.9), (1.0, 1.0)])
    def test_alpha_stops(self, position, alpha):
        assert scrim_alpha(position) == pytest.approx(alpha)


class TestOverlayText:
    """Tests for compositing a title and summary onto an image."""

    def test_keeps_dimensions(self, png_factory):
        source = png_factory(320, 240, (255, 255, 255, 255))
        result = overlay_text(source, "Supply Chains", "How parts move across three continents.", "4:3")

        with Image.open(BytesIO(result)) as img:
            assert img.size == (320, 240)

    def test_darkens_bottom_not_top(self, png_factory):
        source = png_factory(200, 200, (255, 255, 255, 255))
        result = overlay_text(source, "", "", "1:1")

        with Image.open(BytesIO(result)) as img:
            rgba = img.convert("RGBA")
            assert rgba.getpixel((5, 5)) == (255, 255, 255, 255)
            bottom = rgba.getpixel((5, 199))
            assert bottom[0] < 60

    def test_accepts_explicit_fonts(self, png_factory):
        font = load_font(12)
        result = overlay_text(png_factory(100, 100), "T", "summary words", "9:16", font, font)
        assert result.startswith(b"\x89PNG")
