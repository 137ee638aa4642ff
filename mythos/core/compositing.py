"""
Image compositing for the image studio and infographic tiles.

Two independent operations:
- Tone filters (brightness/contrast/saturation), both as a pure transform
  over an RGBA pixel buffer and as Pillow lookup tables for whole images.
- A title + summary overlay drawn over a dark gradient scrim at the bottom
  of the image, with greedy word wrap.
"""

import base64
import logging
import math
import re
from io import BytesIO
from typing import Callable, Optional

from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

DEFAULT_LEVEL = 100
# Rec. 709 luma
LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)

SCRIM_RGB = (15, 23, 42)
# (position, alpha) along the scrim, top to bottom
SCRIM_STOPS = ((0.0, 0.0), (0.2, 0.9), (1.0, 1.0))
TITLE_COLOR = (255, 255, 255, 255)
SUMMARY_COLOR = (203, 213, 225, 255)  # #cbd5e1

FONT_CANDIDATES = {
    "bold": [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
        "arialbd.ttf",
    ],
    "regular": [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/System/Library/Fonts/Supplemental/Arial.ttf",
        "arial.ttf",
    ],
}


# =============================================================================
# Data URIs
# =============================================================================


def to_data_uri(data: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def parse_data_uri(value: str) -> tuple[bytes, str]:
    """Decode a data URI (or bare base64) into (bytes, mime type)."""
    match = re.match(r"^data:(.*?);base64,(.*)$", value, re.DOTALL)
    if match:
        return base64.b64decode(match.group(2)), match.group(1) or "image/png"
    return base64.b64decode(value), "image/png"


# =============================================================================
# Tone filters
# =============================================================================


def _clamp(value: float) -> int:
    if value <= 0:
        return 0
    if value >= 255:
        return 255
    return int(round(value))


def tone_lut(brightness: float, contrast: float) -> list[int]:
    """Per-channel lookup table: scale by brightness, then stretch around mid-grey."""
    b = brightness / 100.0
    c = contrast / 100.0
    return [_clamp((v * b - 128.0) * c + 128.0) for v in range(256)]


def adjust_pixels(
    pixels: bytes,
    brightness: float = DEFAULT_LEVEL,
    contrast: float = DEFAULT_LEVEL,
    saturation: float = DEFAULT_LEVEL,
) -> bytes:
    """
    Apply brightness, contrast and saturation to a raw RGBA buffer.

    Levels are percentages where 100 means unchanged. Brightness scales each
    channel, contrast stretches around mid-grey, saturation blends each pixel
    with its luma. Each stage clamps to 0..255 before the next. Alpha is
    preserved.

    Returns:
        A new buffer of the same length, or the input object itself when
        every level is at its default.
    """
    if len(pixels) % 4:
        raise ValueError("RGBA buffer length must be a multiple of 4")
    if brightness == contrast == saturation == DEFAULT_LEVEL:
        return pixels

    table = tone_lut(brightness, contrast)
    s = saturation / 100.0
    out = bytearray(len(pixels))

    for i in range(0, len(pixels), 4):
        r = table[pixels[i]]
        g = table[pixels[i + 1]]
        b = table[pixels[i + 2]]
        if s != 1.0:
            luma = LUMA_WEIGHTS[0] * r + LUMA_WEIGHTS[1] * g + LUMA_WEIGHTS[2] * b
            r = _clamp(luma + (r - luma) * s)
            g = _clamp(luma + (g - luma) * s)
            b = _clamp(luma + (b - luma) * s)
        out[i] = r
        out[i + 1] = g
        out[i + 2] = b
        out[i + 3] = pixels[i + 3]

    return bytes(out)


def apply_filters(
    image_bytes: bytes,
    brightness: float = DEFAULT_LEVEL,
    contrast: float = DEFAULT_LEVEL,
    saturation: float = DEFAULT_LEVEL,
) -> bytes:
    """
    Bake tone filters into an encoded image. Defaults return the input untouched.

    Same stages as adjust_pixels, run inside Pillow: the tone table through
    Image.point and saturation as a blend against the luma image. Channel
    values can differ from adjust_pixels by rounding only.
    """
    if brightness == contrast == saturation == DEFAULT_LEVEL:
        return image_bytes

    with Image.open(BytesIO(image_bytes)) as source:
        rgba = source.convert("RGBA")

    r, g, b, alpha = rgba.split()
    rgb = Image.merge("RGB", (r, g, b))
    if brightness != DEFAULT_LEVEL or contrast != DEFAULT_LEVEL:
        rgb = rgb.point(tone_lut(brightness, contrast) * 3)
    if saturation != DEFAULT_LEVEL:
        luma = rgb.convert("L", matrix=(*LUMA_WEIGHTS, 0.0)).convert("RGB")
        # Factors above 1 extrapolate away from grey; Pillow clips the result
        rgb = Image.blend(luma, rgb, saturation / 100.0)

    result = Image.merge("RGBA", (*rgb.split(), alpha))
    buffer = BytesIO()
    result.save(buffer, format="PNG")
    return buffer.getvalue()


# =============================================================================
# Text overlay
# =============================================================================


def load_font(size: int, weight: str = "regular") -> ImageFont.FreeTypeFont:
    """Load a system TrueType font, falling back to Pillow's bundled one."""
    for path in FONT_CANDIDATES[weight]:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            continue
    logger.debug("No system font for weight %s, using Pillow default", weight)
    return ImageFont.load_default(size=size)


def wrap_words(text: str, max_width: float, measure: Callable[[str], float]) -> list[str]:
    """
    Greedily pack words into lines no wider than max_width.

    A word that is wider than max_width on its own still gets its own line.
    """
    lines = []
    current = ""

    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if measure(candidate) <= max_width or not current:
            current = candidate
        else:
            lines.append(current)
            current = word

    if current:
        lines.append(current)
    return lines


def scrim_height(height: int, aspect_ratio: str) -> float:
    """
    Scrim height as a fraction of the image height: 0.25 for 9:16, 0.3 otherwise.

    For the same width a 9:16 image is much taller, so its quarter is a taller
    band than 30% of a landscape image.
    """
    return height * (0.25 if aspect_ratio == "9:16" else 0.3)


def scrim_alpha(position: float) -> float:
    """Interpolated scrim opacity at a 0..1 position from the scrim's top."""
    for (p0, a0), (p1, a1) in zip(SCRIM_STOPS, SCRIM_STOPS[1:]):
        if position <= p1:
            return a0 + (a1 - a0) * (position - p0) / (p1 - p0)
    return SCRIM_STOPS[-1][1]


def _draw_scrim(overlay: Image.Image, top: float) -> None:
    draw = ImageDraw.Draw(overlay)
    width, height = overlay.size
    span = height - top
    start = int(math.floor(top))
    for y in range(start, height):
        position = max(0.0, (y - top) / span) if span else 1.0
        alpha = int(round(scrim_alpha(position) * 255))
        draw.line([(0, y), (width, y)], fill=SCRIM_RGB + (alpha,))


def overlay_text(
    image_bytes: bytes,
    title: str,
    summary: str,
    aspect_ratio: str = "4:3",
    title_font: Optional[ImageFont.FreeTypeFont] = None,
    summary_font: Optional[ImageFont.FreeTypeFont] = None,
) -> bytes:
    """
    Draw a title and word-wrapped summary over a gradient scrim.

    Returns:
        PNG bytes with the same pixel dimensions as the input
    """
    with Image.open(BytesIO(image_bytes)) as source:
        base = source.convert("RGBA")

    width, height = base.size
    padding = width * 0.05
    scrim = scrim_height(height, aspect_ratio)

    overlay = Image.new("RGBA", base.size, (0, 0, 0, 0))
    _draw_scrim(overlay, height - scrim)
    composed = Image.alpha_composite(base, overlay)
    draw = ImageDraw.Draw(composed)

    title_size = max(1, math.floor(width * 0.05))
    title_font = title_font or load_font(title_size, "bold")
    draw.text((padding, height - scrim * 0.6), title, font=title_font, fill=TITLE_COLOR, anchor="ls")

    summary_size = max(1, math.floor(width * 0.03))
    summary_font = summary_font or load_font(summary_size)
    max_width = width - padding * 2
    line_height = summary_size * 1.4
    y = height - scrim * 0.45
    for line in wrap_words(summary, max_width, summary_font.getlength):
        draw.text((padding, y), line, font=summary_font, fill=SUMMARY_COLOR, anchor="ls")
        y += line_height

    buffer = BytesIO()
    composed.save(buffer, format="PNG")
    return buffer.getvalue()
