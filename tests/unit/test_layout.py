"""Unit tests for the print layout previewer."""

import pytest

from mythos.core.errors import LayoutError
from mythos.core.layout import (
    build_preview,
    compute_page_geometry,
    divider_glyph,
    first_body_paragraph,
    is_divider,
    margin_twips,
    paper_twips,
    render_dividers,
    split_drop_cap,
)
from mythos.core.types import ExtraSection, PublishingConfig


class TestPageGeometry:
    """Tests for paper and margin presets converted to pixels."""

    def test_six_by_nine_normal_margin(self):
        geometry = compute_page_geometry("6x9", "normal", zoom=1.0)

        assert geometry.page_width == 576
        assert geometry.page_height == 864
        assert geometry.margin_px == pytest.approx(76.8)
        assert geometry.content.x == pytest.approx(76.8)
        assert geometry.content.width == pytest.approx(576 - 2 * 76.8)
        assert geometry.content.height == pytest.approx(864 - 2 * 76.8)

    def test_zoom_scales_everything(self):
        base = compute_page_geometry("6x9", "normal", zoom=1.0)
        zoomed = compute_page_geometry("6x9", "normal", zoom=0.5)

        assert zoomed.page_width == pytest.approx(base.page_width / 2)
        assert zoomed.margin_px == pytest.approx(base.margin_px / 2)
        assert zoomed.font_px == pytest.approx(base.font_px / 2)

    def test_regions_tile_the_content_box(self):
        g = compute_page_geometry("5x8", "wide", zoom=1.0, font_size=12)

        assert g.font_px == pytest.approx(16)
        assert g.heading.height == pytest.approx(48)
        assert g.footer.height == pytest.approx(32)
        assert g.heading.height + g.body.height + g.footer.height == pytest.approx(g.content.height)
        assert g.body.y == pytest.approx(g.heading.y + g.heading.height)
        assert g.footer.y == pytest.approx(g.body.y + g.body.height)

    def test_narrow_margin(self):
        assert compute_page_geometry("6x9", "narrow").margin_px == pytest.approx(48)

    @pytest.mark.parametrize("paper,margin,zoom", [
        ("7x10", "normal", 1.0),
        ("6x9", "huge", 1.0),
        ("6x9", "normal", 0),
        ("6x9", "normal", -1),
    ])
    def test_invalid_input_raises(self, paper, margin, zoom):
        with pytest.raises(LayoutError):
            compute_page_geometry(paper, margin, zoom)

    def test_layout_error_is_value_error(self):
        with pytest.raises(ValueError):
            compute_page_geometry("6x9", "normal", zoom=0)


class TestTwips:
    def test_inch_paper_converts_exactly(self):
        assert paper_twips("6x9") == (8640, 12960)

    def test_metric_paper_uses_table(self):
        assert paper_twips("A4") == (11906, 16838)

    def test_margins(self):
        assert margin_twips("normal") == 1440
        with pytest.raises(LayoutError):
            margin_twips("extra")


class TestDropCap:
    """Tests for isolating the opening letter."""

    def test_skips_title_and_chapter_heading(self, sample_story_text):
        assert first_body_paragraph(sample_story_text).startswith("Mara found")

    def test_split(self, sample_story_text):
        cap = split_drop_cap(sample_story_text)
        assert cap.letter == "M"
        assert cap.remainder.startswith("ara found the first glass apple")

    @pytest.mark.parametrize(
        "content",
        [
            "# Title\n\n---\n\nRain came first.",
            "# Title\n\n### Part One\n\nRain came first.",
            "## Chapter 1\n* * *\n\nRain came first.",
        ],
    )
    def test_skips_dividers_and_sub_headings(self, content):
        cap = split_drop_cap(content)
        assert cap.letter == "R"
        assert cap.remainder == "ain came first."

    def test_headings_only_gives_empty_cap(self):
        cap = split_drop_cap("# Title\n\n## Chapter")
        assert cap.letter == ""
        assert cap.remainder == ""


class TestDividers:
    """Tests for scene divider detection and rendering."""

    @pytest.mark.parametrize("line", ["---", "***", "* * *", "~~~", "  ---  "])
    def test_recognised_tokens(self, line):
        assert is_divider(line)

    @pytest.mark.parametrize("line", ["--", "- - -", "text --- text", ""])
    def test_other_lines_are_not_dividers(self, line):
        assert not is_divider(line)

    @pytest.mark.parametrize("style,glyph", [
        ("ornament", "❖ ❖ ❖"),
        ("asterism", "⁂"),
        ("stars", "✦ ✦ ✦"),
        ("rule", "────"),
    ])
    def test_styles(self, style, glyph):
        assert divider_glyph(style) == glyph
        assert render_dividers("a\n***\nb", style) == f"a\n{glyph}\nb"

    def test_unknown_style_raises(self):
        with pytest.raises(LayoutError):
            divider_glyph("confetti")


class TestBuildPreview:
    """Tests for the full publisher preview."""

    def test_preview_uses_config(self, sample_story):
        config = PublishingConfig(paper_size="5x8", margins="narrow")
        config.metadata.author = "R. Vale"
        config.layout.divider_style = "asterism"
        config.extra_sections = [
            ExtraSection(id="p", title="Preface", content="Before", type="preface"),
            ExtraSection(id="e", title="Afterword", content="After", type="epilogue"),
        ]

        preview = build_preview(sample_story, config, zoom=1.0)

        assert preview.title == "The Glass Orchard"
        assert preview.author == "R. Vale"
        assert preview.geometry.page_width == 480
        assert [s.title for s in preview.front_matter] == ["Preface"]
        assert [s.title for s in preview.back_matter] == ["Afterword"]
        assert [c.title for c in preview.toc] == ["Chapter 1: Frost", "Chapter 2: Thaw"]
        assert preview.drop_cap.letter == "M"
        assert any("⁂" in p.content for p in preview.pages)
        assert not any(line == "---" for p in preview.pages for line in p.content.split("\n"))

    def test_toc_and_drop_caps_can_be_disabled(self, sample_story):
        config = PublishingConfig(include_toc=False)
        config.layout.drop_caps = False

        preview = build_preview(sample_story, config)

        assert preview.toc == []
        assert preview.drop_cap is None

    def test_defaults_without_config(self, sample_story):
        preview = build_preview(sample_story)
        assert preview.geometry.paper == "6x9"
        assert preview.geometry.margin == "normal"
