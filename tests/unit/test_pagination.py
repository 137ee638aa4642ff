"""Unit tests for reader pagination."""

from mythos.core.pagination import extract_chapters, extract_story_title, paginate


class TestPaginate:
    """Tests for splitting story text into pages."""

    def test_empty_content_is_single_page(self):
        pages = paginate("")
        assert len(pages) == 1
        assert pages[0].content == ""
        assert pages[0].chapter_title == ""
        assert pages[0].page_number == 1

    def test_whitespace_content_is_kept_verbatim(self):
        pages = paginate("  \n\n ")
        assert len(pages) == 1
        assert pages[0].content == "  \n\n "

    def test_text_before_first_chapter_is_prologue(self):
        pages = paginate("Once upon a time.")
        assert pages[0].chapter_title == "Prologue"
        assert pages[0].content == "Once upon a time.\n"

    def test_chapter_heading_starts_new_page(self, sample_story_text):
        pages = paginate(sample_story_text)

        assert [p.page_number for p in pages] == list(range(1, len(pages) + 1))
        assert pages[0].content.startswith("# The Glass Orchard")
        assert pages[1].content.startswith("## Chapter 1: Frost")
        assert pages[-1].content.startswith("## Chapter 2: Thaw")

    def test_finished_page_keeps_previous_chapter_title(self):
        content = "Intro line\n## One\nFirst chapter\n## Two\nSecond chapter"
        pages = paginate(content)

        assert [p.chapter_title for p in pages] == ["Prologue", "One", "Two"]

    def test_pages_join_back_to_input(self, sample_story_text):
        pages = paginate(sample_story_text, chars_per_page=40)
        assert "".join(p.content for p in pages) == sample_story_text + "\n"

    def test_budget_breaks_before_overflowing_line(self):
        content = "\n".join(["a" * 30] * 4)
        pages = paginate(content, chars_per_page=70)

        assert len(pages) == 2
        assert pages[0].content == ("a" * 30 + "\n") * 2
        assert all(p.chapter_title == "Prologue" for p in pages)

    def test_long_line_is_never_split(self):
        line = "x" * 500
        pages = paginate(line, chars_per_page=100)
        assert len(pages) == 1
        assert pages[0].content == line + "\n"

    def test_blank_lines_carry_across_heading(self):
        pages = paginate("\n\n## Start\nText")
        assert len(pages) == 1
        assert pages[0].content == "\n\n## Start\nText\n"
        assert pages[0].chapter_title == "Start"

    def test_trailing_blank_lines_stay_on_last_page(self):
        pages = paginate("Text\n\n\n", chars_per_page=3)
        assert pages[-1].content.endswith("\n\n\n")
        assert "".join(p.content for p in pages) == "Text\n\n\n\n"


class TestTitleAndChapters:
    """Tests for title and table-of-contents extraction."""

    def test_extract_story_title(self, sample_story_text):
        assert extract_story_title(sample_story_text) == "The Glass Orchard"

    def test_missing_title_is_untitled(self):
        assert extract_story_title("## Chapter only") == "Untitled Story"

    def test_chapter_heading_is_not_a_title(self):
        assert extract_story_title("## One\n# Real Title") == "Real Title"

    def test_extract_chapters_reports_pages(self, sample_story_text):
        chapters = extract_chapters(sample_story_text)

        assert [c.title for c in chapters] == ["Chapter 1: Frost", "Chapter 2: Thaw"]
        assert chapters[0].page_number == 2
        assert chapters[1].page_number > chapters[0].page_number
