#!/usr/bin/env python3
"""
CLI for exporting a story as a book.

Usage:
    python cli/export_book.py my_story.md --format docx
    python cli/export_book.py my_story.md --format pdf --paper 5x8 --margins wide
    python cli/export_book.py --story-id 3f2a9c1b7d4e --format docx
"""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from mythos.api.config import STORE_DIR
from mythos.api.database import JsonFileStore, StoryHistoryRepository
from mythos.core.exporters import export_docx, export_markdown, export_story_pdf, story_filename
from mythos.core.layout import DIVIDER_STYLES, MARGIN_INCHES, PAPER_SIZES
from mythos.core.types import HistoryItem, PublishingConfig, StoryConfig

EXPORTERS = {
    "docx": export_docx,
    "pdf": export_story_pdf,
}


def load_story(args: argparse.Namespace) -> HistoryItem:
    if args.story_id:
        story = StoryHistoryRepository(JsonFileStore(STORE_DIR)).get(args.story_id)
        if story is None:
            sys.exit(f"Story {args.story_id} not found in {STORE_DIR}")
        return story
    return HistoryItem.from_content(Path(args.source).read_text(), StoryConfig())


def main():
    parser = argparse.ArgumentParser(
        description="Export a story as a print-ready DOCX, PDF or Markdown file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python cli/export_book.py output/clockmaker.md --author "A. Writer"
    python cli/export_book.py output/clockmaker.md --format pdf --paper A5
    python cli/export_book.py --story-id 3f2a9c1b7d4e --dividers asterism
        """,
    )

    parser.add_argument("source", type=str, nargs="?", help="Markdown story file")
    parser.add_argument("--story-id", type=str, default=None, help="Export a story from history instead")
    parser.add_argument("--format", "-f", choices=["docx", "pdf", "md"], default="docx", help="Output format (default: docx)")
    parser.add_argument("--author", type=str, default=None, help="Author name for the title page")
    parser.add_argument("--paper", choices=sorted(PAPER_SIZES), default=None, help="Trim size (default: 6x9)")
    parser.add_argument("--margins", choices=sorted(MARGIN_INCHES), default=None, help="Margin preset (default: normal)")
    parser.add_argument("--dividers", choices=sorted(DIVIDER_STYLES), default=None, help="Scene divider style")
    parser.add_argument("--no-toc", action="store_true", help="Omit the table of contents")
    parser.add_argument("--output", "-o", type=str, default=None, help="Output path")

    args = parser.parse_args()
    if not args.source and not args.story_id:
        parser.error("a source file or --story-id is required")

    story = load_story(args)

    config = story.publishing_config or PublishingConfig()
    if args.author:
        config.metadata.author = args.author
    if args.paper:
        config.paper_size = args.paper
    if args.margins:
        config.margins = args.margins
    if args.dividers:
        config.layout.divider_style = args.dividers
    if args.no_toc:
        config.include_toc = False

    if args.format == "md":
        data = export_markdown(story, config.layout.divider_style)
    else:
        data = EXPORTERS[args.format](story, config)

    output_path = Path(args.output or story_filename(story, args.format))
    output_path.write_bytes(data)
    print(f"Exported to: {output_path}")


if __name__ == "__main__":
    main()
