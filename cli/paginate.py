#!/usr/bin/env python3
"""
Print a story the way the reader pages it, with its table of contents.

Usage:
    python cli/paginate.py my_story.md
    python cli/paginate.py my_story.md --chars-per-page 800 --toc-only
"""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from mythos.config import STUDIO_CONSTANTS
from mythos.core.pagination import extract_chapters, extract_story_title, paginate


def main():
    parser = argparse.ArgumentParser(
        description="Split a Markdown story into reader pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("source", type=str, help="Markdown story file")
    parser.add_argument(
        "--chars-per-page",
        type=int,
        default=STUDIO_CONSTANTS["chars_per_page"],
        help=f"Page budget in characters (default: {STUDIO_CONSTANTS['chars_per_page']})",
    )
    parser.add_argument("--toc-only", action="store_true", help="Only print the table of contents")
    args = parser.parse_args()

    content = Path(args.source).read_text()
    pages = paginate(content, args.chars_per_page)

    print(extract_story_title(content))
    print()
    for entry in extract_chapters(content, args.chars_per_page):
        print(f"  {entry.title} .... {entry.page_number}")

    if args.toc_only:
        return

    for page in pages:
        print(f"\n--- Page {page.page_number} | {page.chapter_title} ---\n")
        print(page.content)


if __name__ == "__main__":
    main()
