#!/usr/bin/env python3
"""
CLI for generating stories.

Usage:
    python cli/generate_story.py "a lighthouse keeper guarding something ancient"
    python cli/generate_story.py --template "The Starlight Guardian"
    python cli/generate_story.py "a heist on a moon base" --genre "Sci-Fi" --tone "Wry"
    python cli/generate_story.py --continue output/my_story.md --output my_story_part2.md
"""

import argparse
import asyncio
import re
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from mythos.api.config import STORE_DIR
from mythos.api.database import (
    ChatSessionRepository,
    ImageHistoryRepository,
    JsonFileStore,
    StoryHistoryRepository,
)
from mythos.api.services.studio import StudioController
from mythos.core.errors import GenerationError
from mythos.core.templates import STORY_TEMPLATES, config_from_template
from mythos.core.types import StoryConfig


def build_config(args: argparse.Namespace) -> StoryConfig:
    overrides = {
        key: value
        for key, value in {
            "core_premise": args.premise,
            "genre": args.genre,
            "tone": args.tone,
            "target_audience": args.audience,
            "chapter_count": args.chapters,
        }.items()
        if value
    }
    if args.continue_from:
        overrides["existing_content"] = Path(args.continue_from).read_text()

    if args.template:
        return config_from_template(args.template, **overrides)
    return StoryConfig(**overrides)


async def run(args: argparse.Namespace, config: StoryConfig) -> str:
    store = JsonFileStore(STORE_DIR)
    controller = StudioController(
        stories=StoryHistoryRepository(store),
        images=ImageHistoryRepository(store),
        chats=ChatSessionRepository(store),
    )

    text = ""
    async for text_so_far in controller.generate_story(config):
        if args.stdout:
            sys.stdout.write(text_so_far[len(text):])
            sys.stdout.flush()
        text = text_so_far

    if args.verbose and controller.state.active_story_id:
        print(f"\nSaved to history as {controller.state.active_story_id}", file=sys.stderr)
    return text


def main():
    parser = argparse.ArgumentParser(
        description="Generate long-form stories from a premise or template",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python cli/generate_story.py "a clockmaker who can rewind one minute"
    python cli/generate_story.py --template "The Starlight Guardian" --stdout
    python cli/generate_story.py "first contact" --genre "Hard Sci-Fi" --chapters 3
    python cli/generate_story.py --continue output/clockmaker.md
    python cli/generate_story.py --list-templates
        """,
    )

    parser.add_argument(
        "premise",
        type=str,
        nargs="?",
        default="",
        help="The core premise of the story",
    )

    parser.add_argument(
        "--template", "-t",
        type=str,
        default=None,
        help="Start from a named story template",
    )

    parser.add_argument(
        "--list-templates",
        action="store_true",
        help="List available templates and exit",
    )

    parser.add_argument("--genre", type=str, default=None, help="Genre")
    parser.add_argument("--tone", type=str, default=None, help="Tone")
    parser.add_argument("--audience", type=str, default=None, help="Target audience")
    parser.add_argument("--chapters", type=str, default=None, help="Number of chapters")

    parser.add_argument(
        "--continue",
        dest="continue_from",
        type=str,
        default=None,
        help="Markdown file holding a story to continue",
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file name (saved to output/ directory). Auto-generated if not specified.",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Stream to terminal instead of saving to file",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print progress information",
    )

    args = parser.parse_args()

    if args.list_templates:
        for template in STORY_TEMPLATES:
            print(f"{template.title}  ({template.genre})")
        return

    if not args.premise and not args.template and not args.continue_from:
        parser.error("a premise, --template or --continue is required")

    try:
        config = build_config(args)
    except KeyError as e:
        parser.error(str(e))

    if args.verbose:
        print(f"Generating story: {config.core_premise[:80] or '(continuation)'}", file=sys.stderr)

    try:
        story = asyncio.run(run(args, config))
    except GenerationError as e:
        print(f"Generation failed: {e}", file=sys.stderr)
        sys.exit(1)

    if args.stdout:
        print()
        return

    output_dir = Path(__file__).parent.parent / "output"
    output_dir.mkdir(exist_ok=True)

    if args.output:
        filename = args.output if args.output.endswith(".md") else f"{args.output}.md"
    else:
        seed = config.core_premise or args.template or "story"
        slug = re.sub(r"[^a-z0-9]+", "_", seed.lower())[:30].strip("_")
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{slug}_{timestamp}.md"

    output_path = output_dir / filename
    output_path.write_text(story)
    print(f"Story saved to: {output_path}")


if __name__ == "__main__":
    main()
