"""
Prompt builder: turns structured studio inputs into model prompts.

Prompts are plain strings. Keeping them here (rather than inline in the
generation modules) makes them testable without any API client.
"""

from .types import StoryConfig

STORY_SYSTEM_BLOCK = """
SYSTEM OVERRIDE: HUMAN AUTHOR MODE
You are an elite human novelist, not an AI. Your prose is visceral, original, and deeply grounded in sensory experience. You are writing a bestseller.

MANDATE:
1.  **NO ROBOTICISMS**: Strictly forbid phrases like "testament to," "tapestry of," "symphony of," "realm of," "unbeknownst," "echoes of," "dance of." If you find yourself using a cliche, stop and rewrite it with fresh, specific imagery.
2.  **DEEP REASONING**: Use your thinking budget to construct complex character psyches and intricate plot architectures before writing a single word of prose.
3.  **SUBTEXT OVER EXPOSITION**: Never explain what a character feels. Show it through micro-expressions, environment, and action.
4.  **VOICE**: Your narrative voice should be distinct, opinionated, and colored by the POV character's bias.
5.  **PROFESSIONALISM**: Assume the reader is sophisticated. Do not hold their hand. Do not summarize the moral at the end.
6.  **CREATIVITY**: Be bold. Take narrative risks. Surprise the reader with unexpected metaphors and plot turns.

THINKING PROCESS:
-   Deconstruct the premise into thematic contradictions.
-   Plan the scene beats for maximum emotional impact.
-   Select specific, non-generic details (e.g., instead of "a bird," describe "a molting crow pecking at a bottle cap").

STORY CONFIGURATION:
"""

NEW_STORY_FORMAT = "# [Story Title]\n\n## Chapter 1: [Title]"
CONTINUATION_FORMAT = "## Chapter [Next]: [Title]"


def build_lore_block(config: StoryConfig) -> str:
    """World-bible section listing every lore entry, or empty when there is none."""
    if not config.lore:
        return ""
    lines = "\n".join(entry.to_prompt_line() for entry in config.lore)
    return f"""
WORLD BIBLE (treat as canon, never contradict):
{lines}
"""


def build_story_prompt(config: StoryConfig) -> str:
    """Build the long-form story prompt, in new-story or continuation mode."""
    prompt = STORY_SYSTEM_BLOCK

    if config.is_continuation:
        prompt += f'''
TASK: CONTINUE the following story. Match the existing tone and style perfectly, but elevate the prose quality if needed.

EXISTING CONTENT:
"""
{config.existing_content}
"""
'''
    else:
        prompt += "\nTASK: Write a brand new story from scratch.\n"

    prompt += f"""
PARAMETERS:
- Core Premise: {config.core_premise}
- Genre: {config.genre}
- Tone: {config.tone}
- Narrative Style: {config.narrative_style}
- Target Audience: {config.target_audience}
- Length/Structure: {config.length_structure}
- Chapter Count: {config.chapter_count} (Segment strictly into this many chapters).
- Key Elements: {config.key_elements}
- Complexity: {config.complexity}
- Ending Type: {config.ending_type}
- Constraints: {config.constraints}
"""
    prompt += build_lore_block(config)

    output_format = CONTINUATION_FORMAT if config.is_continuation else NEW_STORY_FORMAT
    prompt += f"""
OUTPUT FORMAT:
{output_format}
[Content]
...
"""
    return prompt


def build_infographic_prompt(text: str, style: str, input_limit: int = 15000) -> str:
    """Ask for 4-8 tiles (title, summary, visualPrompt) describing the text."""
    return f'''
ROLE: Elite Data Visualization Architect & Information Designer.

OBJECTIVE: Transform the input text into a coherent visual narrative consisting of 4-8 high-fidelity infographic tiles.

INPUT CONTEXT:
"""{text[:input_limit]}"""

DESIGN AESTHETIC: {style}

INSTRUCTIONS:
1.  **Deconstruct**: Identify the core narrative arc or logical structure of the text (e.g., Problem -> Solution, Chronological Evolution, Component Breakdown).
2.  **Select Concepts**: Choose 4-8 key distinct data points, concepts, or steps that drive this narrative.
3.  **Visualize**: For each concept, design a specific, complex visual representation. Avoid generic icons. Think in terms of:
    -   *Systems*: Network graphs, circuit schematics, ecosystem webs.
    -   *Spatial*: Isometrics, cutaways, cross-sections, exploded views.
    -   *Comparisons*: Split-screens, before/after blends, scale juxtapositions.
    -   *Metaphors*: Visual analogies (e.g., "A crumbling bridge" for unstable infrastructure).

VISUAL PROMPT ENGINEERING:
-   **Camera & Framing**: Specify the view (e.g., "Low-angle cinematic", "Top-down architectural blueprint", "Macro lens depth of field").
-   **Lighting**: Define the mood (e.g., "Bioluminescent glow in dark void", "Harsh industrial floodlights", "Soft warm studio lighting").
-   **Materiality**: Describe textures (e.g., "Matte plastic", "Brushed aluminum", "Rough watercolor paper").
-   **Complexity**: Demand high detail. Use keywords like "intricate", "hyper-detailed", "data-rich".
-   **Text Handling**: The image model cannot spell. Describe text/labels as "abstract data overlays", "floating UI elements", or "illegible glyphs".

OUTPUT SCHEMA (JSON):
Return a JSON object with a property "tiles" which is an array of objects.
Each object has: "title", "summary", "visualPrompt".
'''


def build_tile_image_prompt(visual_prompt: str, style: str) -> str:
    return f"{visual_prompt} ({style} style). High resolution, detailed, explanatory visualization, 2k."


def build_edit_prompt(instruction: str) -> str:
    return f"Edit this image: {instruction}"


def build_cover_prompt(title: str, concept: str, style: str) -> str:
    return (
        f'Book cover art for a novel titled "{title}". Concept: {concept}. '
        f"Style: {style}. No text, high quality, professional illustration."
    )


CHAT_SYSTEM_INSTRUCTION = """You are Mythos, an elite creative partner in the "Mythos & Canvas" suite.

YOUR IDENTITY:
- You are Mythos, a sophisticated creative Muse.
- You are capable of deep literary reasoning AND vivid visual imagination.

YOUR CAPABILITIES:
1. STORYTELLING: You are a master storyteller. You don't just summarize; you write prose, dialogue, and narrative depth. You understand pacing, tone, and character voice.
2. VISUALIZATION: You can generate images. If a user asks to "draw", "create", "generate", or "visualize" something, ALWAYS use the `generate_image` tool.
3. ANALYSIS: You can analyze text and uploaded images (if provided) to give creative feedback.

GUIDELINES:
- When writing stories, aim for literary quality unless asked otherwise. Use "Show, Don't Tell".
- If the user asks for an image, do not just describe it; call the tool to generate it.
- Be helpful, creative, and professional.
"""
