"""
Preset catalogues for the studio.

- Story templates: ready-made wizard answers for one-click generation
- Infographic use cases and design styles
- Cover art styles for the publisher
"""

from dataclasses import dataclass, replace
from typing import Optional

from .types import StoryConfig


@dataclass(frozen=True)
class StoryTemplate:
    title: str
    genre: str
    config: StoryConfig


STORY_TEMPLATES: list[StoryTemplate] = [
    StoryTemplate(
        title="The Starlight Guardian",
        genre="Kids / Magical",
        config=StoryConfig(
            core_premise="In the sleepy town of Oakhaven, a lonely eight-year-old named Leo discovers a fallen star hiding in his dusty attic. But the star is fading, and the Shadow King, a creature made of nightmares who hunts light, is closing in. Leo must cross the Whispering Woods to return the star to the constellation of the Guardian before the last flicker dies out.",
            genre="Children's Fantasy, Adventure, Coming-of-Age",
            tone="Whimsical, heartwarming, wondrous, slightly perilous",
            narrative_style="Third-person omniscient, simple and lyrical language",
            target_audience="Middle Grade (8-12)",
            length_structure="Short Story, linear adventure structure",
            chapter_count="3",
            key_elements="Protagonist: Leo (brave but small). Companion: Lumina (the star). Antagonist: The Shadow King. Setting: Oakhaven and the magical Whispering Woods. Theme: Even the smallest light can conquer darkness.",
            complexity="Low",
            ending_type="Happy",
            constraints="No graphic violence, focus on problem solving through kindness and courage.",
        ),
    ),
    StoryTemplate(
        title="Neon Rain",
        genre="Sci-Fi / Noir",
        config=StoryConfig(
            core_premise="New Shanghai, 2099. Rain never stops, and memories are the ultimate currency. Kael, a washed-up memory broker, stumbles upon a 'Ghost File', a raw memory of a political assassination that history claims never happened. Hunted by the Synthetic Enforcers and his own fractured past, he must decrypt the file before his mind is wiped clean.",
            genre="Cyberpunk, Noir Mystery, Tech-Thriller",
            tone="Dark, gritty, atmospheric, cynical, rainy",
            narrative_style="First-person perspective (hardboiled detective style)",
            target_audience="Adult Fiction",
            length_structure="Novelette, with non-linear flashbacks to encrypted memories",
            chapter_count="5",
            key_elements="Setting: Dystopian New Shanghai. Tech: Mnemo-Link implants. Atmosphere: Perpetual rain, neon, urban decay. Conflict: One man against a mega-corporation rewriting history.",
            complexity="High",
            ending_type="Twist",
            constraints="Focus on sensory details of technology, rain, and urban isolation.",
        ),
    ),
    StoryTemplate(
        title="Whispers of the Baobab",
        genre="African Mythology",
        config=StoryConfig(
            core_premise="In a solarpunk Lagos where ancient spirits merge with holographic tech, Zuri, a datamancer, accidentally downloads the consciousness of Eshu, the Trickster God, into her neural link. Eshu demands a tribute: restore the flow of the digital river that sustains the city, or he will unleash a virus of chaos.",
            genre="Afrofuturism, Mythic Fantasy, Urban Fantasy",
            tone="Vibrant, rhythmic, spiritual yet high-tech, energetic",
            narrative_style="Third-person limited, rich cultural imagery",
            target_audience="Young Adult (14-18)",
            length_structure="Short Story",
            chapter_count="5",
            key_elements="Fusion: Yoruba mythology meets advanced cybernetics. Setting: Neo-Lagos with floating cars and spirit shrines. Characters: Zuri (tech-savvy), Eshu (chaotic ancient spirit). Theme: Balancing tradition with progress.",
            complexity="Medium",
            ending_type="Open",
            constraints="Respectful integration of Yoruba mythology and modern African urban life.",
        ),
    ),
    StoryTemplate(
        title="The Oracle's Lament",
        genre="Greek Mythology",
        config=StoryConfig(
            core_premise="A forgotten minor god of margins and footnotes attempts to change a prophecy to save a mortal scribe they have fallen in love with, defying Zeus's absolute decree. As the Fates weave the final thread, the god must trade their immortality for a chance to rewrite a single line of history.",
            genre="Historical Fantasy, Romance, Tragedy",
            tone="Epic, tragic, poetic, grand",
            narrative_style="Third-person omniscient, elevated prose",
            target_audience="Adult",
            length_structure="Novelette",
            chapter_count="5",
            key_elements="Setting: Mount Olympus and Ancient Athens. Conflict: Fate vs. Free Will. Characters: The Nameless God, Elara the Scribe. Theme: Sacrifice for love.",
            complexity="High",
            ending_type="Tragic",
            constraints="Use homeric epithets occasionally. Classical dialogue style. Emotional weight.",
        ),
    ),
    StoryTemplate(
        title="Quantum Hearts",
        genre="Sci-Fi Romance",
        config=StoryConfig(
            core_premise="Dr. Aris Thorne and Commander Elara Vance are on opposite sides of a galactic war, separated by light-years. Through a freak accident in a quantum entanglement experiment, they begin to hear each other's thoughts, and plot a way to end the war so they can meet for the first time.",
            genre="Space Opera, Romance, Drama",
            tone="Melancholic, longing, intellectual, high-stakes",
            narrative_style="Epistolary (Logs, messages, and shared thoughts)",
            target_audience="Adult",
            length_structure="Short Story",
            chapter_count="3",
            key_elements="Theme: Connection across impossible distance. Tech: Quantum Communicator. Setting: Two different starships. Ending: They finally meet in the ruins of a battlefield.",
            complexity="Medium",
            ending_type="Bittersweet",
            constraints="Focus on dialogue and internal monologues. Minimal action, maximum emotion.",
        ),
    ),
    StoryTemplate(
        title="The Clockwork Alchemist",
        genre="Steampunk Fantasy",
        config=StoryConfig(
            core_premise="In a fog-choked Victorian London powered by steam and alchemy, Lyra, a disgraced alchemist, discovers the formula for the 'Philosopher's Gear', an engine of infinite energy. Hunted by the Royal Gear Guard, she must install the heart into her automaton father to save his soul before the city consumes them both.",
            genre="Steampunk, Fantasy, Adventure",
            tone="Adventurous, gritty, steam-filled, urgent",
            narrative_style="Third-person limited",
            target_audience="Young Adult",
            length_structure="Standard adventure",
            chapter_count="5",
            key_elements="Setting: Victorian London with mechs and airships. Magic: Alchemy and Steam. Item: The Philosophers Gear. Antagonist: The Lord High Mechanist.",
            complexity="Medium",
            ending_type="Happy",
            constraints="Detailed descriptions of machinery, brass, gears, and steam.",
        ),
    ),
    StoryTemplate(
        title="Midnight at the Manor",
        genre="Mystery / Horror",
        config=StoryConfig(
            core_premise="Six strangers receive golden invitations to Blackwood Manor for a dinner party hosted by a recluse billionaire. When they arrive, the doors lock, and the host is found dead at the head of the table. As a storm rages outside, they realize the killer is among them.",
            genre="Gothic Horror, Murder Mystery, Thriller",
            tone="Suspenseful, claustrophobic, eerie, psychological",
            narrative_style="Third-person rotating POV (shifting between guests)",
            target_audience="Adult",
            length_structure="Classic whodunit structure",
            chapter_count="5",
            key_elements="Setting: Decaying Victorian Mansion during a storm. Trope: Locked room mystery. Characters: The Soldier, The Actress, The Doctor, The thief. Secret: Everyone has a connection to the host.",
            complexity="Medium",
            ending_type="Twist",
            constraints="No supernatural elements, purely psychological and physical danger. High tension.",
        ),
    ),
    StoryTemplate(
        title="Echoes of the Ronin",
        genre="Historical Tradition",
        config=StoryConfig(
            core_premise="Japan, 1605. Kenji, a masterless samurai haunted by his failure to protect his lord, arrives in a village threatened by bandits who demand their harvest. He must teach the villagers to defend themselves and face the bandit leader, a ghost from his past, without drawing his blade until the final moment.",
            genre="Historical Fiction, Action, Drama",
            tone="Honor-bound, contemplative, intense, atmospheric",
            narrative_style="Third-person limited (Stoic and observational)",
            target_audience="Adult",
            length_structure="Short Story",
            chapter_count="3",
            key_elements="Setting: Edo period Japan (Autumn). Theme: Bushido, Pacifism vs. Necessity. Conflict: Internal guilt vs. External threat.",
            complexity="Medium",
            ending_type="Triumphant",
            constraints="Historical accuracy in weapons, tea ceremonies, and customs. Slow build to fast action.",
        ),
    ),
]


def get_template(title: str) -> Optional[StoryTemplate]:
    """Look up a story template by title (case-insensitive)."""
    for template in STORY_TEMPLATES:
        if template.title.lower() == title.lower():
            return template
    return None


def config_from_template(title: str, **overrides) -> StoryConfig:
    """
    Start a StoryConfig from a template, replacing any given fields.

    Raises:
        KeyError: If no template has that title
    """
    template = get_template(title)
    if template is None:
        raise KeyError(f"Unknown story template: {title}")
    return replace(template.config, **overrides)


# use case id -> (prompt prefix, default style)
INFOGRAPHIC_USE_CASES = {
    "custom": ("", "Swiss"),
    "linkedin": ("Create a thought leadership carousel about: ", "Corporate Minimalism"),
    "executive": ("Summarize these meeting notes into key decisions: ", "Swiss"),
    "flashcards": ("Create study flashcards for: ", "Flat 2.5D"),
    "pitch": ("Visualize a pitch deck for a startup that does: ", "Neo-Futuristic"),
    "onboarding": ("Create an onboarding workflow for: ", "Hand Drawn"),
    "book": ("Visualize the key concepts of the book: ", "Swiss"),
    "recipe": ("Create a visual recipe guide for: ", "Hand Drawn"),
    "features": ("Showcase the features of: ", "Corporate Minimalism"),
    "travel": ("Visual itinerary for a trip to: ", "Flat 2.5D"),
    "goals": ("Visualize these personal goals: ", "Neo-Futuristic"),
}

INFOGRAPHIC_STYLES = ["Swiss", "Corporate Minimalism", "Hand Drawn", "Neo-Futuristic", "Flat 2.5D"]

COVER_STYLES = [
    "Minimalist Vector",
    "Cinematic Fantasy",
    "Vintage Paperback",
    "Abstract Geometric",
    "Watercolor Art",
    "Dark Horror",
    "Cyberpunk Neon",
    "Oil Painting",
]


def apply_use_case(use_case: Optional[str], text: str, style: Optional[str] = None) -> tuple[str, str]:
    """
    Prefix the text for an infographic use case and pick its style.

    An explicit style wins over the use case default.

    Raises:
        KeyError: If the use case is unknown
    """
    prefix, default_style = INFOGRAPHIC_USE_CASES[use_case or "custom"]
    return f"{prefix}{text}", style or default_style
