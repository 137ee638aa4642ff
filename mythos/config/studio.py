"""
Studio constants for Mythos & Canvas.

Reader, history and publishing defaults shared by the core and the API.
"""

# Studio constants
STUDIO_CONSTANTS = {
    "chars_per_page": 1200,  # Reader page budget (advisory, lines never split)
    "default_chapter_title": "Prologue",
    "untitled_story": "Untitled Story",
    "excerpt_length": 150,
    "image_history_limit": 20,
    "chat_title_length": 30,
    "storage_schema_version": 2,
}

# Fixed store keys (one JSON document per key)
STORAGE_KEYS = {
    "story_history": "mythos_history",
    "image_history": "mythos_image_history",
    "chat_history": "mythos_chat_history",
    "last_session": "mythos_last_session_id",
}
