from .story_writer import StoryWriter
from .image_studio import ImageStudio
from .infographic_planner import InfographicPlanner, parse_tiles
from .chat_assistant import ChatAssistant, CONNECTION_FAILURE_REPLY
from .text_editor import TextEditor

__all__ = [
    "StoryWriter",
    "ImageStudio",
    "InfographicPlanner",
    "parse_tiles",
    "ChatAssistant",
    "CONNECTION_FAILURE_REPLY",
    "TextEditor",
]
