from .prompt import Prompt
from .prompts_library import BUNDLED_PROMPTS_DIR, PromptsLibrary

__all__ = [
    "BUNDLED_PROMPTS_DIR",
    "Prompt",
    "PromptsLibrary",
]
