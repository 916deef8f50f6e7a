"""
User-facing prompts.

- Interaction: abstract blocking prompt interface
- QtInteraction / PasswordDialog: PyQt6 dialogs
- ConsoleInteraction: terminal prompts via click
"""

from .base import AskpassResponse, Interaction
from .console import ConsoleInteraction

__all__ = [
    "AskpassResponse",
    "Interaction",
    "ConsoleInteraction",
]
