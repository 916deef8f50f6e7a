"""
Interaction surface: how a human answers an askpass request.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class AskpassResponse:
    """Answer to a secret prompt."""
    success: bool
    value: str = ""
    remember: bool = False  # user asked for the value to be stored


class Interaction(ABC):
    """
    Blocking prompts shown to the user, one per askpass invocation.
    """

    @abstractmethod
    def present_secret_prompt(self, text: str, allow_remember: bool) -> AskpassResponse:
        """
        Ask for a value with masked input.

        Args:
            text: Prompt shown to the user, verbatim from the caller
            allow_remember: Offer the "remember" option (store available)

        Returns:
            AskpassResponse with success=False if cancelled
        """
        pass

    @abstractmethod
    def present_confirmation(self, text: str) -> bool:
        """Ask a yes/no question. True only on explicit acceptance."""
        pass
