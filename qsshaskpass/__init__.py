"""
qsshaskpass - a Qt askpass helper for ssh, ssh-add, git and mercurial.

Reads the prompt the calling tool passes in, works out what is being
asked for, answers from the system keyring when it can and otherwise
asks the user.

- askpass: prompt classification and request handling
- store: keyring-backed secret storage
- dialogs: PyQt6 and terminal prompts
"""

__version__ = "0.1.0"

from .askpass import (
    AskpassSession,
    ClassificationResult,
    PromptClassifier,
    RequestKind,
    classify,
)
from .store import SecretStore, KeyringStore
from .dialogs import AskpassResponse, Interaction, ConsoleInteraction

__all__ = [
    # Classification
    "RequestKind",
    "ClassificationResult",
    "PromptClassifier",
    "classify",
    # Orchestration
    "AskpassSession",
    # Storage
    "SecretStore",
    "KeyringStore",
    # Prompts
    "AskpassResponse",
    "Interaction",
    "ConsoleInteraction",
]
