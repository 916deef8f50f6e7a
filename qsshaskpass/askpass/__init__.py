"""
Askpass request handling.

This module provides:
- PromptClassifier / classify: turn a prompt string into a request
- AskpassSession: answer one request from the store or the user
"""

from .prompt import (
    RequestKind,
    ClassificationResult,
    PromptRule,
    PromptClassifier,
    PROMPT_RULES,
    UNPARSED,
    classify,
)
from .session import (
    AskpassSession,
    AskpassState,
    SessionOutcome,
    DEFAULT_PROMPT,
    EXIT_SUCCESS,
    EXIT_CANCELLED,
)

__all__ = [
    "RequestKind",
    "ClassificationResult",
    "PromptRule",
    "PromptClassifier",
    "PROMPT_RULES",
    "UNPARSED",
    "classify",
    "AskpassSession",
    "AskpassState",
    "SessionOutcome",
    "DEFAULT_PROMPT",
    "EXIT_SUCCESS",
    "EXIT_CANCELLED",
]
