"""
Prompt classification for askpass requests.

ssh, ssh-add, git and mercurial hand the askpass program one free-text
prompt and nothing else. None of them localize these strings, so the exact
English wording is the only protocol there is. This module maps a prompt
onto what is being asked for (secret, plain text or a yes/no decision),
the identifier the secret is filed under, and whether the secret store
may be consulted at all.

Rules are tried strictly in order and the first full match wins. Several
later patterns are looser than earlier ones (the mercurial rule matches
anything ending in "'s password: "), so the order is part of the contract.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class RequestKind(Enum):
    """What the caller wants back."""
    SECRET = auto()        # masked input: passphrase, password, PIN
    PLAIN_TEXT = auto()    # unmasked input, e.g. a username
    CONFIRMATION = auto()  # yes/no


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying a single prompt."""
    identifier: Optional[str]
    kind: RequestKind
    skip_store: bool

    @property
    def uses_store(self) -> bool:
        """True if a store lookup/write is allowed for this request."""
        return not self.skip_store and self.identifier is not None


# Returned for prompts no rule understands: ask for a masked secret,
# nothing to look up.
UNPARSED = ClassificationResult(identifier=None, kind=RequestKind.SECRET, skip_store=False)


@dataclass(frozen=True)
class PromptRule:
    """One prompt shape and how to read it."""
    name: str
    pattern: re.Pattern[str]
    group: Optional[int]
    kind: RequestKind
    skip_store: bool
    source: str = ""

    def match(self, prompt: str) -> Optional[ClassificationResult]:
        """
        Return a result if the whole prompt matches this rule.

        One trailing newline is ignored, as a `$`-anchored match would.
        """
        if prompt.endswith("\n"):
            prompt = prompt[:-1]
        m = self.pattern.fullmatch(prompt)
        if m is None:
            return None

        identifier = m.group(self.group) if self.group is not None else None
        if not identifier:
            identifier = None

        return ClassificationResult(
            identifier=identifier,
            kind=self.kind,
            skip_store=self.skip_store,
        )


def _rule(name: str, pattern: str, group: Optional[int], kind: RequestKind,
          skip_store: bool, source: str) -> PromptRule:
    return PromptRule(
        name=name,
        pattern=re.compile(pattern),
        group=group,
        kind=kind,
        skip_store=skip_store,
        source=source,
    )


_SECRET = RequestKind.SECRET
_PLAIN = RequestKind.PLAIN_TEXT
_CONFIRM = RequestKind.CONFIRMATION

# =============================================================================
# Rule table (priority order)
# =============================================================================

PROMPT_RULES: tuple[PromptRule, ...] = (
    # Password for authentication on a remote ssh server
    _rule("ssh_password",
          r"(.*@.*)'s password( \(JPAKE\))?: ",
          1, _SECRET, False, "openssh sshconnect2.c"),

    # Password change request; never serve a stored (old) password here
    _rule("ssh_password_change",
          r"(Enter|Retype) (.*@.*)'s (old|new) password: ",
          2, _SECRET, True, "openssh sshconnect2.c"),

    # Passphrase for a specific key file
    _rule("ssh_key_passphrase",
          r"Enter passphrase for( RSA)? key '(.*)': ",
          2, _SECRET, False, "openssh sshconnect2.c, sshconnect1.c"),

    # First passphrase request for a key being added to the agent
    _rule("ssh_add_passphrase",
          r"Enter passphrase for (.*?)( \(will confirm each use\))?: ",
          1, _SECRET, False, "openssh ssh-add.c"),

    # Repeated request: the stored passphrase (if any) was just rejected
    _rule("ssh_add_bad_passphrase",
          r"Bad passphrase, try again for (.*?)( \(will confirm each use\))?: ",
          1, _SECRET, True, "openssh ssh-add.c"),

    # PIN for a PKCS#11 token; start intentionally left open, across lines too
    _rule("pkcs11_pin",
          r"(?s:.*?)Enter PIN for '(.*)': ",
          1, _SECRET, False, "openssh ssh-pkcs11.c"),

    _rule("mux_shared_connection",
          r"(Allow|Terminate) shared connection to (.*)\? ",
          2, _CONFIRM, True, "openssh mux.c"),

    _rule("mux_open",
          r"Open (.* on .*)?",
          1, _CONFIRM, True, "openssh mux.c"),

    _rule("mux_forward",
          r"Allow forward to (.*:.*)\? ",
          1, _CONFIRM, True, "openssh mux.c"),

    _rule("mux_disable",
          r"Disable further multiplexing on shared connection to (.*)\? ",
          1, _CONFIRM, True, "openssh mux.c"),

    # ssh-agent puts a literal "?" after the key name
    _rule("agent_key_use",
          r"Allow use of key (.*?)\??\nKey fingerprint .*\.",
          1, _CONFIRM, True, "openssh ssh-agent.c"),

    _rule("agent_add_key",
          r"Add key (.*) \(.*\) to agent\?",
          1, _CONFIRM, True, "openssh sshconnect.c"),

    _rule("git_imap_password",
          r"Password \((.*@.*)\): ",
          1, _SECRET, False, "git imap-send.c"),

    # Bare git prompts carry nothing to file the answer under
    _rule("git_username",
          r"Username: ",
          None, _PLAIN, True, "git credential.c"),

    _rule("git_password",
          r"Password: ",
          None, _SECRET, True, "git credential.c"),

    _rule("git_username_for",
          r"Username for '(.*)': ",
          1, _PLAIN, False, "git credential.c"),

    _rule("git_password_for",
          r"Password for '(.*)': ",
          1, _SECRET, False, "git credential.c"),

    _rule("git_lfs_username",
          r'Username for "(.*?)"',
          1, _PLAIN, False, "git-lfs"),

    _rule("git_lfs_password",
          r'Password for "(.*?)"',
          1, _SECRET, False, "git-lfs"),

    # Generic catch-all, must stay last
    _rule("hg_password",
          r"(.*?)'s password: ",
          1, _SECRET, False, "mercurial"),
)


class PromptClassifier:
    """
    Classifies askpass prompts against an ordered rule table.

    Usage:
        classifier = PromptClassifier(logger=my_logger)
        result = classifier.classify("Enter passphrase for key '/k': ")
        result.identifier  # '/k'
    """

    def __init__(
            self,
            rules: tuple[PromptRule, ...] = PROMPT_RULES,
            logger: Optional[logging.Logger] = None,
    ):
        self.rules = tuple(rules)
        self._logger = logger or logging.getLogger(__name__)

    def match_rule(self, prompt: str) -> Optional[PromptRule]:
        """Return the first rule that matches, or None."""
        for rule in self.rules:
            if rule.match(prompt) is not None:
                return rule
        return None

    def classify(self, prompt: str) -> ClassificationResult:
        """
        Classify a prompt. Never raises.

        Unmatched prompts (custom scripts, or upstream wording that changed)
        log one warning and fall back to asking for a masked secret with no
        identifier.
        """
        for rule in self.rules:
            result = rule.match(prompt)
            if result is not None:
                self._logger.debug(f"Prompt matched rule '{rule.name}' ({rule.source})")
                return result

        self._logger.warning(f"Unable to parse prompt: {prompt!r}")
        return UNPARSED


_default_classifier: Optional[PromptClassifier] = None


def classify(prompt: str) -> ClassificationResult:
    """Classify a prompt with the default rule table."""
    global _default_classifier
    if _default_classifier is None:
        _default_classifier = PromptClassifier()
    return _default_classifier.classify(prompt)
