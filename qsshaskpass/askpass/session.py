"""
Askpass request orchestration.

One AskpassSession handles one prompt:

    classify -> stored secret? -> emit
                     |
                     no -> ask the user -> (remember?) -> emit
                                   |
                                   cancelled -> fail

Every answer written to stdout ends in a single newline, whether it came
from the store or from the user. ssh and git both strip it.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from .prompt import ClassificationResult, PromptClassifier, RequestKind
from ..dialogs.base import Interaction
from ..security import disable_core_dumps
from ..store.base import SecretStore

DEFAULT_PROMPT = "Please enter passphrase"
CONFIRMED = "yes\n"

EXIT_SUCCESS = 0
EXIT_CANCELLED = 1


class AskpassState(Enum):
    """Request lifecycle states."""
    START = auto()
    CLASSIFIED = auto()
    STORE_HIT = auto()
    PROMPTED = auto()
    ACCEPTED = auto()
    CANCELLED = auto()
    EMITTED = auto()
    FAILED = auto()


@dataclass
class SessionOutcome:
    """What to print and how to exit."""
    exit_code: int
    output: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.exit_code == EXIT_SUCCESS


StoreOpener = Callable[[], Optional[SecretStore]]


class AskpassSession:
    """
    Answers a single askpass prompt.

    Usage:
        session = AskpassSession(
            prompt=sys.argv[1],
            interaction=QtInteraction(),
            store_opener=KeyringStore.open,
            folder="qsshaskpass",
        )
        outcome = session.run()
    """

    def __init__(
            self,
            prompt: Optional[str],
            interaction: Interaction,
            store_opener: Optional[StoreOpener] = None,
            folder: str = "qsshaskpass",
            default_prompt: str = DEFAULT_PROMPT,
            classifier: Optional[PromptClassifier] = None,
            logger: Optional[logging.Logger] = None,
    ):
        self._logger = logger or logging.getLogger(__name__)
        self.prompt = prompt
        self.interaction = interaction
        self.folder = folder
        self.default_prompt = default_prompt
        self._store_opener = store_opener
        self._classifier = classifier or PromptClassifier(logger=self._logger)

        self._state = AskpassState.START
        self._store: Optional[SecretStore] = None
        self.result: Optional[ClassificationResult] = None

    @property
    def state(self) -> AskpassState:
        return self._state

    def _set_state(self, new_state: AskpassState) -> None:
        self._logger.debug(f"Askpass state: {self._state.name} -> {new_state.name}")
        self._state = new_state

    def run(self) -> SessionOutcome:
        """Process the prompt. Blocks while the user is being asked."""
        disable_core_dumps()

        if self.prompt:
            text = self.prompt
            self.result = self._classifier.classify(text)
        else:
            # No prompt given: generic masked request, nothing to look up
            text = self.default_prompt
            self.result = ClassificationResult(
                identifier=None, kind=RequestKind.SECRET, skip_store=False
            )
        self._set_state(AskpassState.CLASSIFIED)

        # Retries, password changes and confirmations never touch the store
        if self.result.uses_store:
            self._store = self._open_store()

        if self._store is not None:
            value = self._lookup(self.result.identifier)
            if value:
                self._set_state(AskpassState.STORE_HIT)
                return self._emit(value + "\n")

        self._set_state(AskpassState.PROMPTED)
        if self.result.kind == RequestKind.CONFIRMATION:
            return self._confirm(text)
        return self._ask_secret(text)

    def _open_store(self) -> Optional[SecretStore]:
        if self._store_opener is None:
            return None
        try:
            store = self._store_opener()
        except Exception as e:
            self._logger.warning(f"Secret store unavailable: {e}")
            return None
        if store is None:
            self._logger.info("Secret store unavailable")
        return store

    def _lookup(self, identifier: str) -> Optional[str]:
        try:
            if not self._store.has_folder(self.folder):
                return None
            self._store.set_folder(self.folder)
            return self._store.lookup(identifier)
        except Exception as e:
            self._logger.warning(f"Failed to read secret store: {e}")
            return None

    def _confirm(self, text: str) -> SessionOutcome:
        if not self.interaction.present_confirmation(text):
            return self._fail()
        self._set_state(AskpassState.ACCEPTED)
        return self._emit(CONFIRMED)

    def _ask_secret(self, text: str) -> SessionOutcome:
        # PLAIN_TEXT shares the masked dialog; there is no visible-entry
        # variant with a remember option.
        response = self.interaction.present_secret_prompt(
            text, allow_remember=self._store is not None
        )
        if not response.success:
            return self._fail()
        self._set_state(AskpassState.ACCEPTED)

        if response.remember and self._store is not None:
            self._persist(self.result.identifier, response.value)

        return self._emit(response.value + "\n")

    def _persist(self, identifier: str, value: str) -> None:
        try:
            if not self._store.store(self.folder, identifier, value):
                self._logger.warning(f"Could not store secret for {identifier!r}")
        except Exception as e:
            self._logger.warning(f"Failed to write secret store: {e}")

    def _emit(self, output: str) -> SessionOutcome:
        self._set_state(AskpassState.EMITTED)
        return SessionOutcome(exit_code=EXIT_SUCCESS, output=output)

    def _fail(self) -> SessionOutcome:
        self._set_state(AskpassState.CANCELLED)
        self._set_state(AskpassState.FAILED)
        return SessionOutcome(exit_code=EXIT_CANCELLED)
