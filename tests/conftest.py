"""Shared fixtures: in-memory store, scripted user, in-memory keyring."""
from __future__ import annotations

import os
from typing import Optional

import pytest
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError

# Qt dialogs are created headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from qsshaskpass.dialogs.base import AskpassResponse, Interaction
from qsshaskpass.store.base import SecretStore


class FakeStore(SecretStore):
    """Folder -> {key: value}, recording every call."""

    def __init__(self, folders: Optional[dict] = None):
        self.folders: dict[str, dict[str, str]] = folders or {}
        self.current: Optional[str] = None
        self.calls: list[tuple] = []

    def has_folder(self, name: str) -> bool:
        self.calls.append(("has_folder", name))
        return name in self.folders

    def set_folder(self, name: str) -> None:
        self.calls.append(("set_folder", name))
        self.current = name

    def create_folder(self, name: str) -> None:
        self.calls.append(("create_folder", name))
        self.folders.setdefault(name, {})

    def read_password(self, key: str) -> Optional[str]:
        self.calls.append(("read", key))
        return self.folders[self.current].get(key)

    def write_password(self, key: str, value: str) -> bool:
        self.calls.append(("write", key))
        self.folders[self.current][key] = value
        return True

    def rename_entry(self, old_key: str, new_key: str) -> bool:
        self.calls.append(("rename", old_key, new_key))
        entries = self.folders[self.current]
        entries[new_key] = entries.pop(old_key)
        return True

    @property
    def touched(self) -> bool:
        return bool(self.calls)


class FakeInteraction(Interaction):
    """Answers prompts from a script instead of a human."""

    def __init__(self, response: Optional[AskpassResponse] = None, confirm: bool = False):
        self.response = response or AskpassResponse(success=False)
        self.confirm = confirm
        self.secret_prompts: list[tuple[str, bool]] = []
        self.confirmations: list[str] = []

    def present_secret_prompt(self, text: str, allow_remember: bool) -> AskpassResponse:
        self.secret_prompts.append((text, allow_remember))
        return self.response

    def present_confirmation(self, text: str) -> bool:
        self.confirmations.append(text)
        return self.confirm


class MemoryKeyring(KeyringBackend):
    """Keyring backend holding entries in a dict."""

    priority = 1

    def __init__(self):
        super().__init__()
        self.entries: dict[tuple[str, str], str] = {}

    def get_password(self, service, username):
        return self.entries.get((service, username))

    def set_password(self, service, username, password):
        self.entries[(service, username)] = password

    def delete_password(self, service, username):
        try:
            del self.entries[(service, username)]
        except KeyError:
            raise PasswordDeleteError(username)


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def memory_keyring() -> MemoryKeyring:
    return MemoryKeyring()


@pytest.fixture(autouse=True)
def no_core_dump_changes(monkeypatch):
    """Keep the test process's rlimits intact; record the calls instead."""
    calls = []
    monkeypatch.setattr(
        "qsshaskpass.askpass.session.disable_core_dumps",
        lambda: calls.append(True) or True,
    )
    return calls
