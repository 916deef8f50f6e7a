"""
Secret store backed by the system keyring.

The folder maps onto the keyring "service" name, so every identifier
lands under one service named after the application. Keyring services
spring into existence on first write; there is nothing to create.
"""

from __future__ import annotations
import logging
from typing import Optional

import keyring
from keyring.backend import KeyringBackend
from keyring.backends import fail, null
from keyring.errors import KeyringError

from .base import SecretStore

logger = logging.getLogger(__name__)


class KeyringStore(SecretStore):
    """
    SecretStore on top of a keyring backend.

    Usage:
        store = KeyringStore.open()
        if store:
            store.set_folder("qsshaskpass")
            secret = store.lookup("user@host")
    """

    def __init__(self, backend: KeyringBackend, folder: Optional[str] = None):
        self._backend = backend
        self._folder = folder

    @classmethod
    def open(cls, backend: Optional[KeyringBackend] = None) -> Optional[KeyringStore]:
        """
        Open the keyring, or return None if no usable backend exists.
        """
        try:
            backend = backend or keyring.get_keyring()
        except Exception as e:
            logger.warning(f"Failed to open keyring: {e}")
            return None

        if isinstance(backend, (fail.Keyring, null.Keyring)):
            logger.info(f"No usable keyring backend ({backend.__class__.__module__})")
            return None

        logger.debug(f"Using keyring backend: {backend.__class__.__name__}")
        return cls(backend)

    @property
    def backend(self) -> KeyringBackend:
        return self._backend

    @property
    def folder(self) -> Optional[str]:
        """Currently selected folder (keyring service name)."""
        return self._folder

    def has_folder(self, name: str) -> bool:
        return True

    def set_folder(self, name: str) -> None:
        self._folder = name

    def create_folder(self, name: str) -> None:
        self._folder = name

    def _service(self) -> str:
        if not self._folder:
            raise RuntimeError("No keyring folder selected")
        return self._folder

    def read_password(self, key: str) -> Optional[str]:
        service = self._service()
        try:
            return self._backend.get_password(service, key)
        except KeyringError as e:
            logger.warning(f"Failed to read from keyring: {e}")
            return None

    def write_password(self, key: str, value: str) -> bool:
        service = self._service()
        try:
            self._backend.set_password(service, key, value)
        except KeyringError as e:
            logger.error(f"Failed to write to keyring: {e}")
            return False
        logger.debug(f"Stored secret for {key!r} in {service!r}")
        return True

    def _delete(self, key: str) -> bool:
        try:
            self._backend.delete_password(self._service(), key)
        except KeyringError as e:
            logger.warning(f"Failed to delete keyring entry {key!r}: {e}")
            return False
        return True

    def rename_entry(self, old_key: str, new_key: str) -> bool:
        """
        Move an entry. Keyring has no rename, so this writes the new key
        and removes the old one, undoing the write if the removal fails.
        """
        value = self.read_password(old_key)
        if value is None:
            return False

        if not self.write_password(new_key, value):
            return False

        if not self._delete(old_key):
            self._delete(new_key)
            return False

        return True
