"""
Abstract secret store interface.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)

# Older releases filed secrets under a quoted and/or space-padded key.
# Checked in this order when the canonical key misses.
LEGACY_KEY_FORMATS = ("'{0}'", "{0} ", "'{0}' ")


class SecretStore(ABC):
    """
    Keyed secret storage grouped into folders.

    Implementations report read failures as a miss and write failures as
    False; nothing here is allowed to abort an askpass request.
    """

    @abstractmethod
    def has_folder(self, name: str) -> bool:
        """Does the folder exist?"""
        pass

    @abstractmethod
    def set_folder(self, name: str) -> None:
        """Select the folder subsequent reads and writes apply to."""
        pass

    @abstractmethod
    def create_folder(self, name: str) -> None:
        """Create a folder."""
        pass

    @abstractmethod
    def read_password(self, key: str) -> Optional[str]:
        """Read a secret from the current folder."""
        pass

    @abstractmethod
    def write_password(self, key: str, value: str) -> bool:
        """Write a secret to the current folder."""
        pass

    @abstractmethod
    def rename_entry(self, old_key: str, new_key: str) -> bool:
        """Move an entry to a new key within the current folder."""
        pass

    def lookup(self, identifier: str) -> Optional[str]:
        """
        Read the secret for an identifier, migrating legacy keys.

        If nothing is stored under the identifier itself, each legacy
        encoding is tried in turn. The first hit is renamed to the
        canonical key so the workaround only ever runs once per entry.
        Empty values count as missing.
        """
        value = self.read_password(identifier)
        if value:
            return value

        for fmt in LEGACY_KEY_FORMATS:
            legacy_key = fmt.format(identifier)
            value = self.read_password(legacy_key)
            if value:
                logger.warning(f"Detected legacy key for {identifier!r}, migrating entry")
                if not self.rename_entry(legacy_key, identifier):
                    logger.warning(f"Could not migrate legacy key for {identifier!r}")
                return value

        return None

    def store(self, folder: str, identifier: str, value: str) -> bool:
        """Write a secret, creating the folder first if needed."""
        if not self.has_folder(folder):
            self.create_folder(folder)
        self.set_folder(folder)
        return self.write_password(identifier, value)
