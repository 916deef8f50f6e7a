"""
Secret storage for askpass answers.

- SecretStore: abstract folder/key interface with legacy key migration
- KeyringStore: implementation on the system keyring
"""

from .base import SecretStore, LEGACY_KEY_FORMATS
from .keyring_store import KeyringStore

__all__ = [
    "SecretStore",
    "KeyringStore",
    "LEGACY_KEY_FORMATS",
]
