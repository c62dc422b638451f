"""
Persona Core Package
====================
Local persistence layer for the identity client.

Provides:
- Namespace convention over a pluggable key-value backing store
  (in-memory, SQLite, Redis)
- Email identity, site and login registries with cascading cleanup
- Device trust state machine ("is this my computer")
- Cross-context change notification for login state
"""

from persona_core.client_storage import ClientStorage
from persona_core.errors import InvalidIdentity, InvalidState, StorageError, UnknownEmail

__all__ = [
    "ClientStorage",
    "StorageError",
    "UnknownEmail",
    "InvalidState",
    "InvalidIdentity",
]
