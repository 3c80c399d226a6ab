"""Runtime layer: the message resolver and its locking primitive.

Exports:
    MessageResolver: Translation and synonym tables with case-insensitive lookup
    RWLock: Readers-writer lock guarding resolver tables

Python 3.13+.
"""

from .resolver import MessageResolver
from .rwlock import RWLock

__all__ = ["MessageResolver", "RWLock"]
