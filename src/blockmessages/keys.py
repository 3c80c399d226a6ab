"""Message key normalization.

Every key stored in or looked up from a MessageResolver passes through
normalize_key() first, so keys differing only in letter case address the
same entry.

Python 3.13+. Zero external dependencies.
"""

from blockmessages.types import MessageKey

__all__ = ["normalize_key", "prefixed_key"]


def normalize_key(key: MessageKey) -> MessageKey:
    """Return the canonical lookup form of a key.

    Lower-cases the key. The mapping is total and idempotent:
    normalize_key(normalize_key(k)) == normalize_key(k).

    Example:
        >>> normalize_key("BKY_Controls_If_MSG_IF")
        'bky_controls_if_msg_if'
    """
    return key.lower()


def prefixed_key(prefix: str, key: MessageKey) -> MessageKey:
    """Normalize a key after prepending a load prefix.

    Example:
        >>> prefixed_key("bky_", "LOGIC_BOOLEAN_TRUE")
        'bky_logic_boolean_true'
    """
    return normalize_key(prefix + key)
