"""
Utility functions for the emitter.

Provides the listener id generator and the bulk map clearing helper.
"""

from __future__ import annotations

import secrets
from collections.abc import MutableMapping
from typing import Any

# Same alphabet and default length as nanoid.
ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_-"
DEFAULT_ID_LENGTH = 21


def generate_id(length: int = DEFAULT_ID_LENGTH) -> str:
    """
    Generate a random identifier.

    Args:
        length: Number of characters

    Returns:
        String of ``length`` characters drawn uniformly from ``ID_ALPHABET``
    """
    if length < 0:
        raise ValueError(f"length must not be negative, got {length}")
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def delete_all(mapping: MutableMapping[Any, Any]) -> None:
    """Delete every entry of a mapping in place."""
    for key in list(mapping.keys()):
        del mapping[key]


__all__ = ["DEFAULT_ID_LENGTH", "ID_ALPHABET", "delete_all", "generate_id"]
