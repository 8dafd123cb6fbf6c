"""
Core Utilities Package

Serialization helpers for documents.
"""

from .serialization import (
    serialize_document,
    deserialize_document,
    save_document,
    load_document,
)

__all__ = [
    "serialize_document",
    "deserialize_document",
    "save_document",
    "load_document",
]
