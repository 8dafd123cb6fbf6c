"""
Schema Validation Package

JSON Schema definitions and validators for serialized documents.
"""

from .validator import validate_document, ValidationError, DOCUMENT_SCHEMA_VERSION

__all__ = [
    "validate_document",
    "ValidationError",
    "DOCUMENT_SCHEMA_VERSION",
]
