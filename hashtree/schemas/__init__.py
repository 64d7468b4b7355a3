"""
Module 01 - Schemas & Canonicalization
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
    ensure_utc,
    format_datetime_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ErrorCodes,
    HashTreeError,
    HashTreeException,
    InvalidInputException,
    StaleIterationException,
    StructuralMismatchException,
)

# Flat node export
from .nodes import FlatNode

__all__ = [
    # Canonical
    "CANONICAL_JSON_SEPARATORS",
    "canonicalize_value",
    "dumps_canonical",
    "ensure_utc",
    "format_datetime_canonical",
    # Errors
    "CanonicalizationException",
    "ErrorCodes",
    "HashTreeError",
    "HashTreeException",
    "InvalidInputException",
    "StaleIterationException",
    "StructuralMismatchException",
    # Nodes
    "FlatNode",
]
