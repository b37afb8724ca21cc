"""
ulidkit - ULID generation, inspection and sorting toolkit.

Ships the `ulid` command line plus encoding, hashing and time helpers.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .engine import OutputFormat, UlidComponents, UlidEngine, ValidationResult
from .errors import (
    GenerationError,
    InvalidFormat,
    InvalidInput,
    LabeledError,
    TimestampOutOfRange,
    UlidError,
)
from .ordering import sort_ulids
from .rng import RandomSource, SystemRandomSource
from .security import SecurityRating, get_security_rating, is_security_sensitive_context

__all__ = [
    "__version__",
    # Engine
    "OutputFormat",
    "UlidComponents",
    "UlidEngine",
    "ValidationResult",
    # Errors
    "GenerationError",
    "InvalidFormat",
    "InvalidInput",
    "LabeledError",
    "TimestampOutOfRange",
    "UlidError",
    # Ordering
    "sort_ulids",
    # Randomness
    "RandomSource",
    "SystemRandomSource",
    # Security
    "SecurityRating",
    "get_security_rating",
    "is_security_sensitive_context",
]
