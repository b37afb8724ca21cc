"""
Error taxonomy for ULID operations.

Domain code raises UlidError subclasses. Command functions convert them at the
boundary into a LabeledError (title, message, help) for display; nothing here
is retried.
"""

from __future__ import annotations

from dataclasses import dataclass

EXAMPLE_ULID = "01AN4Z07BY79KA1307SR9X4MV3"


class UlidError(Exception):
    """Base class for all ULID operation errors."""


class InvalidFormat(UlidError):
    """The input string is not a valid ULID."""

    def __init__(self, input: str, reason: str):
        self.input = input
        self.reason = reason
        super().__init__(f"Invalid ULID format '{input}': {reason}")


class InvalidInput(UlidError):
    """A parameter or input value is unusable (bad count, bad length, bad text)."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Invalid input: {message}")


class TimestampOutOfRange(UlidError):
    """The timestamp does not fit in the 48-bit ULID timestamp field."""

    def __init__(self, timestamp: int, max_timestamp: int):
        self.timestamp = timestamp
        self.max_timestamp = max_timestamp
        super().__init__(f"Timestamp {timestamp} is out of range (max: {max_timestamp})")


class GenerationError(UlidError):
    """ULID generation failed (the random source misbehaved)."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"ULID generation error: {reason}")


@dataclass(frozen=True)
class LabeledError:
    """A user-facing error: short title, message, optional help text."""

    title: str
    message: str
    help: str | None = None

    def to_dict(self) -> dict:
        return {"error": self.title, "message": self.message, "help": self.help}


def to_labeled(error: UlidError) -> LabeledError:
    """Convert a domain error into its user-facing form."""
    if isinstance(error, InvalidFormat):
        return LabeledError(
            title="Invalid ULID format",
            message=f"The input '{error.input}' is not a valid ULID",
            help=(
                f"{error.reason}\n\n"
                "Valid ULID format: 26 characters using Crockford Base32\n"
                f"Example: {EXAMPLE_ULID}"
            ),
        )
    if isinstance(error, InvalidInput):
        return LabeledError(
            title="Invalid input",
            message=error.message,
            help="Check the command parameters and try again",
        )
    if isinstance(error, TimestampOutOfRange):
        return LabeledError(
            title="Timestamp out of range",
            message=f"Timestamp {error.timestamp} exceeds maximum allowed value",
            help=(
                f"Maximum timestamp: {error.max_timestamp} (year 10889)\n"
                f"Use a timestamp between 0 and {error.max_timestamp}"
            ),
        )
    if isinstance(error, GenerationError):
        return LabeledError(
            title="ULID generation failed",
            message=error.reason,
            help="This may be due to system randomness issues or resource constraints",
        )
    return LabeledError(title="ULID error", message=str(error))


def create_security_warning(context: str) -> LabeledError:
    """Labeled warning for a security-sensitive usage context."""
    return LabeledError(
        title="ULID Security Warning",
        message=f"Using ULIDs for '{context}' may not be secure",
        help=(
            "ULIDs are not suitable for security-sensitive contexts like authentication tokens.\n\n"
            "Safe uses: Database IDs, log correlation, file naming\n"
            "Unsafe uses: Auth tokens, session IDs, API keys\n\n"
            "For security contexts, use cryptographically random tokens instead.\n"
            "Run 'ulid security-advice' for detailed guidance."
        ),
    )
