"""
Security advisory for ULID usage contexts.

ULIDs are not unpredictable: when several are minted within one millisecond a
monotonic generator turns the randomness field into a counter. Contexts are
classified by case-insensitive keyword matching; there is no learned or
configurable state.
"""

from __future__ import annotations

from enum import Enum

SENSITIVE_KEYWORDS = (
    "auth",
    "authentication",
    "authorize",
    "authorization",
    "token",
    "session",
    "password",
    "secret",
    "key",
    "credential",
    "login",
    "signin",
    "signup",
    "security",
    "secure",
    "api_key",
    "apikey",
    "access_token",
    "refresh_token",
    "jwt",
    "oauth",
    "saml",
    "oidc",
    "reset",
    "recovery",
    "verification",
    "confirm",
    "nonce",
    "csrf",
    "xsrf",
    "challenge",
)

HIGH_RISK = ("auth", "authentication", "token", "session", "password", "secret", "key", "login", "api_key", "jwt", "oauth")
MEDIUM_RISK = ("user", "account", "profile", "admin", "security", "reset", "verify", "confirm", "access")
LOW_RISK = ("database", "db", "record", "log", "file", "object", "trace", "correlation", "analytics", "monitoring")

SAFE_USE_CASES = [
    "Database primary keys",
    "Log correlation IDs",
    "File and object naming",
    "Sortable identifiers for analytics",
    "General-purpose unique identifiers",
    "Event tracking and tracing",
    "Data pipeline identifiers",
]

UNSAFE_USE_CASES = [
    "Authentication tokens",
    "Session identifiers",
    "Password reset tokens",
    "API keys or secrets",
    "Security-critical random values",
    "Cryptographic nonces",
    "CSRF tokens",
    "OAuth state parameters",
]

BEST_PRACTICES = [
    "Always assess whether your use case requires cryptographic security",
    "Document ULID usage context in your code and architecture",
    "Use ULIDs for identification, not authentication or authorization",
    "Prefer UUIDs or secure random generators for security-sensitive contexts",
    "Consider the trade-offs: sortability vs. cryptographic security",
    "Implement proper security reviews for identifier usage",
]

SECURE_ALTERNATIVES = [
    ("Authentication tokens", "256-bit cryptographically random strings"),
    ("Session IDs", "UUID v4 or dedicated session token generators"),
    ("API keys", "Proper key derivation functions (PBKDF2, scrypt, Argon2)"),
    ("CSRF tokens", "Cryptographically secure random byte generators"),
    ("Password reset tokens", "Secure random generators with expiration"),
]


class SecurityRating(str, Enum):
    LOW = "Low"  # Safe for ULIDs
    MEDIUM = "Medium"  # Caution advised
    HIGH = "High"  # Not recommended
    UNKNOWN = "Unknown"  # Context unclear

    @property
    def advice(self) -> str:
        return _RATING_ADVICE[self]


_RATING_ADVICE = {
    SecurityRating.LOW: "ULIDs are appropriate for this use case",
    SecurityRating.MEDIUM: "Consider security implications; ULIDs may be acceptable with caution",
    SecurityRating.HIGH: "ULIDs are NOT recommended; use cryptographically secure alternatives",
    SecurityRating.UNKNOWN: "Assess security requirements before using ULIDs",
}


def _matches(context: str, keywords: tuple[str, ...]) -> bool:
    lowered = context.lower()
    return any(k in lowered for k in keywords)


def is_security_sensitive_context(context: str) -> bool:
    """True if `context` mentions any security-sensitive keyword."""
    return _matches(context, SENSITIVE_KEYWORDS)


def get_security_rating(context: str) -> SecurityRating:
    """Classify a usage context; high-risk keywords win over medium and low."""
    if _matches(context, HIGH_RISK):
        return SecurityRating.HIGH
    if _matches(context, MEDIUM_RISK):
        return SecurityRating.MEDIUM
    if _matches(context, LOW_RISK):
        return SecurityRating.LOW
    return SecurityRating.UNKNOWN


def should_warn_for_operation(operation: str, context: str | None = None) -> bool:
    """
    Decide whether an operation deserves a security notice.

    With a context, the context's sensitivity decides. Without one, bulk and
    batch operations (or a generate with a count) are flagged since they
    suggest production use.
    """
    if context is not None:
        return is_security_sensitive_context(context)
    return (
        "bulk" in operation
        or "batch" in operation
        or ("generate" in operation and "count" in operation)
    )


def get_security_advice() -> dict:
    """Full advisory document for ULID usage."""
    return {
        "title": "ULID Security Considerations",
        "warning": "ULIDs have important security limitations due to monotonic generation patterns",
        "safe_use_cases": list(SAFE_USE_CASES),
        "unsafe_use_cases": list(UNSAFE_USE_CASES),
        "vulnerability": (
            "When multiple ULIDs are generated within the same millisecond, the randomness "
            "component becomes a counter (incremented by 1). This creates predictable sequences "
            "that enable timing-based attacks."
        ),
        "attack_example": {
            "scenario": "Generate two objects simultaneously",
            "time_t": "01AN4Z07BY + 79KA1307SR9X4MV3",
            "time_t_plus_1": "01AN4Z07BY + 79KA1307SR9X4MV4  (just incremented!)",
            "impact": "Second ULID = First ULID + 1 (predictable)",
        },
        "secure_alternatives": [
            {"use_case": use_case, "recommended": recommended}
            for use_case, recommended in SECURE_ALTERNATIVES
        ],
        "best_practices": list(BEST_PRACTICES),
        "learn_more": "See ULID specification: https://github.com/ulid/spec",
    }


def create_context_warning(context: str) -> dict:
    return {
        "warning": "Potential security concern detected",
        "context": context,
        "message": (
            f"The context '{context}' suggests security-sensitive usage. ULIDs may not be "
            "appropriate for authentication, session management, or cryptographic purposes."
        ),
        "recommendation": (
            "Consider using cryptographically secure random tokens instead. "
            "Run 'ulid security-advice' for detailed guidance."
        ),
    }


def format_command_warning() -> str:
    return (
        "WARNING: ULIDs are not suitable for security-sensitive contexts.\n"
        "Safe: Database IDs, log correlation, file naming\n"
        "Unsafe: Auth tokens, session IDs, API keys\n"
        "See: ulid security-advice"
    )
