"""Core ULID commands: generate, validate, parse, security-advice."""

from __future__ import annotations

import logging

from ..engine import UlidEngine, parse_output_format
from ..errors import UlidError, create_security_warning
from ..security import (
    create_context_warning,
    get_security_advice,
    get_security_rating,
    is_security_sensitive_context,
    should_warn_for_operation,
)
from ._common import emit, notice, print_error

logger = logging.getLogger(__name__)


def run_generate(
    *,
    count: int | None = None,
    timestamp: int | None = None,
    value_format: str | None = None,
    context: str | None = None,
    output: str = "text",
    engine: UlidEngine | None = None,
) -> int:
    """
    Generate one ULID, or `count` of them as a list.

    A security-sensitive `context` short-circuits generation: the context
    warning record is printed instead, the labeled warning goes to stderr,
    and the command still succeeds.
    """
    if context is not None and is_security_sensitive_context(context):
        logger.info("Refusing to generate for security-sensitive context '%s'", context)
        print_error(create_security_warning(context))
        emit(create_context_warning(context), output)
        return 0

    engine = engine or UlidEngine()
    try:
        fmt = parse_output_format(value_format)
        if count is None:
            ulid = engine.generate() if timestamp is None else engine.generate_with_timestamp(timestamp)
            emit(engine.to_value(ulid, fmt), output)
            return 0

        ulids = engine.generate_bulk(count, timestamp)
    except UlidError as e:
        print_error(e)
        return 1

    if should_warn_for_operation("generate count", context):
        notice("ULIDs are sortable identifiers, not secrets. Run 'ulid security-advice' before using them in auth flows.")

    emit([engine.to_value(u, fmt) for u in ulids], output)
    return 0


def run_validate(ulid_str: str, *, detailed: bool = False, output: str = "text") -> int:
    """Validity is the result, not an error: the exit code is always 0."""
    if detailed:
        emit(UlidEngine.validate_detailed(ulid_str).to_dict(), output)
    else:
        emit(UlidEngine.validate(ulid_str), output)
    return 0


def run_parse(ulid_str: str, *, output: str = "text") -> int:
    try:
        components = UlidEngine.parse(ulid_str)
    except UlidError as e:
        print_error(e)
        return 1

    emit(UlidEngine.components_to_value(components), output)
    return 0


def run_security_advice(*, context: str | None = None, output: str = "text") -> int:
    advice = get_security_advice()
    if context is not None:
        rating = get_security_rating(context)
        advice["context_rating"] = {
            "context": context,
            "rating": rating.value,
            "advice": rating.advice,
            "sensitive": is_security_sensitive_context(context),
        }
    emit(advice, output)
    return 0
