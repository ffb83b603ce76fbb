"""
Field-level resilient decoding.

``resiliently_decode`` is the single recovery boundary for a field: absent
keys and nulls are tolerated when the field behaves like an optional, and any
``DecodeError`` raised while decoding the value is reported and replaced by
the field's fallback.
"""

from typing import Any, Callable, Optional

from ..core.decoder import Decoder, KeyedContainer
from ..core.errors import DecodeError, format_path
from .outcome import KEY_NOT_FOUND, VALUE_WAS_NIL, Outcome
from .value import ResilientValue

Body = Callable[[Decoder], ResilientValue[Any]]


def make_fallback(fallback: Any) -> Any:
    """Evaluate a fallback, calling it when it is a zero-argument factory."""
    return fallback() if callable(fallback) else fallback


def plain_body(type_: Any) -> Body:
    """Body decoding the value as ``type_`` with the ordinary decoder."""

    def body(decoder: Decoder) -> ResilientValue[Any]:
        return ResilientValue(decoder.decode(type_))

    return body


def recovered(
    decoder: Decoder,
    value: Any,
    error: DecodeError,
    collection: Optional[type] = None,
) -> ResilientValue[Any]:
    """Report ``error`` at the decoder's path and wrap the substituted value."""
    decoder.report_error(error)
    decoder.context.logger.debug(
        f"Recovered from {type(error).__name__} at {format_path(decoder.coding_path)}: "
        f"{error.abridged_description()}"
    )
    return ResilientValue(value, Outcome.recovered_from(error, was_reported=True), collection)


def resiliently_decode(
    container: KeyedContainer,
    key: str,
    fallback: Any,
    body: Body,
    behave_like_optional: bool = True,
    collection: Optional[type] = None,
) -> ResilientValue[Any]:
    """
    Decode ``key`` from ``container``, recovering from any decode error.

    Args:
        container: The keyed container holding the field
        key: Field key, after key strategy transformation
        fallback: Value (or zero-argument factory) used when decoding fails
        body: Decodes the value once it is known to be present
        behave_like_optional: Treat absent keys and nulls as non-errors
        collection: ``list`` or ``dict`` for collection fields

    Returns:
        The decoded value, or the fallback, with the outcome describing which
    """
    if behave_like_optional and not container.contains(key):
        return ResilientValue(make_fallback(fallback), KEY_NOT_FOUND, collection)

    try:
        decoder = container.super_decoder(key)
    except DecodeError as error:
        # Nothing was decoded yet, so there is no meaningful path to report at
        return ResilientValue(
            make_fallback(fallback), Outcome.recovered_from(error, was_reported=False), collection
        )

    if behave_like_optional and decoder.decode_nil():
        return ResilientValue(make_fallback(fallback), VALUE_WAS_NIL, collection)

    try:
        return body(decoder)
    except DecodeError as error:
        return recovered(decoder, make_fallback(fallback), error, collection)
