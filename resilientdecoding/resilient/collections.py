"""
Element-level partial failure for arrays and string-keyed dictionaries.

Each element is decoded independently. Elements that fail are reported at
their own path and omitted; the rest keep their relative order. A failure to
open the collection itself propagates to the field, which substitutes its
fallback.
"""

from typing import Any, Callable

from ..core.decoder import Decoder
from ..core.errors import DecodeError, format_path
from ..core.result import Failure, Result, Success
from .outcome import DECODED_SUCCESSFULLY, Outcome
from .value import ArrayDecodingError, DictionaryDecodingError, ResilientValue

DecodeElement = Callable[[Decoder], Any]


def _element_failed(decoder: Decoder, error: DecodeError) -> None:
    decoder.report_error(error)
    decoder.context.logger.debug(
        f"Omitted element at {format_path(decoder.coding_path)}: "
        f"{error.abridged_description()}"
    )


def decode_array(decoder: Decoder, decode_element: DecodeElement) -> ResilientValue[list[Any]]:
    """Decode every element of the array under ``decoder``, omitting failures."""
    container = decoder.unkeyed_container()
    builder = ArrayDecodingError.Builder(decoder.context.config.keep_element_results)
    elements: list[Any] = []

    while not container.is_at_end:
        element_decoder = container.super_decoder()
        try:
            element = decode_element(element_decoder)
        except DecodeError as error:
            _element_failed(element_decoder, error)
            builder.failed_to_decode_element(error)
        else:
            elements.append(element)
            builder.decoded_element()

    error = builder.build()
    if error is None:
        return ResilientValue(elements, DECODED_SUCCESSFULLY, list)
    return ResilientValue(elements, Outcome.recovered_from(error, was_reported=False), list)


def decode_dictionary(
    decoder: Decoder, decode_value: DecodeElement
) -> ResilientValue[dict[str, Any]]:
    """
    Decode every entry of the dictionary under ``decoder``, omitting failures.

    Keys are taken verbatim from the document; the key decoding strategy only
    applies to declared field keys.
    """
    keep_results = decoder.context.config.keep_element_results
    entries = decoder.raw_entries()
    values: dict[str, Any] = {}
    results: dict[str, Result] = {}
    failure_count = 0

    for key, entry_decoder in entries:
        try:
            value = decode_value(entry_decoder)
        except DecodeError as error:
            _element_failed(entry_decoder, error)
            failure_count += 1
            if keep_results:
                results[key] = Failure(error)
        else:
            values[key] = value
            if keep_results:
                results[key] = Success(value)

    if not failure_count:
        return ResilientValue(values, DECODED_SUCCESSFULLY, dict)
    error = DictionaryDecodingError(results, failure_count, len(entries), keep_results)
    return ResilientValue(values, Outcome.recovered_from(error, was_reported=False), dict)
