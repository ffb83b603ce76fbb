"""
Key decoding strategies.

A strategy maps the keys found in a document onto the keys a model declares.
It applies to keyed containers only; the keys of a decoded dictionary are
always kept exactly as they appear in the document.
"""

import re
from enum import Enum
from typing import Callable, Union


class KeyDecodingStrategy(Enum):
    """Built-in key transforms."""

    USE_DEFAULT_KEYS = "use_default_keys"
    CONVERT_FROM_SNAKE_CASE = "convert_from_snake_case"  # the_key -> theKey
    CONVERT_FROM_CAMEL_CASE = "convert_from_camel_case"  # theKey -> the_key


KeyTransform = Callable[[str], str]
KeyStrategy = Union[KeyDecodingStrategy, KeyTransform]

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")


def use_default_keys(key: str) -> str:
    return key


def convert_from_snake_case(key: str) -> str:
    """
    Convert ``snake_case`` to ``camelCase``.

    Leading and trailing underscores are preserved, and keys without an inner
    underscore are returned unchanged.
    """
    stripped = key.strip("_")
    if not stripped or "_" not in stripped:
        return key

    leading = key[: len(key) - len(key.lstrip("_"))]
    trailing = key[len(key.rstrip("_")) :]
    words = [word for word in stripped.split("_") if word]
    joined = words[0].lower() + "".join(word.capitalize() for word in words[1:])
    return f"{leading}{joined}{trailing}"


def convert_from_camel_case(key: str) -> str:
    """Convert ``camelCase`` (or ``PascalCase``) to ``snake_case``."""
    if not key or "_" in key.strip("_"):
        return key
    converted = _ACRONYM_BOUNDARY.sub(r"\1_\2", key)
    converted = _CAMEL_BOUNDARY.sub(r"\1_\2", converted)
    return converted.lower()


_BUILTIN_TRANSFORMS: dict[KeyDecodingStrategy, KeyTransform] = {
    KeyDecodingStrategy.USE_DEFAULT_KEYS: use_default_keys,
    KeyDecodingStrategy.CONVERT_FROM_SNAKE_CASE: convert_from_snake_case,
    KeyDecodingStrategy.CONVERT_FROM_CAMEL_CASE: convert_from_camel_case,
}


def resolve_key_transform(strategy: KeyStrategy) -> KeyTransform:
    """Return the callable implementing a strategy."""
    if isinstance(strategy, KeyDecodingStrategy):
        return _BUILTIN_TRANSFORMS[strategy]
    if callable(strategy):
        return strategy
    raise TypeError(f"Unsupported key decoding strategy: {strategy!r}")
