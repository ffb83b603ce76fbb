"""
Field declarations for resilient models.

Each field has one shape from a closed set, chosen by the constructor used to
declare it. The shape selects how the field is decoded; nothing is decided by
inspecting the document.

Example:
    >>> class Listing(Model):
    ...     title = fields.plain(str)
    ...     price = fields.optional(int)
    ...     tags = fields.array(str)
    ...     amenities = fields.dictionary(bool)
    ...     status = fields.resilient(Status)
"""

import typing
import warnings
from enum import Enum
from typing import Any, Callable, Optional

from ..core.decoder import Decoder, KeyedContainer, optional_inner_type
from ..core.errors import DecodeError, ResilientMisuseWarning, describe_type
from .collections import decode_array, decode_dictionary
from .enums import ResilientEnum, decode_resilient_enum
from .field import make_fallback, plain_body, recovered, resiliently_decode
from .outcome import KEY_NOT_FOUND
from .value import ResilientValue


class FieldShape(Enum):
    PLAIN = "plain"
    SCALAR = "scalar"
    OPTIONAL = "optional"
    ARRAY = "array"
    OPTIONAL_ARRAY = "optional_array"
    DICTIONARY = "dictionary"
    OPTIONAL_DICTIONARY = "optional_dictionary"
    FALLBACK_ENUM = "fallback_enum"
    FALLBACK_ENUM_OPTIONAL = "fallback_enum_optional"


class Field:
    """
    A declared model attribute.

    Reading the attribute returns the decoded value; ``resilient_value()``
    returns the wrapper carrying the outcome.
    """

    def __init__(self, shape: FieldShape, type_: Any, key: Optional[str] = None):
        self.shape = shape
        self.type_ = type_
        self.key = key
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        if self.key is None:
            self.key = name

    def __repr__(self) -> str:
        return f"Field({self.shape.name}, {describe_type(self.type_)}, key={self.key!r})"

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return instance._resilient_values[self.name].value

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(f"Field {self.name!r} is read-only")

    @property
    def fallback(self) -> Any:
        """Fallback value, or a factory for it, used by resilient shapes."""
        if self.shape is FieldShape.ARRAY:
            return list
        if self.shape is FieldShape.DICTIONARY:
            return dict
        if self.shape is FieldShape.FALLBACK_ENUM:
            return self.type_.decoding_fallback()
        return None

    @property
    def collection(self) -> Optional[type]:
        if self.shape in (FieldShape.ARRAY, FieldShape.OPTIONAL_ARRAY):
            return list
        if self.shape in (FieldShape.DICTIONARY, FieldShape.OPTIONAL_DICTIONARY):
            return dict
        return None

    def decode(self, container: KeyedContainer) -> ResilientValue[Any]:
        """Decode this field from the container of its model."""
        return _SHAPE_DECODERS[self.shape](self, container)

    def default_value(self) -> ResilientValue[Any]:
        """The value a model gets for this field when constructed without it."""
        if self.shape in (FieldShape.PLAIN, FieldShape.SCALAR):
            if optional_inner_type(self.type_) is None:
                raise TypeError(f"Missing value for required field {self.name!r}")
        return ResilientValue(make_fallback(self.fallback), KEY_NOT_FOUND, self.collection)


def _decode_plain(field: Field, container: KeyedContainer) -> ResilientValue[Any]:
    if optional_inner_type(field.type_) is not None:
        return ResilientValue(container.decode_if_present(field.type_, field.key))
    return ResilientValue(container.decode(field.type_, field.key))


def _decode_optional(field: Field, container: KeyedContainer) -> ResilientValue[Any]:
    return resiliently_decode(container, field.key, None, plain_body(field.type_))


def _collection_decoder(
    decode_collection: Callable[[Decoder, Callable[[Decoder], Any]], ResilientValue[Any]],
) -> Callable[[Field, KeyedContainer], ResilientValue[Any]]:
    def decode(field: Field, container: KeyedContainer) -> ResilientValue[Any]:
        element_type = field.type_

        def body(decoder: Decoder) -> ResilientValue[Any]:
            return decode_collection(decoder, lambda element: element.decode(element_type))

        return resiliently_decode(
            container, field.key, field.fallback, body, collection=field.collection
        )

    return decode


def _decode_fallback_enum(field: Field, container: KeyedContainer) -> ResilientValue[Any]:
    enum_type = field.type_

    def body(decoder: Decoder) -> ResilientValue[Any]:
        return ResilientValue(decode_resilient_enum(decoder, enum_type))

    # Absent keys and nulls are errors here, recovered with the fallback
    return resiliently_decode(
        container, field.key, field.fallback, body, behave_like_optional=False
    )


def _decode_fallback_enum_optional(
    field: Field, container: KeyedContainer
) -> ResilientValue[Any]:
    enum_type = field.type_

    def body(decoder: Decoder) -> ResilientValue[Any]:
        try:
            return ResilientValue(decode_resilient_enum(decoder, enum_type))
        except DecodeError as error:
            fallback = enum_type.decoding_fallback()
            if fallback is None:
                raise
            return recovered(decoder, fallback, error)

    return resiliently_decode(container, field.key, None, body)


_SHAPE_DECODERS: dict[FieldShape, Callable[[Field, KeyedContainer], ResilientValue[Any]]] = {
    FieldShape.PLAIN: _decode_plain,
    FieldShape.SCALAR: _decode_plain,
    FieldShape.OPTIONAL: _decode_optional,
    FieldShape.ARRAY: _collection_decoder(decode_array),
    FieldShape.OPTIONAL_ARRAY: _collection_decoder(decode_array),
    FieldShape.DICTIONARY: _collection_decoder(decode_dictionary),
    FieldShape.OPTIONAL_DICTIONARY: _collection_decoder(decode_dictionary),
    FieldShape.FALLBACK_ENUM: _decode_fallback_enum,
    FieldShape.FALLBACK_ENUM_OPTIONAL: _decode_fallback_enum_optional,
}


# Declarations


def _is_resilient_enum(type_: Any) -> bool:
    if typing.get_origin(type_) is not None:
        return False
    return isinstance(type_, type) and issubclass(type_, ResilientEnum)


def _element_type(type_: Any) -> Any:
    inner = optional_inner_type(type_)
    if inner is None:
        return type_
    warnings.warn(
        f"Collection elements declared as {describe_type(type_)} will never be None; "
        f"failed elements are omitted. Declare the elements as {describe_type(inner)}",
        ResilientMisuseWarning,
        stacklevel=3,
    )
    return inner


def plain(type_: Any, *, key: Optional[str] = None) -> Field:
    """A field without recovery: any decode error aborts the whole decode."""
    return Field(FieldShape.PLAIN, type_, key)


def optional(type_: Any, *, key: Optional[str] = None) -> Field:
    """
    A field which is None when absent, null or invalid.

    ``list[T]`` and ``dict[str, T]`` behave like ``optional_array()`` and
    ``optional_dictionary()``: failed elements are omitted instead of
    discarding the whole collection.
    """
    origin = typing.get_origin(type_)
    args = typing.get_args(type_)
    if origin is list and args:
        return Field(FieldShape.OPTIONAL_ARRAY, _element_type(args[0]), key)
    if origin is dict and len(args) == 2 and args[0] is str:
        return Field(FieldShape.OPTIONAL_DICTIONARY, _element_type(args[1]), key)
    if _is_resilient_enum(type_):
        return Field(FieldShape.FALLBACK_ENUM_OPTIONAL, type_, key)
    return Field(FieldShape.OPTIONAL, type_, key)


def array(element_type: Any, *, key: Optional[str] = None) -> Field:
    """A list which omits elements that fail to decode; ``[]`` when absent, null or invalid."""
    return Field(FieldShape.ARRAY, _element_type(element_type), key)


def optional_array(element_type: Any, *, key: Optional[str] = None) -> Field:
    """Same as ``array()`` but None when absent, null or invalid."""
    return Field(FieldShape.OPTIONAL_ARRAY, _element_type(element_type), key)


def dictionary(value_type: Any, *, key: Optional[str] = None) -> Field:
    """A ``dict[str, T]`` which omits failed entries; ``{}`` when absent, null or invalid."""
    return Field(FieldShape.DICTIONARY, _element_type(value_type), key)


def optional_dictionary(value_type: Any, *, key: Optional[str] = None) -> Field:
    """Same as ``dictionary()`` but None when absent, null or invalid."""
    return Field(FieldShape.OPTIONAL_DICTIONARY, _element_type(value_type), key)


def resilient(type_: Any, *, key: Optional[str] = None) -> Field:
    """
    Choose the resilient shape matching a type annotation.

    ``Optional[T]``, ``list[T]``, ``dict[str, T]`` and resilient enums with a
    decoding fallback are supported. Any other type has nothing to fall back
    on: a warning is emitted and the field behaves like ``plain()``.
    """
    inner = optional_inner_type(type_)
    origin = typing.get_origin(inner if inner is not None else type_)
    args = typing.get_args(inner if inner is not None else type_)

    if origin is list and args:
        shape = FieldShape.OPTIONAL_ARRAY if inner is not None else FieldShape.ARRAY
        return Field(shape, _element_type(args[0]), key)
    if origin is dict and len(args) == 2:
        shape = FieldShape.OPTIONAL_DICTIONARY if inner is not None else FieldShape.DICTIONARY
        return Field(shape, _element_type(args[1]), key)
    if inner is not None:
        return optional(inner, key=key)
    if _is_resilient_enum(type_) and type_.decoding_fallback() is not None:
        return Field(FieldShape.FALLBACK_ENUM, type_, key)

    warnings.warn(
        f"Resilient fields of type {describe_type(type_)} have no fallback and will "
        "propagate their decode errors. Declare the field as optional, as a "
        "collection, or use an enum with a decoding fallback",
        ResilientMisuseWarning,
        stacklevel=2,
    )
    return Field(FieldShape.SCALAR, type_, key)
