"""
Declarative models decoded field by field.
"""

from typing import Any, ClassVar

from ..core.decoder import Decoder
from .fields import Field
from .value import ResilientValue


class Model:
    """
    Base class for types decoded from keyed containers.

    Fields are declared as class attributes built with the constructors in
    ``resilientdecoding.fields``. Each one is decoded independently, so a
    resilient field failing never prevents the rest of the model from
    decoding. Models compare equal when their field values are equal.
    """

    _fields: ClassVar[dict[str, Field]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        collected: dict[str, Field] = {}
        for base in reversed(cls.__mro__):
            for name, attribute in vars(base).items():
                if isinstance(attribute, Field):
                    collected[name] = attribute
        cls._fields = collected

    def __init__(self, **values: Any):
        unknown = set(values) - set(self._fields)
        if unknown:
            raise TypeError(
                f"{type(self).__name__} got unexpected fields: {', '.join(sorted(unknown))}"
            )
        resilient_values: dict[str, ResilientValue[Any]] = {}
        for name, field in self._fields.items():
            if name in values:
                resilient_values[name] = ResilientValue(values[name], collection=field.collection)
            else:
                resilient_values[name] = field.default_value()
        self._resilient_values = resilient_values

    @classmethod
    def from_decoder(cls, decoder: Decoder) -> "Model":
        """Decode every declared field from the keyed container under ``decoder``."""
        container = decoder.container()
        instance = cls.__new__(cls)
        instance._resilient_values = {
            name: field.decode(container) for name, field in cls._fields.items()
        }
        return instance

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._resilient_values == other._resilient_values  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(tuple(self._resilient_values[name] for name in self._fields))

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={value.value!r}" for name, value in self._resilient_values.items()
        )
        return f"{type(self).__name__}({fields})"


def resilient_value(model: Model, name: str) -> ResilientValue[Any]:
    """
    The wrapper behind a model attribute, carrying its outcome and errors.

    Raises:
        AttributeError: If the model declares no field called ``name``
    """
    try:
        return model._resilient_values[name]
    except KeyError:
        raise AttributeError(f"{type(model).__name__} has no field {name!r}") from None
