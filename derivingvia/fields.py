"""Locating the wrapped field of a newtype and dereferencing through it."""

from __future__ import annotations

import dataclasses
import functools
import typing
from dataclasses import dataclass
from typing import Any, Callable

UNDERLYING = "derivingvia.underlying"


class DerivingError(TypeError):
    """Raised when a class or a value cannot take part in a derivation."""


@dataclass(frozen=True)
class NewtypeFields:
    """How to read and rebuild the wrapped value of a newtype class."""

    owner: type
    name: str
    type: Any
    defaults: tuple[tuple[str, Callable[[], Any]], ...] = ()

    def get(self, obj: Any) -> Any:
        """Return the wrapped value of ``obj``."""
        return getattr(obj, self.name)

    def build(self, value: Any) -> Any:
        """Create a new instance of the owner wrapping ``value``."""
        kwargs = {name: factory() for name, factory in self.defaults}
        kwargs[self.name] = value
        return self.owner(**kwargs)


def underlying(**kwargs: Any) -> Any:
    """A dataclass field marked as the wrapped value of a multi-field newtype."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[UNDERLYING] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def _runtime_type(tp: Any) -> Any:
    """Strip subscription (``list[int]`` -> ``list``) so isinstance works."""
    if isinstance(tp, tuple):
        return tuple(_runtime_type(t) for t in tp)
    return typing.get_origin(tp) or tp


def _has_default(field: dataclasses.Field) -> bool:
    return (
        field.default is not dataclasses.MISSING
        or field.default_factory is not dataclasses.MISSING
    )


def _default_factory(cls: type, field: dataclasses.Field) -> Callable[[], Any]:
    factory = _runtime_type(field.type)
    if isinstance(factory, type):
        return factory
    raise DerivingError(
        f"field {field.name!r} of {cls.__name__} has no default and its type "
        f"{field.type!r} cannot provide one"
    )


@functools.cache
def extract_fields(cls: type) -> NewtypeFields:
    """Find the wrapped field of ``cls``, a dataclass newtype."""
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise DerivingError(
            f"{cls!r}: input is not a struct; deriving can only be used with dataclasses"
        )
    fields = dataclasses.fields(cls)
    if len(fields) == 1:
        (field,) = fields
        return NewtypeFields(cls, field.name, field.type)

    marked = [f for f in fields if f.metadata.get(UNDERLYING)]
    if not marked:
        raise DerivingError(
            f"{cls.__name__}: underlying() is required for multiple fields; "
            "mark one field with underlying()"
        )
    if len(marked) > 1:
        raise DerivingError(
            f"{cls.__name__}: multiple underlying() fields are not allowed; "
            "mark only one field with underlying()"
        )
    (chosen,) = marked
    defaults = tuple(
        (f.name, _default_factory(cls, f))
        for f in fields
        if f is not chosen and f.init and not _has_default(f)
    )
    return NewtypeFields(cls, chosen.name, chosen.type, defaults)


def deref(obj: Any) -> Any:
    """Return the value wrapped by the newtype instance ``obj``."""
    return extract_fields(type(obj)).get(obj)


def deref_to(obj: Any, via: Any) -> Any:
    """Unwrap ``obj`` layer by layer until a value of type ``via`` is reached."""
    target = _runtime_type(via)
    current = obj
    while not isinstance(current, target):
        try:
            current = deref(current)
        except DerivingError:
            raise DerivingError(
                f"cannot dereference {type(obj).__name__} to {via!r}"
            ) from None
    return current


def replace_via(obj: Any, via: Any, value: Any) -> None:
    """Replace, in place, the value of type ``via`` wrapped somewhere inside ``obj``."""
    target = _runtime_type(via)
    if isinstance(obj, target):
        raise DerivingError(
            f"{type(obj).__name__} is itself of type {via!r}; nothing to replace"
        )
    current = obj
    while True:
        try:
            fields = extract_fields(type(current))
        except DerivingError:
            raise DerivingError(
                f"cannot dereference {type(obj).__name__} to {via!r}"
            ) from None
        inner = fields.get(current)
        if isinstance(inner, target):
            setattr(current, fields.name, value)
            return
        current = inner