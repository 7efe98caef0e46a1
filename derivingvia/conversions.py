"""Conversion derivations: defaults, formatting, parsing and (de)serialization."""

from __future__ import annotations

import copy
import typing
from collections.abc import Callable
from typing import Any

from .fields import DerivingError, NewtypeFields, deref_to, extract_fields

_BUILTIN_TYPES: dict[str, type] = {
    tp.__name__: tp
    for tp in (
        bool,
        bytearray,
        bytes,
        complex,
        dict,
        float,
        frozenset,
        int,
        list,
        object,
        set,
        str,
        tuple,
    )
}


def _attach(cls: type, name: str, func: Callable[..., Any], *, cls_method: bool = False) -> None:
    func.__name__ = name
    func.__qualname__ = f"{cls.__qualname__}.{name}"
    setattr(cls, name, classmethod(func) if cls_method else func)


def _concrete(tp: Any) -> type | None:
    """The runtime class behind ``tp``, or ``None`` for type variables and the like."""
    origin = typing.get_origin(tp) or tp
    return origin if isinstance(origin, type) else None


def _field_type(fields: NewtypeFields) -> Any:
    """The declared type of the wrapped field, with simple string annotations resolved."""
    declared = fields.type
    if not isinstance(declared, str):
        return declared
    owner = fields.owner
    if declared == getattr(owner, "__name__", None):
        return owner
    return _BUILTIN_TYPES.get(declared, declared)


def _into(value: Any, target: Any) -> Any:
    """Wrap ``value`` layer by layer until it becomes an instance of ``target``."""
    runtime = _concrete(target)
    if runtime is None or isinstance(value, runtime):
        return value
    try:
        fields = extract_fields(runtime)
    except DerivingError:
        raise DerivingError(
            f"cannot convert {type(value).__name__} into {runtime.__name__}"
        ) from None
    return fields.build(_into(value, _field_type(fields)))


def _unwrapper(cls: type, via: Any) -> Callable[[Any], Any]:
    fields = extract_fields(cls)
    if via is None or _concrete(via) is None:
        return fields.get
    return lambda obj: deref_to(obj, via)


def _resolve(cls: type, via: Any, of: Any) -> Any:
    """Pick the concrete type a derivation works with: ``via``, the field type, or ``of``."""
    fields = extract_fields(cls)
    for candidate in (via, _field_type(fields), of):
        if candidate is not None and _concrete(candidate) is not None:
            return candidate
    raise DerivingError(
        f"{cls.__name__}: the wrapped type is generic; pass a concrete type"
    )


def _serialize(value: Any) -> Any:
    method = getattr(type(value), "serialize", None)
    return value.serialize() if callable(method) else value


def _deserialize(tp: Any, data: Any) -> Any:
    runtime = _concrete(tp)
    if runtime is None:
        return data
    method = getattr(runtime, "deserialize", None)
    if callable(method):
        return method(data)
    if isinstance(data, runtime):
        return data
    raise DerivingError(
        f"cannot deserialize {type(data).__name__} as {runtime.__name__}"
    )


def derive_default(cls: type, via: Any = None) -> type:
    """Give ``cls`` a ``default(of=None)`` class method building it from a default value."""
    fields = extract_fields(cls)

    def default(klass: type, of: Any = None) -> Any:
        tp = _resolve(klass, via, of)
        runtime = _concrete(tp)
        factory = getattr(runtime, "default", None)
        value = factory() if callable(factory) else runtime()
        target = _field_type(fields)
        if _concrete(target) is None:
            return fields.build(value)
        return fields.build(_into(value, target))

    _attach(cls, "default", default, cls_method=True)
    return cls


def derive_deserialize(cls: type, via: Any = None) -> type:
    """Give ``cls`` a ``deserialize(data)`` class method reading plain data."""
    fields = extract_fields(cls)

    def deserialize(klass: type, data: Any) -> Any:
        if via is None:
            return fields.build(_deserialize(_field_type(fields), data))
        return _into(_deserialize(via, data), klass)

    _attach(cls, "deserialize", deserialize, cls_method=True)
    return cls


def derive_serialize(cls: type, via: Any = None) -> type:
    """Give ``cls`` a ``serialize()`` method turning it into plain data."""
    unwrap = _unwrapper(cls, via)

    def serialize(self: Any) -> Any:
        return _serialize(unwrap(self))

    _attach(cls, "serialize", serialize)
    return cls


def derive_display(cls: type, via: Any = None) -> type:
    """Make ``str()`` of ``cls`` show the wrapped (or ``via``) value."""
    unwrap = _unwrapper(cls, via)

    def __str__(self: Any) -> str:
        return str(unwrap(self))

    _attach(cls, "__str__", __str__)
    return cls


def derive_from(cls: type, via: Any = None) -> type:
    """Give ``cls`` a ``from_value(value)`` class method wrapping a field (or ``via``) value."""
    fields = extract_fields(cls)
    source = via if via is not None else _field_type(fields)
    runtime = _concrete(source)

    def from_value(klass: type, value: Any) -> Any:
        if runtime is not None and not isinstance(value, runtime):
            raise DerivingError(
                f"{klass.__name__}.from_value expects {runtime.__name__}, "
                f"got {type(value).__name__}"
            )
        if via is None:
            return fields.build(value)
        return _into(value, klass)

    _attach(cls, "from_value", from_value, cls_method=True)
    return cls


def derive_from_str(cls: type, via: Any = None) -> type:
    """Give ``cls`` a ``from_str(text, of=None)`` class method parsing a string."""
    fields = extract_fields(cls)

    def from_str(klass: type, text: str, of: Any = None) -> Any:
        tp = _resolve(klass, via, of)
        runtime = _concrete(tp)
        if runtime is str:
            return fields.build(text)
        parser = getattr(runtime, "from_str", None)
        intermediate = parser(text) if callable(parser) else runtime(text)
        if _concrete(_field_type(fields)) is None:
            return fields.build(intermediate)
        return _into(intermediate, klass)

    _attach(cls, "from_str", from_str, cls_method=True)
    return cls


def derive_into(cls: type, via: Any = None) -> type:
    """Give ``cls`` an ``into()`` method returning the wrapped (or ``via``) value."""
    fields = extract_fields(cls)

    if via is None or _concrete(via) is None:
        def into(self: Any) -> Any:
            return fields.get(self)
    else:
        def into(self: Any) -> Any:
            return copy.copy(deref_to(self, via))

    _attach(cls, "into", into)
    return cls


def derive_try_from(cls: type, via: Any = None) -> type:
    """Give ``cls`` a ``try_from(value)`` class method that validates before wrapping."""
    fields = extract_fields(cls)

    def try_from(klass: type, value: Any) -> Any:
        if via is None:
            runtime = _concrete(_field_type(fields))
            if runtime is not None and not isinstance(value, runtime):
                raise DerivingError(
                    f"{klass.__name__}.try_from expects {runtime.__name__}, "
                    f"got {type(value).__name__}"
                )
            return fields.build(value)
        runtime = _concrete(via)
        if runtime is None or isinstance(value, runtime):
            intermediate = value
        else:
            converter = getattr(runtime, "try_from", None)
            if not callable(converter):
                raise DerivingError(
                    f"cannot convert {type(value).__name__} into {runtime.__name__}"
                )
            intermediate = converter(value)
        return _into(intermediate, klass)

    _attach(cls, "try_from", try_from, cls_method=True)
    return cls