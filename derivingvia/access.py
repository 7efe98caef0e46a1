"""Container-style derivations: references, indexing and iteration."""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from .fields import DerivingError, deref_to, extract_fields


def _attach(cls: type, name: str, func: Callable[..., Any]) -> None:
    func.__name__ = name
    func.__qualname__ = f"{cls.__qualname__}.{name}"
    setattr(cls, name, func)


def _concrete(tp: Any) -> Any:
    """The runtime class behind ``tp``, or ``None`` if there is none to check."""
    origin = typing.get_origin(tp) or tp
    if isinstance(origin, type):
        return origin
    if isinstance(origin, tuple) and all(isinstance(t, type) for t in origin):
        return origin
    return None


def _unwrapper(cls: type, via: Any) -> Callable[[Any], Any]:
    """Return a function reaching the value a derivation works on.

    Without ``via``, or when ``via`` names no concrete class (a type variable,
    say), that value is the wrapped field itself; otherwise it is the value of
    type ``via`` found by dereferencing layer by layer.
    """
    fields = extract_fields(cls)
    if via is None or _concrete(via) is None:
        return fields.get
    return lambda obj: deref_to(obj, via)


def derive_as_ref(cls: type, via: Any = None) -> type:
    """Give ``cls`` an ``as_ref()`` method returning the wrapped (or ``via``) value."""
    unwrap = _unwrapper(cls, via)

    def as_ref(self: Any) -> Any:
        return unwrap(self)

    _attach(cls, "as_ref", as_ref)
    return cls


def derive_as_mut(cls: type, via: Any = None) -> type:
    """Give ``cls`` an ``as_mut()`` method returning the wrapped value for in-place change."""
    unwrap = _unwrapper(cls, via)

    def as_mut(self: Any) -> Any:
        return unwrap(self)

    _attach(cls, "as_mut", as_mut)
    return cls


def derive_index(cls: type, via: Any = None) -> type:
    """Make ``cls`` subscriptable by forwarding ``obj[idx]`` to the wrapped value."""
    unwrap = _unwrapper(cls, via)

    def __getitem__(self: Any, idx: Any) -> Any:
        return unwrap(self)[idx]

    _attach(cls, "__getitem__", __getitem__)
    return cls


def derive_index_mut(cls: type, via: Any = None) -> type:
    """Allow ``obj[idx] = value`` by forwarding it to the wrapped value."""
    unwrap = _unwrapper(cls, via)

    def __setitem__(self: Any, idx: Any, value: Any) -> None:
        unwrap(self)[idx] = value

    _attach(cls, "__setitem__", __setitem__)
    return cls


def derive_into_iterator(cls: type, via: Any = None) -> type:
    """Make instances of ``cls`` iterable over the wrapped value."""
    if via is not None:
        raise DerivingError(
            f"{cls.__name__}: IntoIterator with via is not allowed; "
            "use Iter with via instead"
        )
    fields = extract_fields(cls)

    def __iter__(self: Any) -> Iterator[Any]:
        return iter(fields.get(self))

    _attach(cls, "__iter__", __iter__)
    return cls


def derive_iter(cls: type, via: Any = None) -> type:
    """Give ``cls`` an ``iter()`` method iterating the wrapped (or ``via``) collection."""
    unwrap = _unwrapper(cls, via)

    def iter_(self: Any) -> Iterator[Any]:
        return iter(unwrap(self))

    _attach(cls, "iter", iter_)
    return cls


def derive_from_iterator(cls: type, via: Any = None) -> type:
    """Give ``cls`` a ``from_iter(iterable)`` class method collecting items of type ``via``."""
    if via is None:
        raise DerivingError(
            f"{cls.__name__}: FromIterator without via is not allowed; "
            "specify the item type as via"
        )
    fields = extract_fields(cls)
    collection = _concrete(fields.type)
    if not isinstance(collection, type):
        collection = list
    item_type = _concrete(via)

    def from_iter(klass: type, iterable: Iterable[Any]) -> Any:
        items = list(iterable)
        if item_type is not None:
            for item in items:
                if not isinstance(item, item_type):
                    raise DerivingError(
                        f"{klass.__name__}.from_iter expects items of type "
                        f"{via!r}, got {type(item).__name__}"
                    )
        return fields.build(collection(items))

    from_iter.__name__ = "from_iter"
    from_iter.__qualname__ = f"{cls.__qualname__}.from_iter"
    cls.from_iter = classmethod(from_iter)
    return cls