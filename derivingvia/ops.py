"""Operator derivations: arithmetic, in-place arithmetic, equality, ordering and hashing."""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any

from .conversions import _concrete, _into, _unwrapper
from .fields import deref_to, extract_fields, replace_via


def _attach(cls: type, name: str, func: Callable[..., Any]) -> None:
    func.__name__ = name
    func.__qualname__ = f"{cls.__qualname__}.{name}"
    setattr(cls, name, func)


def _binary(cls: type, via: Any, name: str, op: Callable[[Any, Any], Any]) -> None:
    """Attach a binary operator that applies ``op`` to the wrapped (or ``via``) values."""
    fields = extract_fields(cls)
    if via is None:
        def method(self: Any, other: Any) -> Any:
            if not isinstance(other, cls):
                return NotImplemented
            return fields.build(op(fields.get(self), fields.get(other)))
    else:
        unwrap = _unwrapper(cls, via)

        def method(self: Any, other: Any) -> Any:
            if not isinstance(other, cls):
                return NotImplemented
            return _into(op(unwrap(self), unwrap(other)), cls)

    _attach(cls, name, method)


def _inplace(cls: type, via: Any, name: str, op: Callable[[Any, Any], Any]) -> None:
    """Attach an in-place operator that updates the wrapped (or ``via``) value."""
    fields = extract_fields(cls)
    if via is None or _concrete(via) is None:
        def method(self: Any, other: Any) -> Any:
            if not isinstance(other, cls):
                return NotImplemented
            setattr(self, fields.name, op(fields.get(self), fields.get(other)))
            return self
    else:
        def method(self: Any, other: Any) -> Any:
            if not isinstance(other, cls):
                return NotImplemented
            updated = op(deref_to(self, via), deref_to(other, via))
            replace_via(self, via, updated)
            return self

    _attach(cls, name, method)


def derive_add(cls: type, via: Any = None) -> type:
    """Give ``cls`` ``+`` and ``-`` working on the wrapped (or ``via``) value."""
    _binary(cls, via, "__add__", operator.add)
    _binary(cls, via, "__sub__", operator.sub)
    return cls


def derive_add_assign(cls: type, via: Any = None) -> type:
    """Give ``cls`` ``+=`` and ``-=`` updating the wrapped (or ``via``) value in place."""
    _inplace(cls, via, "__iadd__", operator.iadd)
    _inplace(cls, via, "__isub__", operator.isub)
    return cls


def derive_mul(cls: type, via: Any = None) -> type:
    """Give ``cls`` ``*``, ``/`` and ``//`` working on the wrapped (or ``via``) value."""
    _binary(cls, via, "__mul__", operator.mul)
    _binary(cls, via, "__truediv__", operator.truediv)
    _binary(cls, via, "__floordiv__", operator.floordiv)
    return cls


def derive_mul_assign(cls: type, via: Any = None) -> type:
    """Give ``cls`` ``*=``, ``/=`` and ``//=`` updating the wrapped (or ``via``) value."""
    _inplace(cls, via, "__imul__", operator.imul)
    _inplace(cls, via, "__itruediv__", operator.itruediv)
    _inplace(cls, via, "__ifloordiv__", operator.ifloordiv)
    return cls


def derive_arithmetic(cls: type, via: Any = None) -> type:
    """Derive both the additive and the multiplicative operators."""
    derive_add(cls, via)
    derive_mul(cls, via)
    return cls


def derive_partial_eq(cls: type, via: Any = None) -> type:
    """Make ``==`` compare the wrapped (or ``via``) values."""
    unwrap = _unwrapper(cls, via)

    def __eq__(self: Any, other: Any) -> Any:
        if not isinstance(other, cls):
            return NotImplemented
        return unwrap(self) == unwrap(other)

    _attach(cls, "__eq__", __eq__)
    return cls


def derive_eq(cls: type, via: Any = None) -> type:
    """Derive total equality; in Python this is the same as ``derive_partial_eq``."""
    return derive_partial_eq(cls, via)


def derive_partial_ord(cls: type, via: Any = None) -> type:
    """Make ``<``, ``<=``, ``>`` and ``>=`` compare the wrapped (or ``via``) values."""
    unwrap = _unwrapper(cls, via)

    def make(name: str, op: Callable[[Any, Any], Any]) -> None:
        def method(self: Any, other: Any) -> Any:
            if not isinstance(other, cls):
                return NotImplemented
            return op(unwrap(self), unwrap(other))

        _attach(cls, name, method)

    make("__lt__", operator.lt)
    make("__le__", operator.le)
    make("__gt__", operator.gt)
    make("__ge__", operator.ge)
    return cls


def derive_ord(cls: type, via: Any = None) -> type:
    """Derive ordering plus a ``cmp(other)`` method returning -1, 0 or 1."""
    derive_partial_ord(cls, via)
    unwrap = _unwrapper(cls, via)

    def cmp(self: Any, other: Any) -> int:
        if not isinstance(other, cls):
            raise TypeError(
                f"cannot compare {cls.__name__} with {type(other).__name__}"
            )
        left, right = unwrap(self), unwrap(other)
        return (left > right) - (left < right)

    _attach(cls, "cmp", cmp)
    return cls


def derive_hash(cls: type, via: Any = None) -> type:
    """Make ``hash()`` of ``cls`` the hash of the wrapped (or ``via``) value."""
    unwrap = _unwrapper(cls, via)

    def __hash__(self: Any) -> int:
        return hash(unwrap(self))

    _attach(cls, "__hash__", __hash__)
    return cls