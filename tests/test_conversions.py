import json
from dataclasses import dataclass
from typing import Generic, TypeVar

import pytest

from derivingvia.conversions import (
    derive_default,
    derive_deserialize,
    derive_display,
    derive_from,
    derive_from_str,
    derive_into,
    derive_serialize,
    derive_try_from,
)
from derivingvia.fields import DerivingError

T = TypeVar("T")


def _chain():
    @dataclass
    class A:
        value: int

    @dataclass
    class B:
        value: A

    @dataclass
    class C:
        value: B

    return A, B, C


def _generic():
    @dataclass
    class D(Generic[T]):
        value: T

    return D


# default

def test_default_via_type_variable():
    D = derive_default(_generic(), T)
    assert D.default(int) == D(0)


def test_default_generic_without_type_raises():
    D = derive_default(_generic(), T)
    with pytest.raises(DerivingError):
        D.default()


def test_default_concrete_field():
    @dataclass
    class Items:
        value: list

    derive_default(Items)
    assert Items.default() == Items([])


def test_default_via_wraps_into_field():
    A, B, C = _chain()
    derive_default(C, int)
    assert C.default() == C(B(A(0)))


# deserialize / serialize

def test_deserialize_transitive():
    A, B, C = _chain()
    derive_serialize(A)
    derive_deserialize(A)
    derive_serialize(C, int)
    derive_deserialize(C, int)
    c = C(B(A(1)))
    serialized = json.dumps(c.serialize())
    assert serialized == "1"
    deserialized = C.deserialize(json.loads(serialized))
    assert deserialized.value.value.value == 1


def test_deserialize_generics():
    D = _generic()
    derive_serialize(D, T)
    derive_deserialize(D, T)
    serialized = json.dumps(D(1).serialize())
    assert serialized == "1"
    assert D.deserialize(json.loads(serialized)).value == 1


def test_deserialize_without_via_uses_field_type():
    A, _, _ = _chain()
    derive_deserialize(A)
    assert A.deserialize(7) == A(7)


def test_deserialize_wrong_type_raises():
    A, _, C = _chain()
    derive_deserialize(C, int)
    with pytest.raises(DerivingError):
        C.deserialize("1")


def test_serialize_in_json_object():
    A, B, C = _chain()
    derive_serialize(C, int)
    D = derive_serialize(_generic(), T)
    c = C(B(A(1)))
    assert json.dumps({"c": c.serialize()}, separators=(",", ":")) == '{"c":1}'
    assert json.dumps({"d": D(1).serialize()}, separators=(",", ":")) == '{"d":1}'


def test_serialize_delegates_to_inner_serialize():
    A, B, _ = _chain()
    derive_serialize(A)
    derive_serialize(B)
    assert B(A(5)).serialize() == 5


# display

def test_display():
    A, B, C = _chain()
    derive_display(C, int)
    D = derive_display(_generic())
    assert str(C(B(A(1)))) == str(1)
    assert str(D(1)) == str(1)
    assert f"{D('foo')}" == "foo"


# from

def test_from_chain():
    A, B, C = _chain()
    derive_from(A)
    derive_from(B)
    derive_from(C)
    D = derive_from(_generic())
    b = B.from_value(A(1))
    c = C.from_value(b)
    d = D.from_value(c)
    assert d.value.value.value.value == 1


def test_from_wrong_type_raises():
    A, B, _ = _chain()
    derive_from(B)
    with pytest.raises(DerivingError):
        B.from_value(1)


def test_from_via_wraps_transitively():
    A, B, C = _chain()
    derive_from(C, int)
    assert C.from_value(42) == C(B(A(42)))


# from_str

def test_from_str():
    A, B, C = _chain()
    derive_from_str(A)
    derive_from_str(B)
    derive_from_str(C, int)
    D = derive_from_str(_generic(), T)
    assert A.from_str("42") == A(42)
    assert B.from_str("42") == B(A(42))
    assert C.from_str("42") == C(B(A(42)))
    assert D.from_str("42", int) == D(42)


def test_from_str_string_field():
    @dataclass
    class Id:
        value: str

    derive_from_str(Id)
    assert Id.from_str("user-example") == Id("user-example")


def test_from_str_invalid_raises():
    A, _, _ = _chain()
    derive_from_str(A)
    with pytest.raises(ValueError):
        A.from_str("not a number")


# into

def test_into_via():
    A, B, C = _chain()
    derive_into(A, int)
    derive_into(B, int)
    derive_into(C, int)
    assert C(B(A(42))).into() == 42
    assert B(A(7)).into() == 7


def test_into_without_via():
    A, B, _ = _chain()
    derive_into(B)
    assert B(A(5)).into() == A(5)


# try_from

def test_try_from_field_type():
    A, _, _ = _chain()
    derive_try_from(A)
    assert A.try_from(3) == A(3)
    with pytest.raises(DerivingError):
        A.try_from("3")


def test_try_from_via():
    A, B, C = _chain()
    derive_try_from(C, int)
    assert C.try_from(7) == C(B(A(7)))
    with pytest.raises(DerivingError):
        C.try_from("7")