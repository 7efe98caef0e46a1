# derivingvia

`derivingvia` gives wrapper dataclasses ("newtypes") the behaviour of the value
they wrap, without writing the forwarding methods by hand. It can also reach
through several layers of wrapping and borrow behaviour from a value buried
deeper inside: "deriving via" a given type.

The package has no runtime dependencies and supports Python 3.10 and later.

```
pip install derivingvia
```

## Newtypes

A newtype is a dataclass with exactly one field. When a dataclass has several
fields, mark the one that carries the value with `derivingvia.fields.underlying()`
(it takes the same keyword arguments as `dataclasses.field`). When a new
instance is built from a value, every other init field without a default is
filled by calling its annotated type with no arguments (for example `list()`);
if that type is not a class, `DerivingError` is raised.

```python
from dataclasses import dataclass, field

from derivingvia.fields import underlying


@dataclass
class Tagged:
    value: int = underlying()
    tags: list = field(default_factory=list)
```

Field annotations should be real classes: derivations check values with
`isinstance` and walk from one wrapper to the next through these annotations,
so do not write the wrapper classes under `from __future__ import annotations`.

## Deriving

Each `derive_*` function takes the class and an optional `via` type, adds
methods to the class in place and returns it. Without `via` the methods work
on the wrapped field itself. With `via`, they first unwrap the instance layer
by layer until a value of type `via` is reached. A `via` that is not a concrete
class (a type variable, say) behaves like no `via` at all.

```python
from dataclasses import dataclass

from derivingvia.conversions import derive_display
from derivingvia.ops import derive_add


@dataclass
class A:
    value: int


@dataclass
class B:
    value: A


@dataclass
class C:
    value: B


derive_add(C, int)
derive_display(C, int)

c = C(B(A(42))) + C(B(A(42)))
print(c)  # 84
```

Results computed on an inner value are wrapped back up, layer by layer, into
the outer class.

Because `via` defaults to `None`, any `derive_*` function can also be used as a
plain class decorator above `@dataclass`.

### `derivingvia.access`

| Function | Adds |
| --- | --- |
| `derive_as_ref` | `as_ref()` returning the wrapped (or `via`) value |
| `derive_as_mut` | `as_mut()` returning the same value, for in-place changes |
| `derive_index` | `obj[idx]` |
| `derive_index_mut` | `obj[idx] = value` |
| `derive_into_iterator` | `iter(obj)` over the wrapped field; a `via` raises `DerivingError` |
| `derive_iter` | `iter()` method over the wrapped (or `via`) collection |
| `derive_from_iterator` | class method `from_iter(iterable)`; `via` is the item type and is required; items of another type raise `DerivingError` |

### `derivingvia.conversions`

| Function | Adds |
| --- | --- |
| `derive_default` | class method `default(of=None)` |
| `derive_deserialize` | class method `deserialize(data)` |
| `derive_serialize` | `serialize()` returning plain data |
| `derive_display` | `str(obj)` |
| `derive_from` | class method `from_value(value)`, checking the value's type |
| `derive_from_str` | class method `from_str(text, of=None)` |
| `derive_into` | `into()` returning the wrapped value, or a shallow copy of the `via` value |
| `derive_try_from` | class method `try_from(value)` |

`default` and `from_str` accept `of`, a concrete type to use when neither `via`
nor the field's annotation is one. `default` calls the type's own `default()`
if it has one, otherwise the type itself; `from_str` wraps the text directly
for `str`, otherwise calls the type's `from_str` if it has one, otherwise the
type on the text. `serialize` and `deserialize` defer to the inner value's own
`serialize`/`deserialize` where present.

### `derivingvia.ops`

| Function | Adds |
| --- | --- |
| `derive_add` | `+` and `-` |
| `derive_mul` | `*`, `/` and `//` |
| `derive_arithmetic` | everything from `derive_add` and `derive_mul` |
| `derive_add_assign` | `+=` and `-=` |
| `derive_mul_assign` | `*=`, `/=` and `//=` |
| `derive_partial_eq` | `==` |
| `derive_eq` | the same as `derive_partial_eq` |
| `derive_partial_ord` | `<`, `<=`, `>`, `>=` |
| `derive_ord` | the comparisons plus `cmp(other)` returning -1, 0 or 1 |
| `derive_hash` | `hash(obj)` from the wrapped (or `via`) value |

Binary operators and comparisons only accept another instance of the same
class; anything else returns `NotImplemented`. In-place operators with `via`
replace the inner value where it sits, so the outer object keeps its identity.

### `derivingvia.fields`

- `extract_fields(cls)` returns a `NewtypeFields` describing the wrapped field
  (`owner`, `name`, `type`, `defaults`), with `get(obj)` and `build(value)`.
- `deref(obj)` unwraps one layer; `deref_to(obj, via)` unwraps until a value of
  type `via` is reached; `replace_via(obj, via, value)` replaces that inner
  value in place.
- `DerivingError`, a subclass of `TypeError`, is raised for a class that is not
  a dataclass, for several fields with no `underlying()` marker or with more
  than one, and for values that cannot be unwrapped or converted as asked.

## What this package does not do

There is no single decorator that takes a list of derivings by name, and no
declaration of conversion chains between types: apply the `derive_*` functions
you need one by one. Conversions are derived per class with `derive_from`,
`derive_from_str` and `derive_try_from`.

## Running the tests

```
pip install -e ".[test]"
pytest
```