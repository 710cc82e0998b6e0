"""Runtime values for the Monkey language.

Every value the evaluator produces is an :class:`Object` that reports a
type tag and a display string. Two variants, :class:`ReturnValue` and
:class:`Error`, are evaluator-internal signals: they travel up through
composite evaluations and are never stored inside arrays or hashes.

Integers, booleans and strings are *hashable*: they can derive a
:class:`HashKey` and therefore be used as hash-map keys. The type tag is
part of the key so that, for example, ``1`` and ``true`` never collide.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List

from .ast import join_statements

if TYPE_CHECKING:
    from .ast import BlockStatement, Identifier
    from .environment import Environment

INTEGER_OBJ = 'INTEGER'
BOOLEAN_OBJ = 'BOOLEAN'
NULL_OBJ = 'NULL'
RETURN_VALUE_OBJ = 'RETURN_VALUE'
ERROR_OBJ = 'ERROR'
FUNCTION_OBJ = 'FUNCTION'
STRING_OBJ = 'STRING'
BUILTIN_OBJ = 'BUILTIN'
ARRAY_OBJ = 'ARRAY'
HASH_OBJ = 'HASH'

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
_UINT64_MASK = (1 << 64) - 1

_FNV64_OFFSET = 0xcbf29ce484222325
_FNV64_PRIME = 0x100000001b3


def wrap_int64(value: int) -> int:
    """Fold an arbitrary Python int into the signed 64-bit range."""
    value &= _UINT64_MASK
    if value > INT64_MAX:
        value -= 1 << 64
    return value


def fnv1a_64(data: bytes) -> int:
    h = _FNV64_OFFSET
    for byte in data:
        h ^= byte
        h = (h * _FNV64_PRIME) & _UINT64_MASK
    return h


@dataclass(frozen=True)
class HashKey:
    type: str
    value: int  # unsigned 64-bit


class Object:
    """Base class for all runtime values."""

    def type(self) -> str:
        raise NotImplementedError

    def inspect(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.inspect()


class Hashable(Object):
    """Values usable as hash keys."""

    def hash_key(self) -> HashKey:
        raise NotImplementedError


@dataclass(eq=True)
class Integer(Hashable):
    value: int

    def type(self) -> str:
        return INTEGER_OBJ

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(INTEGER_OBJ, self.value & _UINT64_MASK)


@dataclass(eq=True)
class Boolean(Hashable):
    value: bool

    def type(self) -> str:
        return BOOLEAN_OBJ

    def inspect(self) -> str:
        return 'true' if self.value else 'false'

    def hash_key(self) -> HashKey:
        return HashKey(BOOLEAN_OBJ, 1 if self.value else 0)


@dataclass(eq=True)
class String(Hashable):
    value: str

    def type(self) -> str:
        return STRING_OBJ

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        return HashKey(STRING_OBJ, fnv1a_64(self.value.encode('utf-8')))


@dataclass(eq=True)
class Null(Object):

    def type(self) -> str:
        return NULL_OBJ

    def inspect(self) -> str:
        return 'null'


@dataclass
class ReturnValue(Object):
    """Carries the value of a ``return`` up to the enclosing call."""
    value: Object

    def type(self) -> str:
        return RETURN_VALUE_OBJ

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass
class Error(Object):
    """A failed evaluation. Returned, never raised."""
    message: str

    def type(self) -> str:
        return ERROR_OBJ

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


@dataclass(eq=False)
class Function(Object):
    """A user function closed over the environment it was defined in.

    ``env`` is shared, not copied, so the function observes later
    bindings made in its defining scope.
    """
    parameters: List['Identifier']
    body: 'BlockStatement'
    env: 'Environment' = field(repr=False)

    def type(self) -> str:
        return FUNCTION_OBJ

    def inspect(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {{\n{join_statements(self.body.statements)}\n}}"


@dataclass(eq=False)
class Builtin(Object):
    name: str
    fn: Callable[[List[Object]], Object] = field(repr=False)

    def type(self) -> str:
        return BUILTIN_OBJ

    def inspect(self) -> str:
        return 'builtin function'


@dataclass
class Array(Object):
    elements: List[Object]

    def type(self) -> str:
        return ARRAY_OBJ

    def inspect(self) -> str:
        return '[' + ', '.join(e.inspect() for e in self.elements) + ']'


@dataclass
class HashPair:
    key: Object
    value: Object


@dataclass
class Hash(Object):
    pairs: Dict[HashKey, HashPair]

    def type(self) -> str:
        return HASH_OBJ

    def inspect(self) -> str:
        entries = ', '.join(f"{p.key.inspect()}: {p.value.inspect()}" for p in self.pairs.values())
        return '{' + entries + '}'


# Shared instances. Purely an allocation saving: Boolean and Null still
# compare by value.
TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_signal(obj: Object) -> bool:
    """True for the values that must abort any composite evaluation."""
    return isinstance(obj, (ReturnValue, Error))
