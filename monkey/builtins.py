"""Native functions available to every Monkey program.

The table is built once at import time and exposed read-only; the
evaluator consults it only after a name is not found anywhere in the
environment chain. Each builtin checks its own arity and argument types
and reports problems as :class:`Error` values.
"""

from types import MappingProxyType
from typing import List, Mapping

from .object import (
    ARRAY_OBJ, Array, Builtin, Error, Integer, NULL, Object, String,
)


def wrong_arguments(got: int, want: int) -> Error:
    return Error(f"wrong number of arguments. got={got}, want={want}")


def _len(args: List[Object]) -> Object:
    if len(args) != 1:
        return wrong_arguments(len(args), 1)
    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.value))
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    return Error(f"argument to `len` not supported, got {arg.type()}")


def _first(args: List[Object]) -> Object:
    if len(args) != 1:
        return wrong_arguments(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return Error(f"argument to `first` must be {ARRAY_OBJ}, got {arr.type()}")
    if not arr.elements:
        return NULL
    return arr.elements[0]


def _last(args: List[Object]) -> Object:
    if len(args) != 1:
        return wrong_arguments(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return Error(f"argument to `last` must be {ARRAY_OBJ}, got {arr.type()}")
    if not arr.elements:
        return NULL
    return arr.elements[-1]


def _rest(args: List[Object]) -> Object:
    if len(args) != 1:
        return wrong_arguments(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return Error(f"argument to `rest` must be {ARRAY_OBJ}, got {arr.type()}")
    if not arr.elements:
        return NULL
    return Array(arr.elements[1:])


def _push(args: List[Object]) -> Object:
    if len(args) != 2:
        return wrong_arguments(len(args), 2)
    arr, value = args
    if not isinstance(arr, Array):
        return Error(f"argument to `push` must be {ARRAY_OBJ}, got {arr.type()}")
    # copy on write: the input array is left untouched
    return Array(arr.elements + [value])


def _puts(args: List[Object]) -> Object:
    for arg in args:
        print(arg.inspect())
    return NULL


BUILTINS: Mapping[str, Builtin] = MappingProxyType({
    'len': Builtin('len', _len),
    'first': Builtin('first', _first),
    'last': Builtin('last', _last),
    'rest': Builtin('rest', _rest),
    'push': Builtin('push', _push),
    'puts': Builtin('puts', _puts),
})
