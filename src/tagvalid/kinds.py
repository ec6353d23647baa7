"""Structural kinds of values met during traversal."""

import types
from collections.abc import Mapping
from enum import Enum
from typing import Any, Union, get_args, get_origin

from .records import is_record

SCALAR_TYPES = (bool, int, float, str, bytes, bytearray)
NONE_TYPE = type(None)


class Kind(str, Enum):
    """Closed set of shapes the engine knows how to walk."""
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    POINTER = "pointer"
    INTERFACE = "interface"
    RECORD = "record"
    UNSUPPORTED = "unsupported"


def optional_target(declared: Any) -> tuple[bool, Any]:
    """Split ``Optional[T]`` into ``(True, T)``; anything else is ``(False, None)``."""
    origin = get_origin(declared)
    if origin is Union or origin is types.UnionType:
        args = get_args(declared)
        if NONE_TYPE in args:
            rest = tuple(arg for arg in args if arg is not NONE_TYPE)
            if len(rest) == 1:
                return True, rest[0]
            return True, Union[rest]
    return False, None


def element_type(declared: Any, index: int) -> Any:
    """Declared type of one element of a list or tuple annotation."""
    origin = get_origin(declared)
    args = get_args(declared)
    if not args:
        return None
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return args[index] if index < len(args) else None
    return args[0]


def classify(value: Any, declared: Any = None) -> tuple[Kind, Any]:
    """Resolve the kind of a value.

    The declared type decides pointer and interface semantics; the runtime
    value decides everything else.

    Args:
        value: Runtime value
        declared: Declared type of the field or element, if known

    Returns:
        Tuple of (kind, declared type to carry into the recursion)
    """
    is_optional, target = optional_target(declared)
    if is_optional:
        return Kind.POINTER, target
    if value is None:
        return Kind.POINTER, None
    if declared is Any or declared is object:
        return Kind.INTERFACE, None
    if is_record(value):
        return Kind.RECORD, None
    if isinstance(value, Mapping):
        return Kind.UNSUPPORTED, None
    if isinstance(value, SCALAR_TYPES):
        return Kind.SCALAR, None
    if isinstance(value, (list, tuple)):
        return Kind.SEQUENCE, declared
    return Kind.UNSUPPORTED, None
