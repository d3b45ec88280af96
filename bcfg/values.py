"""
Tagged literal values.

Every literal reaching the formatter is either None, a Scalar carrying
an explicit ScalarKind, or a tuple of further tagged values. The tag selects
the literal rule (suffixes, quoting) so nothing is inferred from Python
runtime classes during formatting.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from .types import TypeDescriptor


class ScalarKind(str, Enum):
    BOOLEAN = "boolean"
    BYTE = "byte"
    SHORT = "short"
    CHAR = "char"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    OTHER = "other"


# ---- Built-in canonical names ----

# lowercased spelling -> canonical built-in name
_ALIASES: Dict[str, Tuple[str, ...]] = {
    "boolean": ("boolean", "java.lang.boolean", "kotlin.boolean"),
    "byte": ("byte", "java.lang.byte", "kotlin.byte"),
    "short": ("short", "java.lang.short", "kotlin.short"),
    "char": ("char", "character", "java.lang.character", "kotlin.char"),
    "int": ("int", "integer", "java.lang.integer", "kotlin.int"),
    "long": ("long", "java.lang.long", "kotlin.long"),
    "float": ("float", "java.lang.float", "kotlin.float"),
    "double": ("double", "java.lang.double", "kotlin.double"),
    "string": ("string", "java.lang.string", "kotlin.string"),
    "list": ("list", "java.util.list", "kotlin.collections.list"),
    "set": ("set", "java.util.set", "kotlin.collections.set"),
}

BUILTIN_NAMES: Dict[str, str] = {
    spelling: canonical for canonical, spellings in _ALIASES.items() for spelling in spellings
}

PRIMITIVE_KINDS: Dict[str, ScalarKind] = {
    "boolean": ScalarKind.BOOLEAN,
    "byte": ScalarKind.BYTE,
    "short": ScalarKind.SHORT,
    "char": ScalarKind.CHAR,
    "int": ScalarKind.INT,
    "long": ScalarKind.LONG,
    "float": ScalarKind.FLOAT,
    "double": ScalarKind.DOUBLE,
}

INTEGRAL_KINDS = (ScalarKind.BYTE, ScalarKind.SHORT, ScalarKind.INT, ScalarKind.LONG)
FLOATING_KINDS = (ScalarKind.FLOAT, ScalarKind.DOUBLE)

INT_RANGES: Dict[ScalarKind, Tuple[int, int]] = {
    ScalarKind.BYTE: (-2**7, 2**7 - 1),
    ScalarKind.SHORT: (-2**15, 2**15 - 1),
    ScalarKind.INT: (-2**31, 2**31 - 1),
    ScalarKind.LONG: (-2**63, 2**63 - 1),
}

# largest finite and smallest positive (subnormal) IEEE single values
FLOAT_MAX = 3.4028234663852886e38
FLOAT_MIN = 1.401298464324817e-45


def builtin_name(name: str) -> Optional[str]:
    """Canonical built-in name for any accepted spelling, or None."""
    return BUILTIN_NAMES.get(name.strip().lower())


@dataclass(frozen=True)
class Scalar:
    kind: ScalarKind
    value: Any

    def __str__(self) -> str:
        if self.kind is ScalarKind.BOOLEAN:
            return "true" if self.value else "false"
        return str(self.value)


TaggedValue = Union[None, Scalar, Tuple["TaggedValue", ...]]


# ---- Tagging ----

def _scalar_hint(declared: Optional[TypeDescriptor]) -> Optional[ScalarKind]:
    if declared is None or declared.array:
        return None
    name = builtin_name(declared.canonical_name)
    if name == "string":
        return ScalarKind.STRING
    return PRIMITIVE_KINDS.get(name or "")


def element_descriptor(declared: Optional[TypeDescriptor]) -> Optional[TypeDescriptor]:
    """Declared type of the elements of a container-typed declaration."""
    if declared is None:
        return None
    if declared.array:
        return replace(declared, array=False)
    if declared.type_arguments:
        return declared.type_arguments[0]
    return None


def _tag_scalar(raw: Any, hint: Optional[ScalarKind]) -> Scalar:
    if isinstance(raw, bool):
        return Scalar(ScalarKind.BOOLEAN, raw)
    if isinstance(raw, int):
        if hint in INTEGRAL_KINDS:
            return Scalar(hint, raw)
        if hint in FLOATING_KINDS:
            return Scalar(hint, float(raw))
        if hint is ScalarKind.STRING:
            return Scalar(ScalarKind.STRING, str(raw))
        lo, hi = INT_RANGES[ScalarKind.INT]
        return Scalar(ScalarKind.INT if lo <= raw <= hi else ScalarKind.LONG, raw)
    if isinstance(raw, float):
        if hint is ScalarKind.FLOAT:
            return Scalar(ScalarKind.FLOAT, raw)
        if hint is ScalarKind.STRING:
            return Scalar(ScalarKind.STRING, str(raw))
        return Scalar(ScalarKind.DOUBLE, raw)
    if isinstance(raw, str):
        if hint is ScalarKind.CHAR:
            return Scalar(ScalarKind.CHAR, raw)
        return Scalar(ScalarKind.STRING, raw)
    return Scalar(ScalarKind.OTHER, raw)


def _set_order(item: Any) -> Tuple[str, str]:
    return type(item).__name__, repr(item)


def tag_value(raw: Any, declared: Optional[TypeDescriptor] = None) -> TaggedValue:
    """
    Convert a raw Python value into its tagged form.

    Untagged numbers and strings take their kind from the declared type
    (or the declared element type for containers) when that is a primitive;
    values that are already Scalars keep their tag.
    """
    if raw is None:
        return None
    if isinstance(raw, Scalar):
        return raw
    if isinstance(raw, (list, tuple)):
        elem = element_descriptor(declared)
        return tuple(tag_value(v, elem) for v in raw)
    if isinstance(raw, (set, frozenset)):
        elem = element_descriptor(declared)
        return tuple(tag_value(v, elem) for v in sorted(raw, key=_set_order))
    return _tag_scalar(raw, _scalar_hint(declared))


def flatten(value: TaggedValue) -> List[Scalar]:
    """Ordered non-null leaves of a tagged value."""
    if value is None:
        return []
    if isinstance(value, Scalar):
        return [value]
    out: List[Scalar] = []
    for item in value:
        out.extend(flatten(item))
    return out


def printable(value: TaggedValue) -> str:
    if value is None:
        return "null"
    if isinstance(value, Scalar):
        return str(value)
    return "[" + ", ".join(printable(v) for v in value) + "]"


def value_class_name(value: TaggedValue) -> str:
    if value is None:
        return "null"
    if isinstance(value, Scalar):
        if value.kind is ScalarKind.OTHER:
            return type(value.value).__name__
        return value.kind.value
    return type(value).__name__


__all__ = [
    "ScalarKind",
    "Scalar",
    "TaggedValue",
    "BUILTIN_NAMES",
    "PRIMITIVE_KINDS",
    "INT_RANGES",
    "FLOAT_MAX",
    "FLOAT_MIN",
    "builtin_name",
    "element_descriptor",
    "tag_value",
    "flatten",
    "printable",
    "value_class_name",
]
