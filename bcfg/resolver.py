"""
Type resolution: semantic TypeDescriptor -> dispatch-ready OutputType.

OutputType variants are language independent; the language generators
print them (IntArray vs int[], List<Int> vs java.util.List<Integer>)
and the formatter dispatches on them.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple, TypeVar

from .errors import TypeResolutionError
from .types import TypeDescriptor, TypeRegistry
from .values import PRIMITIVE_KINDS, ScalarKind, builtin_name

T = TypeVar("T", bound="OutputType")


@dataclass(frozen=True)
class OutputType:
    nullable: bool = False

    def with_nullable(self: T, nullable: bool) -> T:
        if self.nullable == nullable:
            return self
        return replace(self, nullable=nullable)

    @property
    def is_container(self) -> bool:
        return False


@dataclass(frozen=True)
class PrimitiveType(OutputType):
    kind: ScalarKind = ScalarKind.INT


@dataclass(frozen=True)
class StringType(OutputType):
    pass


@dataclass(frozen=True)
class PrimitiveArrayType(OutputType):
    kind: ScalarKind = ScalarKind.INT


@dataclass(frozen=True)
class ArrayType(OutputType):
    element: OutputType = StringType()


@dataclass(frozen=True)
class ListType(OutputType):
    element: Optional[OutputType] = None

    @property
    def is_container(self) -> bool:
        return True


@dataclass(frozen=True)
class SetType(OutputType):
    element: Optional[OutputType] = None

    @property
    def is_container(self) -> bool:
        return True


@dataclass(frozen=True)
class ClassType(OutputType):
    qualified_name: str = ""
    arguments: Tuple[OutputType, ...] = ()
    container: bool = False

    @property
    def is_container(self) -> bool:
        return self.container


CONST_KINDS = frozenset(PRIMITIVE_KINDS.values())


def is_const_type(t: OutputType) -> bool:
    """Types that may carry the compile-time constant qualifier. Nullable types never do."""
    if t.nullable:
        return False
    return isinstance(t, StringType) or (isinstance(t, PrimitiveType) and t.kind in CONST_KINDS)


def element_type(t: OutputType) -> Optional[OutputType]:
    """Declared element type of arrays, lists and sets."""
    if isinstance(t, (ArrayType, ListType, SetType)):
        return t.element
    return None


def _base_type(desc: TypeDescriptor, registry: TypeRegistry) -> OutputType:
    name = builtin_name(desc.canonical_name)
    if name in PRIMITIVE_KINDS:
        kind = PRIMITIVE_KINDS[name]
        if desc.array and not desc.nullable:
            return PrimitiveArrayType(kind=kind)
        return PrimitiveType(kind=kind)
    if name == "string":
        return StringType()
    if name == "list":
        return ListType()
    if name == "set":
        return SetType()

    entry = registry.lookup(desc.canonical_name)
    if entry is None:
        raise TypeResolutionError(desc.canonical_name, "not a built-in type and not registered")
    return ClassType(qualified_name=entry.qualified_name, container=entry.container)


def _parameterize(base: OutputType, args: Tuple[OutputType, ...], name: str) -> OutputType:
    if not base.is_container:
        raise TypeResolutionError(name, "type arguments given for a non-container type")
    if isinstance(base, (ListType, SetType)):
        if len(args) != 1:
            raise TypeResolutionError(name, f"expected 1 type argument, got {len(args)}")
        return replace(base, element=args[0])
    return replace(base, arguments=args)


def resolve(desc: TypeDescriptor, registry: Optional[TypeRegistry] = None) -> OutputType:
    registry = registry or TypeRegistry()

    resolved = _base_type(desc, registry)
    if desc.type_arguments:
        args = tuple(resolve(a, registry) for a in desc.type_arguments)
        resolved = _parameterize(resolved, args, desc.canonical_name)
    if desc.nullable:
        resolved = resolved.with_nullable(True)
    if desc.array and not isinstance(resolved, PrimitiveArrayType):
        resolved = ArrayType(element=resolved)
    return resolved


__all__ = [
    "OutputType",
    "PrimitiveType",
    "StringType",
    "PrimitiveArrayType",
    "ArrayType",
    "ListType",
    "SetType",
    "ClassType",
    "CONST_KINDS",
    "is_const_type",
    "element_type",
    "resolve",
]
