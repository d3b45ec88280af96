from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .values import TaggedValue, tag_value


class Language(str, Enum):
    KOTLIN = "kotlin"
    JAVA = "java"


class Visibility(str, Enum):
    INTERNAL = "internal"
    PUBLIC = "public"


# ---- Type descriptors ----

@dataclass(frozen=True)
class TypeDescriptor:
    """
    Semantic description of a declared field type.

    canonical_name is matched case-insensitively against the built-in
    table or looked up in the TypeRegistry of the request.
    """
    canonical_name: str
    array: bool = False
    nullable: bool = False
    type_arguments: Tuple[TypeDescriptor, ...] = ()

    @staticmethod
    def parse(text: str) -> TypeDescriptor:
        """
        Parse the shorthand notation: `String`, `Int?`, `int[]`, `Long?[]`,
        `List<Set<String>>?`.
        """
        parser = _TypeParser(text)
        desc = parser.parse_type()
        parser.expect_end()
        return desc

    def __str__(self) -> str:
        out = self.canonical_name
        if self.type_arguments:
            out += "<" + ", ".join(str(a) for a in self.type_arguments) + ">"
        if self.nullable:
            out += "?"
        if self.array:
            out += "[]"
        return out


class _TypeParser:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def _skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _peek(self) -> str:
        self._skip_ws()
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _error(self, msg: str) -> ValueError:
        return ValueError(f"Invalid type '{self.text}' at {self.pos}: {msg}")

    def parse_type(self) -> TypeDescriptor:
        self._skip_ws()
        start = self.pos
        while self.pos < len(self.text) and (self.text[self.pos].isalnum() or self.text[self.pos] in "_.$"):
            self.pos += 1
        name = self.text[start:self.pos]
        if not name:
            raise self._error("expected type name")

        args: List[TypeDescriptor] = []
        if self._peek() == "<":
            self.pos += 1
            args.append(self.parse_type())
            while self._peek() == ",":
                self.pos += 1
                args.append(self.parse_type())
            if self._peek() != ">":
                raise self._error("expected '>'")
            self.pos += 1

        nullable = array = False
        while True:
            ch = self._peek()
            if ch == "?" and not nullable and not array:
                nullable = True
                self.pos += 1
            elif ch == "[" and not array:
                self.pos += 1
                if self._peek() != "]":
                    raise self._error("expected ']'")
                self.pos += 1
                array = True
            else:
                break

        return TypeDescriptor(name, array=array, nullable=nullable, type_arguments=tuple(args))

    def expect_end(self) -> None:
        if self._peek():
            raise self._error(f"unexpected {self._peek()!r}")


TypeLike = Union[TypeDescriptor, str]


def as_descriptor(t: TypeLike) -> TypeDescriptor:
    return t if isinstance(t, TypeDescriptor) else TypeDescriptor.parse(t)


# ---- Custom type registry ----

@dataclass(frozen=True)
class ClassEntry:
    qualified_name: str
    container: bool = False


@dataclass(frozen=True)
class TypeRegistry:
    """
    Caller-supplied mapping for every non built-in type name.
    Lookups are exact first, then case-insensitive.
    """
    entries: Tuple[Tuple[str, ClassEntry], ...] = ()

    @staticmethod
    def of(mapping: Optional[Dict[str, Union[str, ClassEntry]]] = None) -> TypeRegistry:
        items = []
        for name, entry in (mapping or {}).items():
            if isinstance(entry, str):
                entry = ClassEntry(entry)
            items.append((name, entry))
        return TypeRegistry(tuple(items))

    def register(self, name: str, qualified_name: str, *, container: bool = False) -> TypeRegistry:
        return TypeRegistry(self.entries + ((name, ClassEntry(qualified_name, container)),))

    def lookup(self, name: str) -> Optional[ClassEntry]:
        for key, entry in reversed(self.entries):
            if key == name:
                return entry
        lowered = name.lower()
        for key, entry in reversed(self.entries):
            if key.lower() == lowered:
                return entry
        return None

    def names(self) -> List[str]:
        return [key for key, _ in self.entries]


# ---- Field values ----

@dataclass(frozen=True)
class Literal:
    value: TaggedValue

    @staticmethod
    def of(raw: Any, declared: Optional[TypeDescriptor] = None) -> Literal:
        return Literal(tag_value(raw, declared))


@dataclass(frozen=True)
class Expression:
    code: str


FieldValue = Union[Literal, Expression]


@dataclass(frozen=True)
class Field:
    name: str
    type: TypeDescriptor
    value: FieldValue

    @staticmethod
    def literal(name: str, type: TypeLike, value: Any) -> Field:
        desc = as_descriptor(type)
        return Field(name, desc, Literal.of(value, desc))

    @staticmethod
    def expression(name: str, type: TypeLike, code: str) -> Field:
        return Field(name, as_descriptor(type), Expression(code))


def distinct_fields(fields: Iterable[Field]) -> Tuple[Field, ...]:
    """
    Drop duplicate names: each name keeps the position of its first
    occurrence and the value of its last one.
    """
    by_name: Dict[str, Field] = {}
    for f in fields:
        by_name[f.name] = f
    return tuple(by_name.values())


# ---- Request ----

@dataclass(frozen=True)
class GenerationRequest:
    output_dir: Path
    fields: Tuple[Field, ...] = ()
    package_name: str = ""
    class_name: str = "BuildConfig"
    documentation: Optional[str] = None
    top_level: bool = False
    visibility: Visibility = Visibility.INTERNAL
    language: Language = Language.KOTLIN
    add_generated_annotation: bool = False
    types: TypeRegistry = field(default_factory=TypeRegistry)

    @staticmethod
    def create(output_dir: Union[str, Path], fields: Iterable[Field], **kwargs: Any) -> GenerationRequest:
        """Build a request with de-duplicated fields."""
        return GenerationRequest(output_dir=Path(output_dir), fields=distinct_fields(fields), **kwargs)

    @property
    def is_empty(self) -> bool:
        return not self.fields


__all__ = [
    "Language",
    "Visibility",
    "TypeDescriptor",
    "TypeLike",
    "as_descriptor",
    "ClassEntry",
    "TypeRegistry",
    "Literal",
    "Expression",
    "FieldValue",
    "Field",
    "distinct_fields",
    "GenerationRequest",
]
