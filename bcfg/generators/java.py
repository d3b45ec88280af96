"""
Java generator: `static final` fields of a non-instantiable final class.
"""

from __future__ import annotations

import logging
import re
from typing import List

from ..formatter import LiteralSyntax, escape_text
from ..resolver import (
    ArrayType,
    ClassType,
    ListType,
    OutputType,
    PrimitiveArrayType,
    PrimitiveType,
    SetType,
    StringType,
)
from ..types import GenerationRequest, Language, Visibility
from ..values import ScalarKind
from .base import Declaration, Generator

logger = logging.getLogger(__name__)

GENERATED_ANNOTATION = '@javax.annotation.processing.Generated("bcfg")'

JAVA_KEYWORDS = frozenset({
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while", "_",
    "true", "false", "null",
})

_JAVA_NAME = re.compile(r"^(?:[^\W\d]|\$)[\w$]*$")

BOXED_NAMES = {
    ScalarKind.BOOLEAN: "Boolean",
    ScalarKind.BYTE: "Byte",
    ScalarKind.SHORT: "Short",
    ScalarKind.CHAR: "Character",
    ScalarKind.INT: "Integer",
    ScalarKind.LONG: "Long",
    ScalarKind.FLOAT: "Float",
    ScalarKind.DOUBLE: "Double",
}

JAVA_SCALAR_RULES = {
    ScalarKind.BOOLEAN: "%L",
    ScalarKind.BYTE: "(byte) %L",
    ScalarKind.SHORT: "(short) %L",
    ScalarKind.CHAR: "%C",
    ScalarKind.INT: "%L",
    ScalarKind.LONG: "%LL",
    ScalarKind.FLOAT: "%Lf",
    ScalarKind.DOUBLE: "%L",
    ScalarKind.STRING: "%S",
    ScalarKind.OTHER: "%L",
}


def _quote_string(text: str) -> str:
    return '"' + escape_text(text, '"') + '"'


def _quote_char(ch: str) -> str:
    return "'" + escape_text(ch, "'") + "'"


def java_identifier(name: str) -> str:
    """`name` unchanged; Java has no quoted identifiers, so keywords and other names are rejected."""
    if name in JAVA_KEYWORDS:
        raise ValueError(f"'{name}' is a reserved Java keyword")
    if not _JAVA_NAME.match(name):
        raise ValueError(f"'{name}' is not a valid Java identifier")
    return name


def java_type(t: OutputType, *, boxed: bool = False) -> str:
    """Java spelling of `t`; primitives are boxed when nullable or used as type arguments."""
    if isinstance(t, PrimitiveType):
        if boxed or t.nullable:
            return BOXED_NAMES[t.kind]
        return t.kind.value
    if isinstance(t, StringType):
        return "String"
    if isinstance(t, PrimitiveArrayType):
        return f"{t.kind.value}[]"
    if isinstance(t, ArrayType):
        return java_type(t.element, boxed=True) + "[]"
    if isinstance(t, (ListType, SetType)):
        raw = "java.util.List" if isinstance(t, ListType) else "java.util.Set"
        arg = java_type(t.element, boxed=True) if t.element is not None else "?"
        return f"{raw}<{arg}>"
    if isinstance(t, ClassType):
        if t.arguments:
            args = ", ".join(java_type(a, boxed=True) for a in t.arguments)
            return f"{t.qualified_name}<{args}>"
        return t.qualified_name
    raise TypeError(f"Unsupported output type: {t!r}")


def erasure(t: OutputType) -> str:
    """Raw type usable in an array creation expression."""
    if isinstance(t, (ListType, SetType, ClassType)):
        return java_type(t).split("<", 1)[0]
    if isinstance(t, ArrayType):
        return erasure(t.element) + "[]"
    return java_type(t, boxed=True) if isinstance(t, PrimitiveType) else java_type(t)


def create_java_syntax() -> LiteralSyntax:
    return LiteralSyntax(
        scalar_rules=JAVA_SCALAR_RULES,
        null="null",
        quote_string=_quote_string,
        quote_char=_quote_char,
        primitive_array=lambda t: (f"new {t.kind.value}[] {{", "}"),
        generic_array=lambda t: (f"new {erasure(t.element)}[] {{", "}"),
        list_factory=lambda t: ("java.util.Arrays.asList(", ")"),
        set_factory=lambda t: ("new java.util.LinkedHashSet<>(java.util.Arrays.asList(", "))"),
    )


class JavaGenerator(Generator):

    language = Language.JAVA
    extension = ".java"

    def create_literal_syntax(self) -> LiteralSyntax:
        return create_java_syntax()

    def type_name(self, t: OutputType) -> str:
        return java_type(t)

    def identifier(self, name: str) -> str:
        return java_identifier(name)

    @staticmethod
    def _modifier(visibility: Visibility) -> str:
        return "public " if visibility is Visibility.PUBLIC else ""

    def declaration(self, d: Declaration, visibility: Visibility) -> str:
        return f"{self._modifier(visibility)}static final {self.type_name(d.type)} {d.name} = {d.initializer};"

    def assemble(self, request: GenerationRequest, declarations: List[Declaration]) -> str:
        if request.top_level:
            logger.warning(
                "Java has no top-level fields; generating class %s instead", request.class_name
            )

        class_name = java_identifier(request.class_name)
        lines: List[str] = []
        if request.package_name:
            package = ".".join(java_identifier(p) for p in request.package_name.split("."))
            lines.append(f"package {package};")
            lines.append("")

        if request.documentation is not None:
            lines.extend(self.doc_comment(request.documentation))
        if request.add_generated_annotation:
            lines.append(GENERATED_ANNOTATION)
        lines.append(f"{self._modifier(request.visibility)}final class {class_name} {{")
        for d in declarations:
            lines.append(self.indent + self.declaration(d, request.visibility))
        if declarations:
            lines.append("")
        lines.append(f"{self.indent}private {class_name}() {{")
        lines.append(f"{self.indent}}}")
        lines.append("}")

        return "\n".join(lines) + "\n"


__all__ = ["JavaGenerator", "create_java_syntax", "java_identifier", "java_type", "erasure"]
