"""
Kotlin generator: properties inside an `object`, or top-level properties.
"""

from __future__ import annotations

import re
from typing import List

from ..formatter import LiteralSyntax, escape_text, plain_literal
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
from ..types import GenerationRequest, Language
from ..values import INT_RANGES, Scalar, ScalarKind
from .base import Declaration, Generator

KOTLIN_NAMES = {
    ScalarKind.BOOLEAN: "Boolean",
    ScalarKind.BYTE: "Byte",
    ScalarKind.SHORT: "Short",
    ScalarKind.CHAR: "Char",
    ScalarKind.INT: "Int",
    ScalarKind.LONG: "Long",
    ScalarKind.FLOAT: "Float",
    ScalarKind.DOUBLE: "Double",
}

KOTLIN_SCALAR_RULES = {
    ScalarKind.BOOLEAN: "%L",
    ScalarKind.BYTE: "%L",
    ScalarKind.SHORT: "%L",
    ScalarKind.CHAR: "%C",
    ScalarKind.INT: "%L",
    ScalarKind.LONG: "%LL",
    ScalarKind.FLOAT: "%Lf",
    ScalarKind.DOUBLE: "%L",
    ScalarKind.STRING: "%S",
    ScalarKind.OTHER: "%L",
}


KOTLIN_KEYWORDS = frozenset({
    "as", "break", "class", "continue", "do", "else", "false", "for", "fun",
    "if", "in", "interface", "is", "null", "object", "package", "return",
    "super", "this", "throw", "true", "try", "typealias", "typeof", "val",
    "var", "when", "while",
})

_PLAIN_NAME = re.compile(r"^[^\W\d]\w*$")
# not allowed inside backticks on the JVM
_FORBIDDEN_IN_BACKTICKS = set(".;[]/<>:\\`\r\n")

# the positive literal 9223372036854775808 does not exist
LONG_MIN_TEXT = "-9223372036854775807L - 1"


def kotlin_identifier(name: str) -> str:
    """`name` as a Kotlin identifier, backtick-quoted when it is a keyword or not a plain name."""
    if _PLAIN_NAME.match(name) and name not in KOTLIN_KEYWORDS:
        return name
    if not name or name.strip() != name or any(ch in _FORBIDDEN_IN_BACKTICKS for ch in name):
        raise ValueError(f"'{name}' cannot be used as a Kotlin name")
    return f"`{name}`"


def _plain(arg: Scalar) -> str:
    if arg.kind is ScalarKind.LONG and arg.value == INT_RANGES[ScalarKind.LONG][0]:
        # followed by the L suffix of the long rule
        return LONG_MIN_TEXT
    return plain_literal(arg)


def _quote_string(text: str) -> str:
    return '"' + escape_text(text, '"', dollar=True) + '"'


def _quote_char(ch: str) -> str:
    return "'" + escape_text(ch, "'") + "'"


def create_kotlin_syntax() -> LiteralSyntax:
    return LiteralSyntax(
        scalar_rules=KOTLIN_SCALAR_RULES,
        null="null",
        quote_string=_quote_string,
        quote_char=_quote_char,
        primitive_array=lambda t: (f"{t.kind.value}ArrayOf(", ")"),
        generic_array=lambda t: ("arrayOf(", ")"),
        list_factory=lambda t: ("listOf(", ")"),
        set_factory=lambda t: ("setOf(", ")"),
        plain=_plain,
    )


class KotlinGenerator(Generator):

    language = Language.KOTLIN
    extension = ".kt"

    def create_literal_syntax(self) -> LiteralSyntax:
        return create_kotlin_syntax()

    def type_name(self, t: OutputType) -> str:
        if isinstance(t, PrimitiveType):
            name = KOTLIN_NAMES[t.kind]
        elif isinstance(t, StringType):
            name = "String"
        elif isinstance(t, PrimitiveArrayType):
            name = KOTLIN_NAMES[t.kind] + "Array"
        elif isinstance(t, ArrayType):
            name = f"Array<{self.type_name(t.element)}>"
        elif isinstance(t, (ListType, SetType)):
            raw = "List" if isinstance(t, ListType) else "Set"
            arg = self.type_name(t.element) if t.element is not None else "*"
            name = f"{raw}<{arg}>"
        elif isinstance(t, ClassType):
            name = t.qualified_name
            if t.arguments:
                name += "<" + ", ".join(self.type_name(a) for a in t.arguments) + ">"
        else:
            raise TypeError(f"Unsupported output type: {t!r}")
        return name + "?" if t.nullable else name

    def identifier(self, name: str) -> str:
        return kotlin_identifier(name)

    def declaration(self, d: Declaration, visibility: str) -> str:
        const = "const " if d.constant else ""
        return f"{visibility} {const}val {d.name}: {self.type_name(d.type)} = {d.initializer}"

    def assemble(self, request: GenerationRequest, declarations: List[Declaration]) -> str:
        visibility = request.visibility.value
        class_name = kotlin_identifier(request.class_name)
        lines: List[str] = []

        if request.top_level and request.documentation is not None:
            lines.extend(f"// {ln}".rstrip() for ln in request.documentation.splitlines())
            lines.append("")

        if request.package_name:
            lines.append("package " + ".".join(kotlin_identifier(p) for p in request.package_name.split(".")))
            lines.append("")

        if request.top_level:
            for i, d in enumerate(declarations):
                if i:
                    lines.append("")
                lines.append(self.declaration(d, visibility))
        else:
            if request.documentation is not None:
                lines.extend(self.doc_comment(request.documentation))
            if declarations:
                lines.append(f"{visibility} object {class_name} {{")
                lines.extend(self.indent + self.declaration(d, visibility) for d in declarations)
                lines.append("}")
            else:
                lines.append(f"{visibility} object {class_name}")

        return "\n".join(lines) + "\n"


__all__ = ["KotlinGenerator", "create_kotlin_syntax", "kotlin_identifier"]
