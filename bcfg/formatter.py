"""
Literal formatting.

format_value() turns a resolved type and a tagged value into a template
with one placeholder per consumed argument; render() substitutes the
flattened arguments into that template.

Placeholders:
  %L  plain literal (numbers, booleans, raw text)
  %S  quoted and escaped string
  %C  quoted and escaped char
  %%  literal percent sign
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .resolver import (
    ArrayType,
    ClassType,
    ListType,
    OutputType,
    PrimitiveArrayType,
    PrimitiveType,
    SetType,
    StringType,
)
from .values import FLOAT_MAX, FLOAT_MIN, INT_RANGES, Scalar, ScalarKind, TaggedValue

_PLACEHOLDER = re.compile(r"%([%LSC])")

Template = Tuple[str, int]
Brackets = Tuple[str, str]


@dataclass(frozen=True)
class LiteralSyntax:
    """Per-language literal spelling used by the formatter."""
    scalar_rules: Dict[ScalarKind, str]
    null: str
    quote_string: Callable[[str], str]
    quote_char: Callable[[str], str]
    primitive_array: Callable[[PrimitiveArrayType], Brackets]
    generic_array: Callable[[ArrayType], Brackets]
    list_factory: Callable[[ListType], Brackets]
    set_factory: Callable[[SetType], Brackets]
    separator: str = ", "
    #: Spelling of %L arguments; plain_literal() when unset
    plain: Optional[Callable[[Scalar], str]] = None


# ---- Escaping shared by JVM languages ----

_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t", "\b": "\\b"}


def escape_text(text: str, quote: str, *, dollar: bool = False) -> str:
    out = []
    for ch in text:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch == quote:
            out.append("\\" + ch)
        elif dollar and ch == "$":
            out.append("\\$")
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return "".join(out)


def char_of(value: object) -> str:
    text = str(value)
    if len(text) != 1 or ord(text) > 0xFFFF:
        raise ValueError(f"not a single UTF-16 char: {text!r}")
    return text


# ---- Template construction ----

def count_placeholders(template: str) -> int:
    return sum(1 for m in _PLACEHOLDER.finditer(template) if m.group(1) != "%")


def _elements(value: TaggedValue) -> Sequence[TaggedValue]:
    if value is None:
        return ()
    if isinstance(value, Scalar):
        return (value,)
    return value


def _rule(syntax: LiteralSyntax, kind: ScalarKind) -> Template:
    template = syntax.scalar_rules[kind]
    return template, count_placeholders(template)


def _join(syntax: LiteralSyntax, brackets: Brackets, parts: List[Template]) -> Template:
    opening, closing = brackets
    body = syntax.separator.join(p[0] for p in parts)
    return f"{opening}{body}{closing}", sum(p[1] for p in parts)


def _generic_element(syntax: LiteralSyntax, declared: OutputType | None, item: TaggedValue) -> Template:
    if item is None:
        return syntax.null, 0
    if isinstance(item, Scalar):
        return _rule(syntax, item.kind)
    # nested container: the declared element type picks the factory
    if declared is None:
        declared = ListType()
    if isinstance(declared.with_nullable(False), (PrimitiveArrayType, ArrayType, ListType, SetType)):
        return format_value(declared, item, syntax)
    return "%L", 1


def format_value(t: OutputType, value: TaggedValue, syntax: LiteralSyntax) -> Template:
    """Template and argument count for `value` declared as `t`."""
    if value is None:
        return syntax.null, 0

    t = t.with_nullable(False)

    if isinstance(t, PrimitiveArrayType):
        # uniform rule from the declared primitive
        rule = _rule(syntax, t.kind)
        items = _elements(value)
        if any(item is None for item in items):
            raise ValueError("primitive arrays cannot hold null")
        parts = [rule for _ in items]
        return _join(syntax, syntax.primitive_array(t), parts)

    if isinstance(t, ArrayType):
        parts = [_generic_element(syntax, t.element, item) for item in _elements(value)]
        return _join(syntax, syntax.generic_array(t), parts)

    if isinstance(t, ListType):
        parts = [_generic_element(syntax, t.element, item) for item in _elements(value)]
        return _join(syntax, syntax.list_factory(t), parts)

    if isinstance(t, SetType):
        parts = [_generic_element(syntax, t.element, item) for item in _elements(value)]
        return _join(syntax, syntax.set_factory(t), parts)

    if isinstance(t, PrimitiveType):
        return _rule(syntax, t.kind)

    if isinstance(t, StringType):
        return _rule(syntax, ScalarKind.STRING)

    if isinstance(t, ClassType):
        if isinstance(value, Scalar):
            return _rule(syntax, value.kind)
        return "%L", 1

    raise TypeError(f"Unsupported output type: {t!r}")


# ---- Rendering ----

def plain_literal(arg: Scalar) -> str:
    kind = arg.kind
    if kind is ScalarKind.BOOLEAN:
        if not isinstance(arg.value, bool):
            raise ValueError(f"not a boolean: {arg.value!r}")
        return "true" if arg.value else "false"
    if kind in INT_RANGES:
        if isinstance(arg.value, bool) or not isinstance(arg.value, int):
            raise ValueError(f"not an integer: {arg.value!r}")
        lo, hi = INT_RANGES[kind]
        if not lo <= arg.value <= hi:
            raise ValueError(f"{arg.value} out of range for {kind.value}")
        return str(arg.value)
    if kind in (ScalarKind.FLOAT, ScalarKind.DOUBLE):
        number = float(arg.value)
        if not math.isfinite(number):
            raise ValueError(f"non-finite {kind.value} cannot be a literal: {number}")
        if kind is ScalarKind.FLOAT and number != 0 and not FLOAT_MIN <= abs(number) <= FLOAT_MAX:
            raise ValueError(f"{number} out of range for float")
        return repr(number)
    return str(arg.value)


def render(template: str, args: Sequence[Scalar], syntax: LiteralSyntax) -> str:
    """Substitute `args` into `template` in order."""
    remaining = iter(args)
    consumed = 0

    def substitute(m: re.Match) -> str:
        nonlocal consumed
        code = m.group(1)
        if code == "%":
            return "%"
        try:
            arg = next(remaining)
        except StopIteration:
            raise ValueError(f"template {template!r} needs more than {consumed} arguments") from None
        consumed += 1
        if code == "S":
            return syntax.quote_string(str(arg.value))
        if code == "C":
            return syntax.quote_char(char_of(arg.value))
        return (syntax.plain or plain_literal)(arg)

    out = _PLACEHOLDER.sub(substitute, template)
    if consumed != len(args):
        raise ValueError(f"template {template!r} consumed {consumed} of {len(args)} arguments")
    return out


__all__ = [
    "LiteralSyntax",
    "Template",
    "escape_text",
    "char_of",
    "count_placeholders",
    "format_value",
    "plain_literal",
    "render",
]
