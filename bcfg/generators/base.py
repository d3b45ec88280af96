from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..errors import ArgumentCountMismatch, FieldGenerationFailure, GeneratedSyntaxError
from ..formatter import LiteralSyntax, format_value, render
from ..output import write_source
from ..resolver import OutputType, is_const_type, resolve
from ..types import Expression, Field, GenerationRequest, Language, Literal, TypeRegistry
from ..values import flatten, printable, value_class_name

__all__ = ["Declaration", "Generator"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Declaration:
    """One emitted constant, ready to be laid out by the assembler."""
    name: str
    type: OutputType
    initializer: str
    constant: bool = False


class Generator(ABC):
    """Base class of a target-language generator."""
    #: Target language
    language: Language
    #: Source file extension, with the dot
    extension: str = ""
    #: Indentation unit of generated code
    indent: str = "  "

    def __init__(self) -> None:
        self.syntax = self.create_literal_syntax()

    # --- Language hooks -----------------------------

    @abstractmethod
    def create_literal_syntax(self) -> LiteralSyntax:
        """Literal spelling of this language."""
        pass

    @abstractmethod
    def type_name(self, t: OutputType) -> str:
        """Printable type as it appears in a declaration."""
        pass

    @abstractmethod
    def identifier(self, name: str) -> str:
        """
        Source spelling of a declared name.
        Raises ValueError when the name cannot be written in this language.
        """
        pass

    @abstractmethod
    def assemble(self, request: GenerationRequest, declarations: List[Declaration]) -> str:
        """Full compilation unit text for the given declarations."""
        pass

    # --- Field emitter -----------------------------

    def emit_field(self, field: Field, registry: Optional[TypeRegistry] = None) -> Declaration:
        value = field.value
        try:
            name = self.identifier(field.name)
            resolved = resolve(field.type, registry)

            is_null = isinstance(value, Literal) and value.value is None
            constant = isinstance(value, Literal) and not is_null and is_const_type(resolved)
            if is_null:
                resolved = resolved.with_nullable(True)

            if isinstance(value, Literal):
                template, count = format_value(resolved, value.value, self.syntax)
                args = flatten(value.value)
                if count != len(args):
                    raise ArgumentCountMismatch(field.name, self.type_name(resolved), count, len(args))
                initializer = render(template, args, self.syntax)
            else:
                initializer = value.code

            return Declaration(name, resolved, initializer, constant)
        except Exception as e:
            if isinstance(value, Expression):
                shown, shown_type = value.code, "Expression"
            else:
                shown, shown_type = printable(value.value), value_class_name(value.value)
            raise FieldGenerationFailure(field.name, str(field.type), shown, shown_type) from e

    def emit_fields(self, request: GenerationRequest) -> List[Declaration]:
        return [self.emit_field(f, request.types) for f in request.fields]

    # --- Output assembler -----------------------------

    def output_path(self, request: GenerationRequest) -> Path:
        base = Path(request.output_dir)
        if request.package_name:
            base = base.joinpath(*request.package_name.split("."))
        return base / f"{request.class_name}{self.extension}"

    def render(self, request: GenerationRequest, *, verify: bool = False) -> str:
        """Generated source text; nothing is written."""
        logger.debug("Generating %s for fields %s", request.class_name, [f.name for f in request.fields])
        text = self.assemble(request, self.emit_fields(request))
        if verify:
            from ..syntax import check_source
            errors = check_source(text, self.language)
            if errors:
                raise GeneratedSyntaxError(str(self.output_path(request)), errors)
        return text

    def generate(self, request: GenerationRequest, *, verify: bool = False) -> Path:
        """Render the request completely in memory, then write exactly one file."""
        text = self.render(request, verify=verify)
        path = self.output_path(request)
        write_source(path, text)
        logger.info("Generated %s (%d fields)", path, len(request.fields))
        return path

    # --- Shared layout helpers -----------------------------

    @staticmethod
    def doc_comment(text: str, indent: str = "") -> List[str]:
        lines = text.replace("*/", "*&#47;").splitlines() or [""]
        out = [f"{indent}/**"]
        out.extend(f"{indent} * {ln}".rstrip() for ln in lines)
        out.append(f"{indent} */")
        return out
