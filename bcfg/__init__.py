"""
bcfg: generator of build-config constants for Kotlin and Java sources.
"""

from __future__ import annotations

from pathlib import Path

from .errors import (
    ArgumentCountMismatch,
    BcfgUserError,
    ConfigError,
    FieldGenerationFailure,
    GeneratedSyntaxError,
    OutputWriteError,
    TypeResolutionError,
)
from .generators import get_generator
from .types import (
    ClassEntry,
    Expression,
    Field,
    GenerationRequest,
    Language,
    Literal,
    TypeDescriptor,
    TypeRegistry,
    Visibility,
    distinct_fields,
)
from .values import Scalar, ScalarKind


def render(request: GenerationRequest, *, verify: bool = False) -> str:
    """Generated source for `request`, without writing it."""
    return get_generator(request.language).render(request, verify=verify)


def generate(request: GenerationRequest, *, verify: bool = False) -> Path:
    """Write the source file for `request` and return its path."""
    return get_generator(request.language).generate(request, verify=verify)


__all__ = [
    "render",
    "generate",
    "GenerationRequest",
    "Field",
    "Literal",
    "Expression",
    "TypeDescriptor",
    "TypeRegistry",
    "ClassEntry",
    "Language",
    "Visibility",
    "Scalar",
    "ScalarKind",
    "distinct_fields",
    "BcfgUserError",
    "ConfigError",
    "TypeResolutionError",
    "ArgumentCountMismatch",
    "FieldGenerationFailure",
    "OutputWriteError",
    "GeneratedSyntaxError",
]
