"""
Exceptions raised while generating build-config sources.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from BcfgUserError.

Programming errors and bugs should NOT inherit from BcfgUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


class BcfgUserError(Exception):
    """
    Base class for all user-facing errors.

    These errors indicate problems that the user can fix:
    unknown types, malformed values, unwritable output directories, etc.
    """
    pass


class ConfigError(BcfgUserError):
    """Invalid request file or request options."""
    pass


class TypeResolutionError(BcfgUserError):
    """Unknown type name or a type argument applied to a non-container type."""
    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Cannot resolve type '{name}': {reason}")


@dataclass
class ArgumentCountMismatch(BcfgUserError):
    """The literal template and the flattened value disagree on the number of arguments."""
    field_name: str
    type_name: str
    expected: int
    actual: int

    def __str__(self) -> str:
        return (
            f"Invalid number of arguments for {self.field_name} of type {self.type_name}: "
            f"expected {self.expected}, got {self.actual}"
        )


@dataclass
class FieldGenerationFailure(BcfgUserError):
    """
    Single diagnostic envelope for anything that went wrong while emitting one field.
    The original exception is available through __cause__.
    """
    field_name: str
    declared_type: str
    value: str
    value_type: str

    def __str__(self) -> str:
        msg = (
            f"Failed to generate field '{self.field_name}' of type '{self.declared_type}', "
            f"with value: {self.value} (of type '{self.value_type}')"
        )
        if self.__cause__ is not None:
            msg += f": {self.__cause__}"
        return msg


class OutputWriteError(BcfgUserError):
    """Output directory could not be created or the file could not be written."""
    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Cannot write {path}: {reason}")


@dataclass
class GeneratedSyntaxError(BcfgUserError):
    """Generated source does not parse in the target language."""
    path: str
    errors: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"Generated source {self.path} has syntax errors: {'; '.join(self.errors)}"


__all__ = [
    "BcfgUserError",
    "ConfigError",
    "TypeResolutionError",
    "ArgumentCountMismatch",
    "FieldGenerationFailure",
    "OutputWriteError",
    "GeneratedSyntaxError",
]
