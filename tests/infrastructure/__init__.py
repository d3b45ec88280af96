"""
Unified test infrastructure for bcfg.

This package contains common utilities and helpers
used across all tests to avoid code duplication.

Modules:
- file_utils: Utilities for creating files and directories
- cli_utils: Running the CLI in a subprocess
- request_builders: Short constructors of fields and requests
- literal_utils: Reading generated Kotlin/Java literals back into Python values
"""

from .file_utils import write, write_request
from .cli_utils import run_cli
from .request_builders import make_request, kotlin_request, java_request
from .literal_utils import parse_kotlin_literal, parse_java_literal

__all__ = [
    "write",
    "write_request",
    "run_cli",
    "make_request",
    "kotlin_request",
    "java_request",
    "parse_kotlin_literal",
    "parse_java_literal",
]
