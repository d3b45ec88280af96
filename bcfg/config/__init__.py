from __future__ import annotations

from .load import DEFAULT_OUTPUT_DIR, load_request, request_from_dict
from .typed import ConfigCoerceError, build_typed

__all__ = [
    "DEFAULT_OUTPUT_DIR",
    "load_request",
    "request_from_dict",
    "build_typed",
    "ConfigCoerceError",
]
