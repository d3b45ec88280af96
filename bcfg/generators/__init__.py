from __future__ import annotations

# Public API of generators package:
#  • get_generator: generator instance for a target language
#  • Generator / Declaration: base class and its unit of output
from ..types import Language
from .base import Declaration, Generator
from .registry import get_generator, get_generator_class, list_languages, register_lazy

__all__ = [
    "Declaration",
    "Generator",
    "get_generator",
    "get_generator_class",
    "list_languages",
    "register_lazy",
]

# ---- Lazy registration of built-in generators --------------------
register_lazy(module=".kotlin", class_name="KotlinGenerator", language=Language.KOTLIN)
register_lazy(module=".java", class_name="JavaGenerator", language=Language.JAVA)
