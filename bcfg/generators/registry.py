from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Dict, List, Type

from ..types import Language
from .base import Generator

__all__ = [
    "register_lazy",
    "get_generator_class",
    "get_generator",
    "list_languages",
]


@dataclass(frozen=True)
class _LazySpec:
    module: str
    class_name: str


# Lazy specs: language -> where the generator class lives
_LAZY_BY_LANGUAGE: Dict[Language, _LazySpec] = {}

# Resolved classes by language
_CLASS_BY_LANGUAGE: Dict[Language, Type[Generator]] = {}


def register_lazy(*, module: str, class_name: str, language: Language) -> None:
    """
    Register a generator by module/class strings without importing the module.
    The module is imported on the first request for its language.
    """
    _LAZY_BY_LANGUAGE[language] = _LazySpec(module=module, class_name=class_name)
    _CLASS_BY_LANGUAGE.pop(language, None)


def _load_generator_from_spec(spec: _LazySpec) -> Type[Generator]:
    # Both relative (".kotlin") and absolute module names are supported.
    mod = importlib.import_module(spec.module, package=__package__)
    cls = getattr(mod, spec.class_name, None)
    if cls is None:
        raise RuntimeError(f"Generator class '{spec.class_name}' not found in {spec.module}")
    if not issubclass(cls, Generator):
        raise TypeError(f"{spec.module}.{spec.class_name} is not a subclass of Generator")
    _CLASS_BY_LANGUAGE[cls.language] = cls
    return cls


def get_generator_class(language: Language | str) -> Type[Generator]:
    """Return the generator CLASS for a language. Nothing is instantiated."""
    if not isinstance(language, Language):
        language = Language(language.lower())
    cls = _CLASS_BY_LANGUAGE.get(language)
    if cls:
        return cls
    spec = _LAZY_BY_LANGUAGE.get(language)
    if spec is None:
        raise ValueError(f"No generator registered for language '{language.value}'")
    return _load_generator_from_spec(spec)


def get_generator(language: Language | str) -> Generator:
    return get_generator_class(language)()


def list_languages() -> List[str]:
    return sorted(lang.value for lang in _LAZY_BY_LANGUAGE)
