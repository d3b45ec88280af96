"""
Loading of generation requests from YAML files.

Scalar tags (`!long 1`, `!char a`, `!float 1.5`, ...) produce explicitly
tagged literal values; untagged values are tagged from the declared type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor
from ruamel.yaml.error import YAMLError

from ..errors import ConfigError
from ..types import (
    ClassEntry,
    Expression,
    Field,
    GenerationRequest,
    Language,
    TypeDescriptor,
    TypeRegistry,
    Visibility,
    distinct_fields,
)
from ..values import Scalar, ScalarKind
from .typed import ConfigCoerceError, build_typed

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "build/generated/bcfg"


# -------------------- Schema --------------------

@dataclass
class TypeCfg:
    name: str
    array: bool = False
    nullable: bool = False
    args: List[Any] = field(default_factory=list)


@dataclass
class ClassEntryCfg:
    name: str
    container: bool = False


@dataclass
class FieldCfg:
    name: str
    type: Any
    value: Any = None
    expression: Optional[str] = None


@dataclass
class RequestCfg:
    fields: List[Any] = field(default_factory=list)
    package: str = ""
    class_name: str = "BuildConfig"
    language: Language = Language.KOTLIN
    top_level: bool = False
    visibility: Visibility = Visibility.INTERNAL
    documentation: Optional[str] = None
    generated_annotation: bool = False
    output_dir: str = DEFAULT_OUTPUT_DIR
    types: Dict[str, Any] = field(default_factory=dict)


# -------------------- YAML --------------------

def _to_int(text: str) -> int:
    text = text.strip().replace("_", "")
    try:
        return int(text)
    except ValueError:
        return int(text, 0)


_TAGS: Dict[str, tuple[ScalarKind, Callable[[str], Any]]] = {
    "!byte": (ScalarKind.BYTE, _to_int),
    "!short": (ScalarKind.SHORT, _to_int),
    "!int": (ScalarKind.INT, _to_int),
    "!long": (ScalarKind.LONG, _to_int),
    "!float": (ScalarKind.FLOAT, float),
    "!double": (ScalarKind.DOUBLE, float),
    "!char": (ScalarKind.CHAR, str),
    "!string": (ScalarKind.STRING, str),
}


class RequestConstructor(SafeConstructor):
    """Safe constructor that understands the scalar kind tags."""
    pass


def _scalar_constructor(kind: ScalarKind, convert: Callable[[str], Any]):
    def construct(constructor: SafeConstructor, node) -> Scalar:
        raw = constructor.construct_scalar(node)
        try:
            return Scalar(kind, convert(raw))
        except ValueError as e:
            raise ConfigError(f"line {node.start_mark.line + 1}: invalid {kind.value} value {raw!r}") from e
    return construct


for _tag, (_kind, _convert) in _TAGS.items():
    RequestConstructor.add_constructor(_tag, _scalar_constructor(_kind, _convert))


def _make_yaml() -> YAML:
    yaml = YAML(typ="safe", pure=True)
    yaml.Constructor = RequestConstructor
    return yaml


def read_yaml_map(path: Path) -> dict:
    """Read a YAML file that must contain a mapping."""
    if not path.is_file():
        raise ConfigError(f"Request file not found: {path}")
    try:
        raw = _make_yaml().load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


# -------------------- Conversion --------------------

def parse_type(raw: Any, path: tuple[str, ...]) -> TypeDescriptor:
    """Field type from either the shorthand string or the mapping form."""
    if isinstance(raw, str):
        try:
            return TypeDescriptor.parse(raw)
        except ValueError as e:
            raise ConfigCoerceError(str(e), path) from e
    if isinstance(raw, dict):
        cfg = build_typed(TypeCfg, raw, path)
        args = tuple(parse_type(a, (*path, "args", str(i))) for i, a in enumerate(cfg.args))
        return TypeDescriptor(cfg.name, array=cfg.array, nullable=cfg.nullable, type_arguments=args)
    raise ConfigCoerceError(f"expected type string or mapping, got {type(raw).__name__}", path)


def parse_registry(raw: Dict[str, Any]) -> TypeRegistry:
    entries: Dict[str, Union[str, ClassEntry]] = {}
    for name, entry in raw.items():
        path = ("types", str(name))
        if isinstance(entry, str):
            entries[str(name)] = ClassEntry(entry)
        else:
            cfg = build_typed(ClassEntryCfg, entry, path)
            entries[str(name)] = ClassEntry(cfg.name, cfg.container)
    return TypeRegistry.of(entries)


def parse_field(raw: Any, index: int) -> Field:
    path = ("fields", str(index))
    cfg = build_typed(FieldCfg, raw, path)
    desc = parse_type(cfg.type, (*path, "type"))
    if cfg.expression is not None:
        if cfg.value is not None:
            raise ConfigCoerceError("'value' and 'expression' are mutually exclusive", path)
        return Field(cfg.name, desc, Expression(cfg.expression))
    return Field.literal(cfg.name, desc, cfg.value)


def request_from_dict(
        raw: Dict[str, Any],
        *,
        base_dir: Path = Path("."),
        output_dir: Optional[Path] = None,
        language: Optional[Union[Language, str]] = None,
) -> GenerationRequest:
    """
    Build a GenerationRequest from a parsed request mapping.

    Args:
        raw: Parsed YAML mapping
        base_dir: Directory that relative output paths are resolved against
        output_dir: Overrides the output directory of the mapping
        language: Overrides the target language of the mapping
    """
    cfg = build_typed(RequestCfg, raw)
    if language is not None:
        cfg.language = build_typed(RequestCfg, {"language": language}).language

    fields = distinct_fields(parse_field(f, i) for i, f in enumerate(cfg.fields))
    out_dir = output_dir if output_dir is not None else base_dir / cfg.output_dir

    return GenerationRequest(
        output_dir=Path(out_dir),
        fields=fields,
        package_name=cfg.package,
        class_name=cfg.class_name,
        documentation=cfg.documentation,
        top_level=cfg.top_level,
        visibility=cfg.visibility,
        language=cfg.language,
        add_generated_annotation=cfg.generated_annotation,
        types=parse_registry(cfg.types),
    )


def load_request(
        path: Path,
        *,
        output_dir: Optional[Path] = None,
        language: Optional[Union[Language, str]] = None,
) -> GenerationRequest:
    """Load a request file; relative output directories are resolved against its folder."""
    raw = read_yaml_map(path)
    request = request_from_dict(raw, base_dir=path.parent, output_dir=output_dir, language=language)
    logger.debug("Loaded %d fields from %s", len(request.fields), path)
    return request


__all__ = [
    "DEFAULT_OUTPUT_DIR",
    "RequestConstructor",
    "read_yaml_map",
    "parse_type",
    "parse_field",
    "request_from_dict",
    "load_request",
]
