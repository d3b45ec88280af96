from __future__ import annotations

import dataclasses
import enum
import typing as t
from dataclasses import fields, is_dataclass

from ..errors import ConfigError


class ConfigCoerceError(ConfigError):
    """Config value cannot be coerced to its declared type; carries the field path."""
    def __init__(self, message: str, path: tuple[str, ...] = ()):
        self.path = path
        prefix = f"{'.'.join(path)}: " if path else ""
        super().__init__(prefix + message)


_T = t.TypeVar("_T")


def build_typed(cls: type[_T], data: t.Any, path: tuple[str, ...] = ()) -> _T:
    """
    Build a dataclass instance from a parsed YAML mapping,
    recursively coercing nested structures according to type hints.
    """
    try:
        return t.cast(_T, _coerce_to_class(cls, data, path=path))
    except ConfigCoerceError:
        raise
    except Exception as e:
        raise ConfigCoerceError(f"failed to build {getattr(cls, '__name__', str(cls))}: {e}", path) from e


def _coerce_to_class(cls: type, data: t.Any, path: tuple[str, ...]):
    if is_dataclass(cls):
        if not isinstance(data, dict):
            raise ConfigCoerceError(f"expected mapping for {cls.__name__}, got {type(data).__name__}", path)
        # strict check for unknown keys
        allowed = {f.name for f in fields(cls)}
        extras = set(data.keys()) - allowed
        if extras:
            raise ConfigCoerceError(f"unexpected keys: {sorted(extras)!r}", path)

        hints = t.get_type_hints(cls)
        kwargs = {}
        for f in fields(cls):
            f_path = (*path, f.name)
            if f.name in data:
                kwargs[f.name] = coerce(data[f.name], hints.get(f.name, t.Any), f_path)
            elif f.default is not dataclasses.MISSING:
                kwargs[f.name] = f.default
            elif f.default_factory is not dataclasses.MISSING:  # type: ignore[attr-defined]
                kwargs[f.name] = f.default_factory()  # type: ignore[misc]
            else:
                raise ConfigCoerceError("required field missing", f_path)
        return cls(**kwargs)  # type: ignore[misc]

    if isinstance(data, cls):
        return data
    try:
        return cls(data)
    except Exception:
        raise ConfigCoerceError(f"cannot coerce {type(data).__name__} → {getattr(cls, '__name__', str(cls))}", path)


def coerce(value: t.Any, hint: t.Any, path: tuple[str, ...]) -> t.Any:
    """Recursive normalization according to a type hint."""
    origin = t.get_origin(hint)
    args = t.get_args(hint)

    if hint is t.Any or hint is None:
        return value

    # Optional[T] / Union[…]
    if origin is t.Union:
        if value is None and type(None) in args:
            return None
        last_err: Exception | None = None
        for option in args:
            if option is type(None):
                continue
            try:
                return coerce(value, option, path)
            except Exception as e:
                last_err = e
        raise last_err if last_err else ConfigCoerceError("union alternatives exhausted", path)

    if origin is t.Literal:
        if value not in args:
            raise ConfigCoerceError(f"expected one of {args!r}, got {value!r}", path)
        return value

    if hint is bool:
        if isinstance(value, bool):
            return value
        raise ConfigCoerceError(f"expected bool, got {type(value).__name__}", path)

    if hint in (str, int, float):
        if isinstance(value, hint) and not isinstance(value, bool):
            return value
        if value is None or isinstance(value, (dict, list)):
            raise ConfigCoerceError(f"expected {hint.__name__}, got {type(value).__name__}", path)
        try:
            return hint(value)
        except Exception:
            raise ConfigCoerceError(f"expected {hint.__name__}, got {type(value).__name__}", path)

    if isinstance(hint, type) and issubclass(hint, enum.Enum):
        if isinstance(value, hint):
            return value
        # by value (case-insensitive for strings), then by name
        try:
            return hint(value.lower() if isinstance(value, str) else value)
        except Exception:
            try:
                return hint[value]  # type: ignore[index]
            except Exception:
                choices = ", ".join(str(m.value) for m in hint)
                raise ConfigCoerceError(f"expected one of {choices}, got {value!r}", path)

    if origin is dict:
        k_t, v_t = args or (t.Any, t.Any)
        if not isinstance(value, dict):
            raise ConfigCoerceError(f"expected dict, got {type(value).__name__}", path)
        out = {}
        for k, v in value.items():
            kk = coerce(k, k_t, (*path, "<key>"))
            out[kk] = coerce(v, v_t, (*path, str(kk)))
        return out

    if origin is list:
        (elem_t,) = args or (t.Any,)
        if not isinstance(value, list):
            raise ConfigCoerceError(f"expected list, got {type(value).__name__}", path)
        return [coerce(v, elem_t, (*path, str(i))) for i, v in enumerate(value)]

    if isinstance(hint, type):
        return _coerce_to_class(hint, value, path)

    return value


__all__ = ["build_typed", "coerce", "ConfigCoerceError"]
