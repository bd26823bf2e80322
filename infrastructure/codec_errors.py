# infrastructure/codec_errors.py
from __future__ import annotations

from typing import Any, Mapping, Tuple, Type, Union


class DecodeError(ValueError):
    pass


class RuleDecodeError(DecodeError):
    pass


_MISSING = object()


def require_mapping(data: Any, where: str, error: Type[DecodeError] = DecodeError) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise error(f"{where} must be an object, got {type(data).__name__}")
    return data


def require_field(
    data: Mapping[str, Any],
    key: str,
    types: Union[type, Tuple[type, ...]],
    where: str,
    error: Type[DecodeError] = DecodeError,
    optional: bool = False,
) -> Any:
    value = data.get(key, _MISSING)
    if value is _MISSING or value is None:
        if optional:
            return None
        raise error(f"{where}: missing required field '{key}'")
    # bool is an int subclass; never accept it where a number is expected
    if isinstance(value, bool) and bool not in (types if isinstance(types, tuple) else (types,)):
        raise error(f"{where}: field '{key}' has invalid type bool")
    if not isinstance(value, types):
        raise error(f"{where}: field '{key}' has invalid type {type(value).__name__}")
    return value
