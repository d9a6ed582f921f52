"""Field checks shared by the ``from_serialized`` readers."""

from numbers import Real
from typing import Any, List, Mapping, Optional

from voxworld.core.errors import ParseError


def join_path(path: Optional[str], key) -> str:
    """Extend a location path with a field name or list index."""
    if isinstance(key, int):
        return f"{path or ''}[{key}]"
    return f"{path}.{key}" if path else key


def expect_mapping(data: Any, path: Optional[str] = None) -> Mapping:
    if not isinstance(data, Mapping):
        raise ParseError(f"expected an object, got {type(data).__name__}", path)
    return data


def expect_list(data: Any, path: Optional[str] = None) -> List:
    if not isinstance(data, (list, tuple)):
        raise ParseError(f"expected a list, got {type(data).__name__}", path)
    return list(data)


def expect_number(data: Any, path: Optional[str] = None):
    # bool is an int subclass but never a valid channel or id
    if isinstance(data, bool) or not isinstance(data, Real):
        raise ParseError(f"expected a number, got {type(data).__name__}", path)
    return data


def expect_int(data: Any, path: Optional[str] = None) -> int:
    if isinstance(data, bool) or not isinstance(data, int):
        raise ParseError(f"expected an integer, got {type(data).__name__}", path)
    return data


def optional_str(data: Mapping, key: str, path: Optional[str] = None) -> str:
    """Read an optional string field, defaulting to ``''``."""
    value = data.get(key, '')
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ParseError(f"expected a string, got {type(value).__name__}",
                         join_path(path, key))
    return value


def required(data: Mapping, key: str, path: Optional[str] = None) -> Any:
    if key not in data:
        raise ParseError(f"missing required field '{key}'", path)
    return data[key]
