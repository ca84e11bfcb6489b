from __future__ import annotations

import re
from typing import Any

from loguru import logger

from .errors import CoercionFailedError
from .schema import Param
from .types import BOOL_TYPES, ParamType

_TRUE_VALUES = {"1", "t", "true"}
_FALSE_VALUES = {"0", "f", "false"}
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_bool(value: str) -> bool:
    """Parse ``1/t/true`` and ``0/f/false`` (any case); raise ValueError otherwise."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean literal: {value!r}")


def parse_int(value: str) -> int:
    """Parse a base-10 integer with an optional sign; raise ValueError otherwise."""
    if not _INT_PATTERN.fullmatch(value):
        raise ValueError(f"invalid integer literal: {value!r}")
    return int(value, 10)


def coerce(name: str, param: Param, value: Any, *, strict: bool = False) -> Any:
    """Convert a string taken from the environment or command line to the declared kind.

    Only booleans and integers are converted. In lenient mode a bad literal
    becomes ``False`` / ``0``; in strict mode it raises CoercionFailedError.
    """
    if not isinstance(value, str):
        return value
    if param.type in BOOL_TYPES:
        parser, fallback, kind = parse_bool, False, "bool"
    elif param.type == ParamType.INT:
        parser, fallback, kind = parse_int, 0, "int"
    else:
        return value

    try:
        converted = parser(value)
    except ValueError:
        if strict:
            err = CoercionFailedError(name, value, kind)
            logger.error(str(err))
            raise err
        logger.warning(f"Cannot convert {name}={value!r} to {kind}; using {fallback!r}")
        return fallback
    logger.debug(f"----> Converted string to {kind}: {name} = {converted!r}")
    return converted
