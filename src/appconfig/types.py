from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict


class ParamType(IntEnum):
    """Declared kind of a parameter; drives zero values and string conversion."""

    STRING = 0
    INT = 1
    BOOL = 2
    OBJECT = 3
    CONFIG_JSON = 4  # path of the JSON configuration file
    CONFIG_NODE = 5  # top-level key selecting the effective scope of the file
    USAGE = 6  # e.g. -h / --help; short-circuits resolution when true
    READ_ENV = 7  # false disables environment lookup
    CONFIG_STDIN = 8  # true reads a JSON document from standard input


ZERO_VALUES: Dict[ParamType, Any] = {
    ParamType.STRING: "",
    ParamType.CONFIG_JSON: "",
    ParamType.CONFIG_NODE: "",
    ParamType.INT: 0,
    ParamType.BOOL: False,
    ParamType.USAGE: False,
    ParamType.READ_ENV: False,
    ParamType.CONFIG_STDIN: False,
    ParamType.OBJECT: None,
}

# Kinds that control resolution itself; only the first declared one is honored.
SPECIAL_TYPES = (
    ParamType.CONFIG_JSON,
    ParamType.CONFIG_NODE,
    ParamType.USAGE,
    ParamType.READ_ENV,
    ParamType.CONFIG_STDIN,
)

BOOL_TYPES = (
    ParamType.BOOL,
    ParamType.USAGE,
    ParamType.READ_ENV,
    ParamType.CONFIG_STDIN,
)
