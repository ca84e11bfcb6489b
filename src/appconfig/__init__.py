"""Layered application configuration: defaults, JSON file, environment, command line."""

from .types import ParamType, ZERO_VALUES, SPECIAL_TYPES  # noqa: F401
from .schema import Param, validate_catalog  # noqa: F401
from .errors import (  # noqa: F401
    ConfigError,
    CoercionFailedError,
    DocumentMalformedError,
    DocumentUnreadableError,
    MissingRequiredParameterError,
    RootNodeMissingError,
    UnrecognizedSwitchError,
    ValidationFailedError,
)
from .freeze import AppConfig, FrozenMapping  # noqa: F401
from .loader import load_config  # noqa: F401
from .printer import catalog_to_json, format_usage  # noqa: F401

__version__ = "0.3.0"
