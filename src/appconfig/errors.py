from __future__ import annotations

from typing import Any


class ConfigError(ValueError):
    """Base class for every failure that aborts a resolution pass."""


class UnrecognizedSwitchError(ConfigError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"'{token}' is not a supported flag.")


class DocumentUnreadableError(ConfigError):
    def __init__(self, source: str, reason: str = ""):
        self.source = source
        detail = f": {reason}" if reason else ""
        super().__init__(f"Unable to read configuration document '{source}'{detail}")


class DocumentMalformedError(ConfigError):
    def __init__(self, source: str, reason: str = ""):
        self.source = source
        detail = f": {reason}" if reason else ""
        super().__init__(f"Malformed JSON in configuration document '{source}'{detail}")


class RootNodeMissingError(ConfigError):
    def __init__(self, node: str, source: str):
        self.node = node
        self.source = source
        super().__init__(f"Node '{node}' not found in JSON file '{source}'.")


class MissingRequiredParameterError(ConfigError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing required parameter '{name}'.")


class ValidationFailedError(ConfigError):
    def __init__(self, name: str, value: Any):
        self.name = name
        self.value = value
        super().__init__(f"Validation failed for parameter '{name}': {value!r}")


class CoercionFailedError(ConfigError):
    def __init__(self, name: str, value: str, kind: str):
        self.name = name
        self.value = value
        self.kind = kind
        super().__init__(f"Cannot convert parameter '{name}' value {value!r} to {kind}.")
