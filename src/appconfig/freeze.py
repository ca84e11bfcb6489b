from __future__ import annotations

import sys
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, List, Optional

from .printer import format_usage
from .schema import Param, keys_by_type
from .types import ParamType


class FrozenMapping(Mapping[str, Any]):
    """Read-only view over a JSON object value."""

    def __init__(self, data: Mapping[str, Any]):
        self._data = {key: _freeze(value) for key, value in data.items()}

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self):
        return iter(self._data)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._data)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"FrozenMapping({self._data!r})"


class AppConfig(Mapping[str, Any]):
    """Immutable result of one resolution pass.

    Maps parameter names to their resolved values and keeps a reference to
    the catalog so that switches and usage text can be reconstructed.
    """

    def __init__(self, values: Mapping[str, Any], params: Mapping[str, Param], *, usage_requested: bool = False):
        self._data = {key: _freeze(value) for key, value in values.items()}
        self._params = MappingProxyType(dict(params))
        self._usage_requested = usage_requested

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self):
        return iter(self._data)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._data)

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"AppConfig({self._data!r})"

    @property
    def params(self) -> Mapping[str, Param]:
        return self._params

    @property
    def usage_requested(self) -> bool:
        """True when a usage flag short-circuited resolution."""
        return self._usage_requested

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def get_string(self, key: str) -> str:
        value = self._data.get(key)
        return value if isinstance(value, str) else ""

    def get_int(self, key: str) -> int:
        value = self._data.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return 0

    def get_bool(self, key: str) -> bool:
        value = self._data.get(key)
        return value if isinstance(value, bool) else False

    def get_object(self, key: str) -> Optional[FrozenMapping]:
        value = self._data.get(key)
        return value if isinstance(value, FrozenMapping) else None

    def keys_by_type(self, param_type: ParamType) -> List[str]:
        return keys_by_type(self._params, param_type)

    def key_with_prefix(self, key: str) -> str:
        """Command-line spelling of ``key``, e.g. ``--debug``.

        Raises KeyError when ``key`` is not declared in the catalog.
        """
        return self._params[key].prefix + key

    def keys_with_prefix(self) -> Dict[str, str]:
        return {name: param.prefix + name for name, param in self._params.items()}

    def format_usage(self, header: str = "", program: Optional[str] = None) -> str:
        return format_usage(self._params, header=header, program=program)

    def print_usage(self, header: str = "", program: Optional[str] = None, stream=None) -> None:
        (stream or sys.stdout).write(self.format_usage(header, program))

    def to_dict(self) -> Dict[str, Any]:
        return {key: _unfreeze(value) for key, value in self._data.items()}


def _freeze(value: Any) -> Any:
    if isinstance(value, FrozenMapping):
        return value
    if isinstance(value, dict):
        return FrozenMapping(value)
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def _unfreeze(item: Any) -> Any:
    if isinstance(item, FrozenMapping):
        return {k: _unfreeze(v) for k, v in item.items()}
    if isinstance(item, tuple):
        return [_unfreeze(v) for v in item]
    return item
