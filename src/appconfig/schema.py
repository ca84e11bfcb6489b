from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict

from .types import SPECIAL_TYPES, ParamType

DEFAULT_PREFIX = "-"


class Param(BaseModel):
    """Declarative description of one configuration parameter.

    None of the fields are required. The parameter name is the key under
    which the instance is stored in the catalog dict, and is also the name
    looked up on the command line, in the environment and in the JSON
    document. A ``default`` of ``None`` means the parameter has no default.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    type: ParamType = ParamType.STRING
    default: Any = None
    usage: str = ""
    required: bool = False
    prefix_override: str = ""
    validator: Optional[Callable[[Any], bool]] = None

    @property
    def prefix(self) -> str:
        return self.prefix_override or DEFAULT_PREFIX

    @property
    def has_default(self) -> bool:
        return self.default is not None


def keys_by_type(params: Mapping[str, Param], param_type: ParamType) -> List[str]:
    return [name for name, param in params.items() if param.type == param_type]


def validate_catalog(params: Mapping[str, Param]) -> Dict[ParamType, str]:
    """Return the honored parameter for each special kind present in the catalog.

    Declaring more than one parameter of a special kind is allowed but only
    the first one (in catalog order) takes part in resolution.
    """
    for name, param in params.items():
        if not isinstance(param, Param):
            raise TypeError(f"Catalog entry '{name}' must be a Param, got {type(param).__name__}")
    honored: Dict[ParamType, str] = {}
    for param_type in SPECIAL_TYPES:
        keys = keys_by_type(params, param_type)
        if not keys:
            continue
        honored[param_type] = keys[0]
        if len(keys) > 1:
            logger.warning(
                f"Multiple {param_type.name} parameters declared {keys}; only '{keys[0]}' is used"
            )
    return honored
