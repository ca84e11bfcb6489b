from __future__ import annotations

import json
import sys
from typing import Any, Mapping, Optional

from .schema import Param


def format_default(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def format_usage(params: Mapping[str, Param], header: str = "", program: Optional[str] = None) -> str:
    """Render ``header`` followed by an aligned switch / description table."""
    program = program if program is not None else sys.argv[0]
    lines = [f"{header}Usage: {program} [options]", "", "options:"]

    switches = {name: param.prefix + name for name, param in params.items()}
    width = max((len(switch) for switch in switches.values()), default=0)
    for name, param in params.items():
        description = param.usage
        if param.has_default:
            description = f"{description} (default: {format_default(param.default)})"
        lines.append(f"  {switches[name].ljust(width + 1)}   {description}".rstrip())
    return "\n".join(lines) + "\n"


def catalog_to_json(params: Mapping[str, Param], indent: Optional[int] = None) -> str:
    """Serialize the catalog, without validators, for display."""
    payload = {
        name: param.model_dump(mode="json", exclude={"validator"})
        for name, param in params.items()
    }
    return json.dumps(payload, indent=indent, ensure_ascii=False, default=str)
