"""Sample program declaring a catalog, resolving it and printing the result.

    python tools/appconfig_example.py --help
    python tools/appconfig_example.py -config=examples/polyverse.json -remote_addr=10.0.0.1:443
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

from appconfig import ConfigError, Param, ParamType, catalog_to_json, load_config

USAGE_HEADER = "This app is a sample implementation of the appconfig package.\n\n"


def build_params() -> Dict[str, Param]:
    return {
        "config": Param(type=ParamType.CONFIG_JSON, default="polyverse.json", usage="JSON configuration file."),
        "config-node": Param(type=ParamType.CONFIG_NODE, default="crypto-proxy", usage="Node within the configuration file."),
        "config-stdin": Param(type=ParamType.CONFIG_STDIN, default=False, usage="Read JSON configuration from stdin.", prefix_override="--"),
        "debug": Param(type=ParamType.BOOL, default=False, usage="Debug mode.", prefix_override="--"),
        "proxy-addr": Param(default=":8080", usage="Listen to [address]:port.", required=True),
        "remote_addr": Param(usage="Remote address[:port].", required=True),
        "statsd_addr": Param(usage="StatsD address:port."),
        "ProxyRules": Param(type=ParamType.OBJECT, usage="Maps routes to javascript handler functions", required=True),
        "buffer_size": Param(type=ParamType.INT, default=1024, usage="Read buffer size in bytes.", validator=lambda v: v > 0),
        "help": Param(type=ParamType.USAGE, default=False, usage="Prints usage.", prefix_override="--"),
    }


def configure_logging(argv: List[str]) -> None:
    # The resolver logs while parsing, so the level is picked from the raw arguments.
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if "--debug" in argv else "WARNING")


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    configure_logging(argv)
    params = build_params()

    print("\nThe following parameters have been defined:")
    print(catalog_to_json(params))

    try:
        config = load_config(params, argv)
    except ConfigError as exc:
        print(f"Configuration error: {exc}")
        return 1

    if config.get_bool("help"):
        config.print_usage(USAGE_HEADER)
        return 0

    print("\nResult:")
    for name in params:
        value = config.get(name)
        print(f"param = {name}, value = {value!r}, type = {type(value).__name__}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
