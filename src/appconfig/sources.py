"""Raw value extraction from the command line, the environment and JSON documents.

Each reader produces a plain ``dict`` for one source. Nothing here converts
types; string values are coerced later by the loader.
"""
from __future__ import annotations

import json
import os
from collections.abc import Mapping
from typing import IO, Any, Callable, Dict, Optional, Sequence, Union

from loguru import logger

from .errors import (
    DocumentMalformedError,
    DocumentUnreadableError,
    RootNodeMissingError,
    UnrecognizedSwitchError,
)
from .schema import Param

Getenv = Callable[[str], Optional[str]]
Environ = Union[Mapping[str, str], Getenv, None]


def as_getenv(environ: Environ) -> Getenv:
    if environ is None:
        return os.environ.get
    if isinstance(environ, Mapping):
        return environ.get
    if callable(environ):
        return environ
    raise TypeError(f"environ must be a mapping or a callable, got {type(environ).__name__}")


def match_switch(params: Mapping[str, Param], argument: str) -> Optional[tuple[str, str]]:
    """Return ``(name, raw_value)`` when ``argument`` names a declared parameter."""
    switch, sep, value = argument.partition("=")
    for name, param in params.items():
        prefix = param.prefix
        if not switch.startswith(prefix):
            continue
        if switch[len(prefix):] == name:
            return name, (value if sep else "true")
    return None


def parse_command_line(params: Mapping[str, Param], argv: Sequence[str]) -> Dict[str, str]:
    """Match every argument against the catalog; unknown switches are fatal.

    ``-name`` alone records ``"true"``; ``-name=value`` records everything
    after the first ``=``. A later occurrence of the same switch wins.
    """
    args: Dict[str, str] = {}
    logger.debug(f"Processing command-line arguments: {list(argv)}")
    for argument in argv:
        logger.debug(f"--> Process argument: {argument}")
        matched = match_switch(params, argument)
        if matched is None:
            logger.debug("----> No match.")
            err = UnrecognizedSwitchError(argument)
            logger.error(str(err))
            raise err
        name, value = matched
        args[name] = value
        logger.debug(f"----> Found match: {name} = {value}")
    logger.debug(f"--> Done. Command-line values: {args}")
    return args


def read_environment(params: Mapping[str, Param], environ: Environ = None) -> Dict[str, str]:
    """Look up an environment variable named exactly like each parameter."""
    getenv = as_getenv(environ)
    found: Dict[str, str] = {}
    logger.debug("Checking environmental variables...")
    for name in params:
        value = getenv(name)
        if value:
            found[name] = value
            logger.debug(f"----> Found match: {name} = {value}")
    logger.debug(f"--> Done. Environmental variables: {found}")
    return found


def load_document(stream: IO[Any], source: str, root_node: str = "") -> Dict[str, Any]:
    """Decode a JSON object from ``stream`` and optionally narrow it to ``root_node``."""
    try:
        data = json.load(stream)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        err = DocumentMalformedError(source, str(exc))
        logger.error(str(err))
        raise err from exc
    except OSError as exc:
        err = DocumentUnreadableError(source, str(exc))
        logger.error(str(err))
        raise err from exc

    if not isinstance(data, dict):
        err = DocumentMalformedError(source, f"expected a JSON object, got {type(data).__name__}")
        logger.error(str(err))
        raise err
    logger.debug(f"--> Loaded JSON config '{source}': {data}")

    if not root_node:
        return data
    node = data.get(root_node)
    if not isinstance(node, dict):
        err = RootNodeMissingError(root_node, source)
        logger.error(str(err))
        raise err
    logger.debug(f"--> Filtering JSON based on root node '{root_node}': {node}")
    return node


def load_document_file(path: str, root_node: str = "") -> Dict[str, Any]:
    logger.debug(f"Reading config file: file = '{path}', node = '{root_node}'")
    try:
        handle = open(path, "rb")
    except OSError as exc:
        err = DocumentUnreadableError(path, str(exc))
        logger.error(str(err))
        raise err from exc
    with handle:
        return load_document(handle, path, root_node)
