"""Resolution of a parameter catalog into an immutable AppConfig.

Values are collected in the following order, each overriding the previous
when it provides a value: (1) code default, (2) JSON configuration file,
(3) JSON document on standard input, (4) environment variables and
(5) command-line switches.
"""
from __future__ import annotations

import sys
from typing import IO, Any, Dict, Mapping, Optional, Sequence

from loguru import logger

from .coercion import coerce, parse_bool
from .errors import CoercionFailedError, MissingRequiredParameterError, ValidationFailedError
from .freeze import AppConfig
from .schema import Param, keys_by_type, validate_catalog
from .sources import (
    Environ,
    Getenv,
    as_getenv,
    load_document,
    load_document_file,
    parse_command_line,
    read_environment,
)
from .types import ZERO_VALUES, ParamType

STRICT_ENV_VAR = "APPCONFIG_STRICT"
STDIN_SOURCE = "<stdin>"

_MISSING = object()


def load_config(
    params: Mapping[str, Param],
    argv: Optional[Sequence[str]] = None,
    environ: Environ = None,
    stdin: Optional[IO[Any]] = None,
    *,
    strict: bool | None = None,
) -> AppConfig:
    """Resolve ``params`` against the command line, environment and JSON documents.

    ``argv`` excludes the program name and defaults to ``sys.argv[1:]``.
    ``environ`` is a mapping or a ``getenv``-style callable and defaults to
    ``os.environ``. ``stdin`` is only read when a CONFIG_STDIN parameter
    resolves to true and defaults to ``sys.stdin.buffer``.

    Raises a ConfigError subclass on the first failure; no partial result is
    returned. When a USAGE parameter is set to true on the command line or
    in the environment, resolution stops early and the returned config only
    holds that flag.

    ``APPCONFIG_STRICT`` is library configuration rather than a parameter, so
    it is read from ``environ`` even when a READ_ENV parameter disables the
    environment lookup for parameters.
    """
    getenv = as_getenv(environ)
    strict_mode = _determine_strict_mode(strict, getenv)
    honored = validate_catalog(params)

    cli_args = parse_command_line(params, sys.argv[1:] if argv is None else argv)

    env_args: Dict[str, str] = {}
    read_env_key = honored.get(ParamType.READ_ENV)
    if read_env_key is None or _pre_resolve_bool(params, read_env_key, cli_args, strict_mode):
        env_args = read_environment(params, getenv)
    else:
        logger.debug(f"Environment lookup disabled by '{read_env_key}'.")

    if read_env_key is not None:
        # The flag keeps the value that decided whether the environment was read.
        env_args.pop(read_env_key, None)

    # Empty values never override a lower layer.
    overrides: Dict[str, str] = {k: v for k, v in env_args.items() if v}
    overrides.update({k: v for k, v in cli_args.items() if v})
    logger.debug(f"--> Environment + command-line overrides: {overrides}")

    for usage_key in keys_by_type(params, ParamType.USAGE):
        if _usage_requested(usage_key, overrides, strict_mode):
            logger.debug(f"USAGE flag '{usage_key}' set to true.")
            return AppConfig({usage_key: True}, params, usage_requested=True)

    config_path = _pre_resolve_string(params, honored.get(ParamType.CONFIG_JSON), overrides)
    config_node = _pre_resolve_string(params, honored.get(ParamType.CONFIG_NODE), overrides)

    file_values: Dict[str, Any] = {}
    if config_path:
        file_values = load_document_file(config_path, config_node)
    else:
        logger.debug("No configuration file specified.")

    stdin_values: Dict[str, Any] = {}
    stdin_key = honored.get(ParamType.CONFIG_STDIN)
    if stdin_key is not None and _pre_resolve_bool(params, stdin_key, overrides, strict_mode):
        logger.debug(f"Reading config from standard input: node = '{config_node}'")
        stream = stdin if stdin is not None else sys.stdin.buffer
        stdin_values = load_document(stream, STDIN_SOURCE, config_node)

    if read_env_key is not None:
        file_values.pop(read_env_key, None)
        stdin_values.pop(read_env_key, None)

    values = _finalize(params, file_values, stdin_values, env_args, cli_args, strict_mode)
    logger.debug(f"Done. Final config values: {values}")
    return AppConfig(values, params)


def _finalize(
    params: Mapping[str, Param],
    file_values: Mapping[str, Any],
    stdin_values: Mapping[str, Any],
    env_args: Mapping[str, str],
    cli_args: Mapping[str, str],
    strict: bool,
) -> Dict[str, Any]:
    logger.debug("Finalizing configuration values...")
    values: Dict[str, Any] = {}
    for name, param in params.items():
        logger.debug(f"--> Processing param: {name}")
        value: Any = _MISSING
        from_string = False

        if param.has_default:
            value = param.default
            logger.debug(f"----> Setting default: {name} = {value!r}")
        if file_values.get(name) is not None:
            value = file_values[name]
            logger.debug(f"----> Config file override: {name} = {value!r}")
        if stdin_values.get(name) is not None:
            value = stdin_values[name]
            logger.debug(f"----> Stdin override: {name} = {value!r}")
        if env_args.get(name):
            value, from_string = env_args[name], True
            logger.debug(f"----> Environment override: {name} = {value!r}")
        if cli_args.get(name):
            value, from_string = cli_args[name], True
            logger.debug(f"----> Command-line override: {name} = {value!r}")

        if value is _MISSING:
            if param.required:
                err = MissingRequiredParameterError(name)
                logger.error(str(err))
                raise err
            value = ZERO_VALUES.get(param.type)
        elif from_string:
            value = coerce(name, param, value, strict=strict)

        if param.validator is not None and not param.validator(value):
            err = ValidationFailedError(name, value)
            logger.error(str(err))
            raise err
        values[name] = value
    return values


def _usage_requested(key: str, overrides: Mapping[str, str], strict: bool) -> bool:
    raw = overrides.get(key)
    if raw is None:
        return False
    try:
        return parse_bool(raw)
    except ValueError:
        if strict:
            err = CoercionFailedError(key, raw, "bool")
            logger.error(str(err))
            raise err
        logger.warning(f"Ignoring non-boolean value for USAGE flag {key}={raw!r}")
        return False


def _pre_resolve_string(params: Mapping[str, Param], key: Optional[str], overrides: Mapping[str, str]) -> str:
    if key is None:
        return ""
    if key in overrides:
        return overrides[key]
    default = params[key].default
    return default if isinstance(default, str) else ""


def _pre_resolve_bool(
    params: Mapping[str, Param], key: str, overrides: Mapping[str, str], strict: bool
) -> bool:
    param = params[key]
    raw = overrides.get(key)
    if raw:
        return bool(coerce(key, param, raw, strict=strict))
    default = param.default
    if isinstance(default, str):
        return bool(coerce(key, param, default, strict=strict))
    return bool(default) if default is not None else False


def _determine_strict_mode(strict: bool | None, getenv: Getenv) -> bool:
    if strict is not None:
        return strict

    env_override = getenv(STRICT_ENV_VAR)
    if env_override is not None:
        value = env_override.strip().lower()
        if value in {"1", "true", "yes", "on", "strict"}:
            return True
        if value in {"0", "false", "no", "off", "lenient"}:
            return False
        logger.warning(f"Unrecognized {STRICT_ENV_VAR} value {env_override!r}; using lenient coercion")
    return False
