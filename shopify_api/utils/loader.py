"""Reads raw configuration options from TOML documents.

The validator itself only accepts in-memory values. This module turns a TOML
file into `ConfigParams` so the options can be checked from the command line
before an app ships them.
"""
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Union

try:
    import tomllib  # Available in Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python versions < 3.11

from ..core.base_types import ConfigParams
from ..core.types import LogSeverity

# Initialize a logger for this module.
logger = logging.getLogger(__name__)

# Options may live under this table or at the top level of the document.
TABLE_NAME = "shopify"


def _coerce_level(value: Any) -> Any:
    """Maps a severity name such as ``"debug"`` to its `LogSeverity`.

    Raises:
        ValueError: If the name is not a known severity.
    """
    if isinstance(value, str):
        try:
            return LogSeverity[value.strip().upper()]
        except KeyError:
            names = ", ".join(s.name.lower() for s in LogSeverity)
            raise ValueError(f"Unknown log level '{value}', expected one of: {names}") from None
    return value


def params_from_mapping(data: Mapping[str, Any]) -> ConfigParams:
    """Builds `ConfigParams` from a parsed TOML document.

    Args:
        data (Mapping[str, Any]): The parsed document. If it has a
            ``[shopify]`` table only that table is used.

    Returns:
        ConfigParams: The raw, not yet validated options.
    """
    options: Dict[str, Any] = dict(data.get(TABLE_NAME, data))
    logger_options = options.get("logger")
    if isinstance(logger_options, Mapping):
        logger_options = dict(logger_options)
        if "level" in logger_options:
            logger_options["level"] = _coerce_level(logger_options["level"])
        options["logger"] = logger_options
    return ConfigParams.from_dict(options)


def load_params(path: Union[str, Path]) -> ConfigParams:
    """Loads raw configuration options from a TOML file.

    Args:
        path (Union[str, Path]): The TOML file to read.

    Returns:
        ConfigParams: The raw options found in the file.

    Raises:
        OSError: If the file cannot be read.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
        ValueError: If the file names an unknown log level.
    """
    logger.info(f"Loading configuration options from {path}")
    with open(path, "rb") as f:
        data = tomllib.load(f)
    return params_from_mapping(data)
