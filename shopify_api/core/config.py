"""Validates and normalizes the options used to initialize the library.

`validate_config` is the single entry point. It checks that mandatory fields
carry a value, fills in defaults for everything else, migrates the
deprecated ``is_private_app`` flag onto ``is_custom_store_app`` and returns a
frozen `Config`.
"""
import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import Any, List, Mapping, Tuple, Union

from ..auth.scopes import AuthScopes
from .base_types import UNSET, Config, ConfigParams, LoggerConfig, LoggerParams, is_set
from .errors import ConfigurationError
from .logger import create_logger
from .types import LATEST_API_VERSION, HostScheme, LogSeverity

# Initialize a logger for this module.
logger = logging.getLogger(__name__)

# Log records from the default log callback are emitted under this name.
default_sink = logging.getLogger("shopify_api")

MANDATORY_FIELDS: Tuple[str, ...] = ("api_key", "api_secret_key", "host_name")

# DEPRECATION: is_private_app is removed in this version.
PRIVATE_APP_REMOVAL_VERSION = "7.0.0"


def default_log_function(severity: LogSeverity, message: str) -> None:
    """Writes a library log message through the standard logging module.

    Used when the caller supplies no log callback of their own.

    Args:
        severity (LogSeverity): Selects the logging level.
        message (str): The already formatted message.
    """
    if severity == LogSeverity.DEBUG:
        default_sink.debug(message)
    elif severity == LogSeverity.INFO:
        default_sink.info(message)
    elif severity == LogSeverity.WARNING:
        default_sink.warning(message)
    elif severity == LogSeverity.ERROR:
        default_sink.error(message)


def is_empty(value: Any) -> bool:
    """Decides whether a raw value counts as missing.

    Only absent values, strings and sequences can be empty. Booleans, numbers
    and other objects are always present, so ``False`` and ``0`` are valid
    settings.

    Args:
        value (Any): The raw value.

    Returns:
        bool: True if the value is absent or has zero length.
    """
    if value is None or value is UNSET:
        return True
    if isinstance(value, Sequence):
        return len(value) == 0
    return False


def mandatory_fields(params: ConfigParams) -> List[str]:
    """Returns the fields that must be non-empty for the given raw params.

    Scopes are required unless the caller declares a custom store app, either
    directly or through the deprecated ``is_private_app`` flag. The raw flags
    are inspected because this runs before any defaults are applied.
    """
    mandatory = list(MANDATORY_FIELDS)
    if not params.is_custom_store_app and not params.is_private_app:
        mandatory.append("scopes")
    return mandatory


def _default_config() -> Config:
    return Config(
        api_key="",
        api_secret_key="",
        scopes=AuthScopes([]),
        host_name="",
        host_scheme=HostScheme.HTTPS,
        api_version=LATEST_API_VERSION,
        is_embedded_app=True,
        is_custom_store_app=False,
        logger=LoggerConfig(
            log=default_log_function,
            level=LogSeverity.INFO,
            http_requests=False,
            timestamps=False,
        ),
    )


def _merge_logger(defaults: LoggerConfig, raw: Any) -> LoggerConfig:
    if not is_set(raw):
        return defaults
    if isinstance(raw, LoggerConfig):
        return raw
    if isinstance(raw, Mapping):
        raw = LoggerParams.from_dict(raw)
    provided = {}
    for name in ("log", "level", "http_requests", "timestamps"):
        value = getattr(raw, name, UNSET)
        if is_set(value):
            provided[name] = value
    return replace(defaults, **provided)


def _override(params: ConfigParams, name: str, default: Any) -> Any:
    value = getattr(params, name)
    return value if is_set(value) else default


def validate_config(params: Union[ConfigParams, Mapping[str, Any]]) -> Config:
    """Validates raw options and builds the library configuration.

    Args:
        params: The caller's options, as `ConfigParams` or a mapping with
            snake_case or camelCase keys.

    Returns:
        Config: The fully populated, immutable configuration.

    Raises:
        ConfigurationError: If any mandatory field is missing or empty. The
            message lists every such field.
    """
    if not isinstance(params, ConfigParams):
        params = ConfigParams.from_dict(params)

    config = _default_config()

    missing = [name for name in mandatory_fields(params) if is_empty(getattr(params, name))]
    if missing:
        raise ConfigurationError(missing)

    host_name = params.host_name
    if isinstance(host_name, str) and host_name.endswith("/"):
        host_name = host_name[:-1]

    scopes = params.scopes if isinstance(params.scopes, AuthScopes) else AuthScopes(params.scopes or None)

    custom_shop_domains = _override(params, "custom_shop_domains", config.custom_shop_domains)
    if isinstance(custom_shop_domains, (list, tuple, set, frozenset)):
        custom_shop_domains = tuple(custom_shop_domains)

    config = replace(
        config,
        api_key=params.api_key,
        api_secret_key=params.api_secret_key,
        scopes=scopes,
        host_name=host_name,
        host_scheme=_override(params, "host_scheme", config.host_scheme),
        api_version=_override(params, "api_version", config.api_version),
        is_embedded_app=_override(params, "is_embedded_app", config.is_embedded_app),
        is_custom_store_app=_override(params, "is_custom_store_app", config.is_custom_store_app),
        user_agent_prefix=_override(params, "user_agent_prefix", config.user_agent_prefix),
        private_app_storefront_access_token=_override(
            params, "private_app_storefront_access_token", config.private_app_storefront_access_token
        ),
        custom_shop_domains=custom_shop_domains,
        billing=_override(params, "billing", config.billing),
        logger=_merge_logger(config.logger, params.logger),
    )

    if is_set(params.is_private_app):
        create_logger(config).deprecated(
            PRIVATE_APP_REMOVAL_VERSION,
            "The `is_private_app` config option has been deprecated. Please use `is_custom_store_app` instead.",
        )
        # The explicit new flag wins over the deprecated one.
        if not is_set(params.is_custom_store_app):
            config = replace(config, is_custom_store_app=bool(params.is_private_app))

    logger.debug(f"Validated configuration for host {config.host_name}")
    return config
