"""Library entry point.

`shopify_api` validates the caller's options once and returns a `ShopifyApi`
object that carries the resulting configuration and a logger bound to it.
"""
import platform
from dataclasses import replace
from typing import Any, Mapping, Optional, Union

from . import __version__
from .core.base_types import Config, ConfigParams, _split_known
from .core.config import validate_config
from .core.logger import Logger, create_logger
from .core.types import LATEST_API_VERSION


class ShopifyApi:
    """An initialized library instance.

    Attributes:
        config (Config): The validated, read-only configuration.
        logger (Logger): Emits messages through the configured log callback.
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.logger: Logger = create_logger(config)

    def __repr__(self) -> str:
        return f"ShopifyApi(host_name={self.config.host_name!r}, api_version={str(self.config.api_version)!r})"


def shopify_api(params: Optional[Union[ConfigParams, Mapping[str, Any]]] = None, **kwargs: Any) -> ShopifyApi:
    """Initializes the library from the given options.

    Options may be passed as a `ConfigParams`, a mapping, keyword arguments,
    or a combination; keyword arguments take precedence.

    Raises:
        ConfigurationError: If mandatory options are missing.
    """
    if isinstance(params, ConfigParams):
        raw: Union[ConfigParams, Mapping[str, Any]] = replace(params, **_split_known(ConfigParams, kwargs))
    else:
        raw = {**(params or {}), **kwargs}

    api = ShopifyApi(validate_config(raw))
    api.logger.info(f"version {__version__}, environment Python {platform.python_version()}")
    if api.config.api_version != LATEST_API_VERSION:
        api.logger.info(
            f"Loading Admin API version {api.config.api_version}; the latest version is {LATEST_API_VERSION}"
        )
    return api
