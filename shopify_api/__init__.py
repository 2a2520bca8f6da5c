"""shopify_api: configuration core for a Shopify app client library.

This package validates and normalizes the options an app passes when it
initializes the library, producing a single immutable configuration object
that the rest of the library reads.
"""

__version__ = "6.2.0"
__author__ = "Shopify API Library Contributors"
__license__ = "MIT"

from .auth.scopes import AuthScopes
from .client import ShopifyApi, shopify_api
from .core.base_types import UNSET, Config, ConfigParams, LoggerConfig, LoggerParams
from .core.config import default_log_function, is_empty, validate_config
from .core.errors import ConfigurationError, FeatureDeprecatedError, ShopifyError
from .core.types import LATEST_API_VERSION, ApiVersion, HostScheme, LogSeverity

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "ApiVersion",
    "AuthScopes",
    "Config",
    "ConfigParams",
    "ConfigurationError",
    "FeatureDeprecatedError",
    "HostScheme",
    "LATEST_API_VERSION",
    "LogSeverity",
    "LoggerConfig",
    "LoggerParams",
    "ShopifyApi",
    "ShopifyError",
    "UNSET",
    "default_log_function",
    "is_empty",
    "shopify_api",
    "validate_config",
]
