"""Typed records for raw and validated library configuration.

`ConfigParams` is what callers hand to the library. Every field starts out as
the `UNSET` marker so the validator can tell a value that was never supplied
apart from one supplied as ``False``, ``0`` or ``""``. `Config` is the
validated result: frozen and fully populated.
"""
import logging
import re
from dataclasses import dataclass, field, fields
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union

from ..auth.scopes import AuthScopes
from .types import ApiVersion, HostScheme, LogSeverity

logger = logging.getLogger(__name__)

LogFunction = Callable[[LogSeverity, str], Union[None, Awaitable[None]]]


class _Unset:
    """Marker for a field the caller did not supply."""

    _instance = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def is_set(value: Any) -> bool:
    """Returns True when a raw field was supplied with a non-None value."""
    return value is not UNSET and value is not None


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _split_known(cls: type, data: Mapping[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(cls)}
    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        name = _snake_case(key)
        if name in known:
            kwargs[name] = value
        else:
            logger.debug(f"Ignoring unknown {cls.__name__} key: {key}")
    return kwargs


@dataclass
class LoggerParams:
    """Partial logger settings; unset sub-fields inherit the defaults."""

    log: Optional[LogFunction] = UNSET
    level: Optional[LogSeverity] = UNSET
    http_requests: Optional[bool] = UNSET
    timestamps: Optional[bool] = UNSET

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LoggerParams":
        return cls(**_split_known(cls, data))


@dataclass
class ConfigParams:
    """Raw, caller-supplied options for initializing the library.

    Attributes:
        api_key (str): The app's API key. Mandatory.
        api_secret_key (str): The app's API secret. Mandatory.
        scopes: The access scopes the app requests, as a list, a comma
            separated string, or an `AuthScopes`. Mandatory unless the app is
            a custom store app.
        host_name (str): The host the app is served from. Mandatory.
        host_scheme: ``"http"`` or ``"https"``.
        api_version: The Admin API version to target.
        is_embedded_app (bool): Whether the app renders inside the admin.
        is_custom_store_app (bool): Whether the app is a custom store app.
        is_private_app (bool): Deprecated alias of `is_custom_store_app`.
        user_agent_prefix (str): Prepended to outgoing User-Agent headers.
        custom_shop_domains: Extra shop domains, as strings or patterns.
        billing: Billing policy, passed through untouched.
        private_app_storefront_access_token (str): Storefront token used by
            custom store apps.
        logger: Partial logger settings, as `LoggerParams` or a mapping.
    """

    api_key: Optional[str] = UNSET
    api_secret_key: Optional[str] = UNSET
    scopes: Any = UNSET
    host_name: Optional[str] = UNSET
    host_scheme: Optional[Union[HostScheme, str]] = UNSET
    api_version: Optional[Union[ApiVersion, str]] = UNSET
    is_embedded_app: Optional[bool] = UNSET
    is_custom_store_app: Optional[bool] = UNSET
    is_private_app: Optional[bool] = UNSET
    user_agent_prefix: Optional[str] = UNSET
    custom_shop_domains: Any = UNSET
    billing: Any = UNSET
    private_app_storefront_access_token: Optional[str] = UNSET
    logger: Any = UNSET

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConfigParams":
        """Builds params from a mapping with snake_case or camelCase keys.

        Unknown keys are ignored.

        Args:
            data (Mapping[str, Any]): The raw options.

        Returns:
            ConfigParams: The typed params.
        """
        return cls(**_split_known(cls, data))


@dataclass(frozen=True)
class LoggerConfig:
    log: LogFunction
    level: LogSeverity = LogSeverity.INFO
    http_requests: bool = False
    timestamps: bool = False


@dataclass(frozen=True)
class Config:
    """The validated configuration shared by the rest of the library.

    Built once by `validate_config` and never mutated afterwards.
    """

    api_key: str
    api_secret_key: str
    scopes: AuthScopes
    host_name: str
    host_scheme: Union[HostScheme, str]
    api_version: Union[ApiVersion, str]
    is_embedded_app: bool
    is_custom_store_app: bool
    logger: LoggerConfig
    user_agent_prefix: Optional[str] = None
    private_app_storefront_access_token: Optional[str] = None
    custom_shop_domains: Any = None
    billing: Any = field(default=None, compare=False)
