"""Exception types raised by the library."""
from typing import Iterable, Tuple


class ShopifyError(Exception):
    """Base class for every error raised by shopify_api."""


class ConfigurationError(ShopifyError):
    """Raised when mandatory configuration values are missing or empty.

    Attributes:
        missing (Tuple[str, ...]): The names of the offending fields, in the
            order they were checked.
    """

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing: Tuple[str, ...] = tuple(missing)
        super().__init__(
            f"Cannot initialize library. Missing values for: {', '.join(self.missing)}"
        )


class FeatureDeprecatedError(ShopifyError):
    """Raised when code uses a feature whose removal version has been reached."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Feature was deprecated in version {version}")
