"""Shared enumerations and version constants.

These values are read by the configuration validator when filling in
defaults, and by the logger when formatting and filtering messages.
"""
from enum import Enum, IntEnum

from .. import __version__

# The released version of this library, used to decide whether a deprecated
# feature has passed its removal version.
LIBRARY_VERSION = __version__


class LogSeverity(IntEnum):
    """Severity levels understood by log callbacks.

    Lower values are more severe. A message is emitted only when its
    severity is less than or equal to the configured level.
    """

    ERROR = 0
    WARNING = 1
    INFO = 2
    DEBUG = 3


class ApiVersion(str, Enum):
    """Admin API versions known to this release of the library."""

    OCTOBER21 = "2021-10"
    JANUARY22 = "2022-01"
    APRIL22 = "2022-04"
    JULY22 = "2022-07"
    OCTOBER22 = "2022-10"
    JANUARY23 = "2023-01"
    UNSTABLE = "unstable"

    def __str__(self) -> str:
        return self.value


LATEST_API_VERSION = ApiVersion.JANUARY23


class HostScheme(str, Enum):
    HTTP = "http"
    HTTPS = "https"

    def __str__(self) -> str:
        return self.value
