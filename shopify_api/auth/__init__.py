"""Authorization primitives shared across the library."""
from .scopes import AuthScopes

__all__ = ["AuthScopes"]
