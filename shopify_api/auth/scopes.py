"""Value type for sets of authorization scopes.

Scopes are compared as sets: order is irrelevant and duplicates collapse.
Write scopes imply their read counterpart, so ``write_products`` also grants
``read_products``. The compressed form drops implied scopes that were listed
explicitly, while the expanded form includes them.
"""
import re
from typing import FrozenSet, Iterable, Iterator, List, Union

ScopesLike = Union[str, Iterable[str], "AuthScopes", None]

_WRITE_SCOPE = re.compile(r"^(unauthenticated_)?write_(.*)$")


class AuthScopes:
    """An immutable, set-based collection of scope strings."""

    SCOPE_DELIMITER = ","

    def __init__(self, scopes: ScopesLike = None) -> None:
        if isinstance(scopes, AuthScopes):
            scope_list = list(scopes._expanded)
        elif isinstance(scopes, str):
            scope_list = re.split(rf"{self.SCOPE_DELIMITER}\s*", scopes)
        elif scopes is None:
            scope_list = []
        else:
            scope_list = list(scopes)

        scope_set = {scope.strip() for scope in scope_list if scope and scope.strip()}
        implied = self._implied_scopes(scope_set)

        self._compressed: FrozenSet[str] = frozenset(scope_set - implied)
        self._expanded: FrozenSet[str] = frozenset(scope_set | implied)

    @staticmethod
    def _implied_scopes(scopes: Iterable[str]) -> FrozenSet[str]:
        implied = set()
        for scope in scopes:
            match = _WRITE_SCOPE.match(scope)
            if match:
                implied.add(f"{match.group(1) or ''}read_{match.group(2)}")
        return frozenset(implied)

    @classmethod
    def _coerce(cls, scopes: ScopesLike) -> "AuthScopes":
        return scopes if isinstance(scopes, AuthScopes) else cls(scopes)

    def has(self, scopes: ScopesLike) -> bool:
        """Checks whether every given scope is granted by this set.

        Args:
            scopes: The scopes to look for, in any accepted form.

        Returns:
            bool: True if all of them are in the expanded set.
        """
        other = self._coerce(scopes)
        return other._compressed.issubset(self._expanded)

    def equals(self, scopes: ScopesLike) -> bool:
        """Checks whether both sets grant exactly the same scopes."""
        return self._compressed == self._coerce(scopes)._compressed

    def to_list(self) -> List[str]:
        """Returns the compressed scopes, sorted for stable output."""
        return sorted(self._compressed)

    def expanded(self) -> List[str]:
        """Returns every granted scope, including implied read scopes."""
        return sorted(self._expanded)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AuthScopes):
            return self._compressed == other._compressed
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._compressed)

    def __len__(self) -> int:
        return len(self._compressed)

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_list())

    def __contains__(self, scope: object) -> bool:
        return isinstance(scope, str) and self.has(scope)

    def __str__(self) -> str:
        return self.SCOPE_DELIMITER.join(self.to_list())

    def __repr__(self) -> str:
        return f"AuthScopes({self.to_list()!r})"
