"""furllib.fragment
URL fragments, which are a path and a query of their own.
"""

from typing import Any, Iterable, Self

from .omdict import _absent
from .path import Path
from .query import Query


class Fragment:
    """A fragment like "/fragment/path?with=params".

    separator controls whether a '?' is written between the path and the
    query. Turning it off gives hash-bang fragments like "!a=dict&of=args".
    Fragment paths are never forced absolute.

    A parsed fragment without a '?' reports separator False, but the '?' is
    still written once both a path and a query are present, unless separator
    was turned off explicitly.
    """

    def __init__(
        self: Self, path: Path | None = None, query: Query | None = None, separator: bool | None = None
    ) -> None:
        self._path: Path = path if path is not None else Path()
        self._query: Query = query if query is not None else Query()
        self._separator: bool = separator if separator is not None else True
        # Set by the caller, as opposed to inferred from parsed text.
        self._separator_chosen: bool = separator is not None

    @classmethod
    def parse(cls, fragment: str | None) -> Self:
        """Everything before the first '?' is the path, everything after it is the query."""
        if not fragment:
            return cls()
        path, question, query = fragment.partition("?")
        result: Self = cls(Path.parse(path), Query.parse(query))
        result._separator = bool(question)
        return result

    def load(self: Self, fragment: "str | Fragment | None") -> Self:
        other: Fragment = fragment if isinstance(fragment, Fragment) else Fragment.parse(fragment)
        self._path.load(other.path)
        self._query.adopt(other.query)
        self._separator = other._separator
        self._separator_chosen = other._separator_chosen
        return self

    @property
    def separator(self: Self) -> bool:
        return self._separator

    @separator.setter
    def separator(self: Self, separator: bool) -> None:
        self._separator = bool(separator)
        self._separator_chosen = True

    @property
    def path(self: Self) -> Path:
        return self._path

    @path.setter
    def path(self: Self, path: str | Iterable[str] | Path) -> None:
        self._path.load(path)

    @property
    def query(self: Self) -> Query:
        return self._query

    @query.setter
    def query(self: Self, query: Any) -> None:
        self._query.adopt(query)

    def add(self: Self, path: Any = _absent, args: Any = _absent) -> Self:
        if path is not _absent:
            self._path.add(path)
        if args is not _absent:
            self._query.extend(args)
        return self

    def set(self: Self, path: Any = _absent, args: Any = _absent, separator: Any = _absent) -> Self:
        if path is not _absent:
            self._path.load(path)
        if args is not _absent:
            self._query.adopt(args)
        if separator is not _absent:
            self.separator = bool(separator)
        return self

    def remove(self: Self, fragment: Any = _absent, path: Any = _absent, args: Any = _absent) -> Self:
        if fragment is True:
            self.load("")
        if path is not _absent:
            self._path.remove(path)
        if args is not _absent:
            self._query.discard(args)
        return self

    def copy(self: Self) -> Self:
        result: Self = self.__class__(self._path.copy(), self._query.copy())
        result._separator = self._separator
        result._separator_chosen = self._separator_chosen
        return result

    def __str__(self: Self) -> str:
        path: str = str(self._path)
        query: str = str(self._query)
        if query and (self._separator or (path and not self._separator_chosen)):
            return f"{path}?{query}"
        return path + query

    def __bool__(self: Self) -> bool:
        return bool(self._path) or bool(self._query)

    def __eq__(self: Self, other: object) -> bool:
        if not isinstance(other, Fragment):
            return NotImplemented
        return str(self) == str(other)

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}('{self}')"
