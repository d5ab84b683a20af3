"""furllib.query
URL queries as ordered multivalue dictionaries of decoded keys and values.
"""

from collections.abc import Mapping
from typing import Any, Iterable, Self

from .codec import decode, encode_query_component
from .omdict import OMDict


def _str_or_none(value: Any) -> str | None:
    return value if value is None or isinstance(value, str) else str(value)


def _items(args: Any) -> list[tuple[str, str | None]]:
    """Flattens args into (key, value) items.

    args can be an encoded query string, an OMDict, a mapping or an iterable
    of (key, value) pairs. A list or tuple value means several values for
    the same key, since query values can't themselves hold sub-values.
    """
    if isinstance(args, str):
        return Query.parse(args).allitems()
    if isinstance(args, OMDict):
        return args.allitems()

    pairs: Iterable[tuple[Any, Any]] = args.items() if isinstance(args, Mapping) else args
    result: list[tuple[str, str | None]] = []
    for key, value in pairs:
        if isinstance(value, (list, tuple)):
            result.extend((str(key), _str_or_none(v)) for v in value)
        else:
            result.append((str(key), _str_or_none(value)))
    return result


class Query(OMDict):
    """A URL query like "a=1&a=2&b".

    Keys and values are kept decoded. A None value is written without an
    '=' ("b"), while an empty string value keeps it ("b=").

    >>> q = Query.parse("space=jams&space=slams&on%20e=1")
    >>> q.getlist("space")
    ['jams', 'slams']
    >>> q["on e"]
    '1'
    """

    @classmethod
    def parse(cls, query: str | None, delimiter: str = "&") -> Self:
        """Parses an encoded query string. Empty pairs, as in "a=1&&b=2", are skipped."""
        result: Self = cls()
        if not query:
            return result
        for pair in query.split(delimiter):
            if not pair:
                continue
            key, equals, value = pair.partition("=")
            result.add(decode(key), decode(value) if equals else None)
        return result

    def encode(self: Self, delimiter: str = "&", separator: str = "=") -> str:
        pairs: list[str] = []
        for key, value in self.allitems():
            if value is None:
                pairs.append(encode_query_component(key))
            else:
                pairs.append(f"{encode_query_component(key)}{separator}{encode_query_component(value)}")
        return delimiter.join(pairs)

    def extend(self: Self, args: Any) -> Self:
        """Adds every item in args, keeping whatever is already there."""
        for key, value in _items(args):
            self.add(key, value)
        return self

    def adopt(self: Self, args: Any) -> Self:
        """Replaces the whole query with the items in args."""
        items: list[tuple[str, str | None]] = _items(args)
        self.clear()
        for key, value in items:
            self.add(key, value)
        return self

    def discard(self: Self, args: Any) -> Self:
        """Removes keys or (key, value) items. True removes everything.

        args is a key, a single (key, value) tuple, or a list of keys and
        (key, value) items.
        """
        if args is True:
            self.clear()
            return self
        if isinstance(args, str) or (isinstance(args, tuple) and len(args) == 2):
            args = [args]
        for item in args:
            if isinstance(item, (list, tuple)) and len(item) == 2:
                key, value = item
                if value in self.getlist(key):
                    self.popvalue(key, value)
            else:
                self.remove(item)
        return self

    def __str__(self: Self) -> str:
        return self.encode()
