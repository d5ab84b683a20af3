"""furllib.omdict
An ordered multivalue dictionary: every key can hold several values, and the
order in which values were inserted is remembered across the whole dictionary,
not just within one key.
"""

import operator

from typing import Iterator, Self

from .errors import IndexOutOfRangeError, InvalidOperationError

_absent = object()

# Each value is stored next to its sequence index. One counter is shared by
# every key, so sorting on the index recovers whole-dictionary insertion order.
_Entry = tuple[int, str | None]


def _pair_up(args: tuple[str | None, ...]) -> list[tuple[str, str | None]]:
    """("k1", "v1", "k2", "v2") -> [("k1", "v1"), ("k2", "v2")]"""
    if len(args) % 2 != 0:
        raise ValueError(f"expected key, value pairs but got {len(args)} arguments")
    return list(zip(args[::2], args[1::2]))


class OMDict:
    """Ordered multivalue dictionary of string keys and values.

    Methods with "list" in their name work on a key's whole list of values
    instead of a single value. Methods with "all" in their name work on every
    (key, value) item, including repeated keys, in insertion order.

    >>> omd = OMDict("1", "1", "2", "2", "1", "11")
    >>> omd.items()
    [('1', '1'), ('2', '2')]
    >>> omd.allitems()
    [('1', '1'), ('2', '2'), ('1', '11')]
    """

    def __init__(self: Self, *args: str | None) -> None:
        self._items: dict[str, list[_Entry]] = {}
        self._next_index: int = 0
        self.load(*args)

    def _take_index(self: Self) -> int:
        index: int = self._next_index
        self._next_index += 1
        return index

    def _append(self: Self, key: str, value: str | None) -> None:
        self._items.setdefault(key, []).append((self._take_index(), value))

    def _entries(self: Self) -> list[tuple[int, str, str | None]]:
        return sorted(
            ((index, key, value) for key, entries in self._items.items() for index, value in entries),
            key=operator.itemgetter(0),
        )

    # Views

    def keys(self: Self) -> list[str]:
        return list(self._items)

    def values(self: Self, key: str | None = None) -> list[str | None]:
        """The first value of every key, or every value of key if one is given."""
        return [value for _, value in self.items(key)]

    def items(self: Self, key: str | None = None) -> list[tuple[str, str | None]]:
        """One (key, first value) item per key, or every item of key if one is given."""
        if key is not None:
            return self.allitems(key)
        return [(k, entries[0][1]) for k, entries in self._items.items()]

    def allitems(self: Self, key: str | None = None) -> list[tuple[str, str | None]]:
        """Every (key, value) item in insertion order, optionally only those for key."""
        if key is not None:
            return [(key, value) for _, value in self._items.get(key, [])]
        return [(k, value) for _, k, value in self._entries()]

    def allkeys(self: Self) -> list[str]:
        return [key for key, _ in self.allitems()]

    def allvalues(self: Self) -> list[str | None]:
        return [value for _, value in self.allitems()]

    def lists(self: Self) -> list[list[str | None]]:
        return [[value for _, value in entries] for entries in self._items.values()]

    @property
    def size(self: Self) -> int:
        """Number of values across all keys. len() gives the number of keys."""
        return sum(len(entries) for entries in self._items.values())

    def count(self: Self) -> int:
        return self.size

    # Getters, setters and adders

    def get(self: Self, key: str, default: str | None = None) -> str | None:
        entries: list[_Entry] | None = self._items.get(key)
        if not entries:
            return default
        return entries[0][1]

    def getlist(self: Self, key: str, *defaults: str | None) -> list[str | None]:
        if key not in self._items:
            return list(defaults)
        return [value for _, value in self._items[key]]

    def set(self: Self, key: str, value: str | None) -> Self:
        """Replaces all of key's values with value, keeping key's original position."""
        if key in self._items:
            first_index: int = self._items[key][0][0]
            self._items[key] = [(first_index, value)]
        else:
            self._append(key, value)
        return self

    def setlist(self: Self, key: str, *values: str | None) -> Self:
        """Replaces key's values with values. Existing positions are reused in
        order; values beyond them are appended at the end of the dictionary.
        """
        if not values:
            self.remove(key)
            return self
        self._updateall([(key, value) for value in values], remove_extra=True)
        return self

    def setdefault(self: Self, key: str, value: str | None = None) -> str | None:
        if key in self._items:
            return self._items[key][0][1]
        self._append(key, value)
        return value

    def setdefaultlist(self: Self, key: str, *values: str | None) -> list[str | None]:
        if key in self._items:
            return self.getlist(key)
        if not values:
            values = (None,)
        for value in values:
            self._append(key, value)
        return list(values)

    def add(self: Self, key: str, value: str | None = None) -> Self:
        self._append(key, value)
        return self

    def addlist(self: Self, key: str, *values: str | None) -> Self:
        for value in values:
            self._append(key, value)
        return self

    # Pops

    def pop(self: Self, key: str, default: str | None | object = _absent) -> str | None:
        """Removes every value of key and returns the first one."""
        if key not in self._items:
            if default is _absent:
                raise InvalidOperationError(f"{key!r} is not in the dictionary and no default was given")
            return default
        value: str | None = self._items[key][0][1]
        self.remove(key)
        return value

    def poplist(self: Self, key: str, *defaults: str | None) -> list[str | None]:
        if key not in self._items:
            if not defaults:
                raise InvalidOperationError(f"{key!r} is not in the dictionary and no default was given")
            return list(defaults)
        values: list[str | None] = self.getlist(key)
        self.remove(key)
        return values

    def popvalue(self: Self, key: str, value: str | None | object = _absent, last: bool = True) -> str | None:
        """Removes and returns a single value of key.

        If value is given and key holds it, the first occurrence of value is
        popped. Otherwise the last value is popped, or the first if last is
        False. If key isn't present, value is returned as the default.
        Once key has no values left, key itself is removed.
        """
        if key not in self._items:
            if value is _absent:
                raise InvalidOperationError(f"{key!r} is not in the dictionary and no default was given")
            return value

        entries: list[_Entry] = self._items[key]
        position: int | None = None
        if value is not _absent:
            position = next((i for i, (_, v) in enumerate(entries) if v == value), None)
        if position is None:
            position = -1 if last else 0

        popped: str | None = entries.pop(position)[1]
        if not entries:
            del self._items[key]
        return popped

    def popitem(self: Self, fromall: bool = False, last: bool = True) -> tuple[str, str | None]:
        """Pops from the last key, or the first if last is False.

        With fromall=False the key is removed along with all of its values and
        (key, first value) is returned. With fromall=True only one value of
        that key is popped.
        """
        key: str = self._edge_key(last)
        if fromall:
            return key, self.popvalue(key, last=last)
        return key, self.pop(key)

    def poplistitem(self: Self, last: bool = True) -> tuple[str, list[str | None]]:
        key: str = self._edge_key(last)
        return key, self.poplist(key)

    def _edge_key(self: Self, last: bool) -> str:
        if not self._items:
            raise InvalidOperationError("dictionary is empty")
        keys: list[str] = self.keys()
        return keys[-1] if last else keys[0]

    def remove(self: Self, key: str) -> None:
        self._items.pop(key, None)

    # Initialization and updates

    def load(self: Self, *args: str | None) -> Self:
        """Clears the dictionary and re-populates it from flat key, value arguments."""
        self.clear()
        for key, value in _pair_up(args):
            self._append(key, value)
        return self

    def update(self: Self, *args: str | None) -> Self:
        """Sets each key, value pair. Later pairs for a key overwrite earlier ones."""
        for key, value in _pair_up(args):
            self.set(key, value)
        return self

    def updateall(self: Self, *args: str | None, remove_extra: bool = False) -> Self:
        """Updates existing values slot by slot, then appends what's left over.

        >>> OMDict("1", "1", "2", "2").updateall("1", "a", "1", "b").allitems()
        [('1', 'a'), ('2', '2'), ('1', 'b')]
        """
        self._updateall(_pair_up(args), remove_extra)
        return self

    def _updateall(self: Self, pairs: list[tuple[str, str | None]], remove_extra: bool = False) -> None:
        # key -> highest index written to during this call
        updated: dict[str, int] = {}
        for key, value in pairs:
            floor: int = updated.get(key, -1)
            entries: list[_Entry] | None = self._items.get(key)
            position: int | None = None
            if entries is not None:
                position = next((i for i, (index, _) in enumerate(entries) if index > floor), None)
            if position is not None:
                index: int = entries[position][0]
                entries[position] = (index, value)
            else:
                index = self._take_index()
                self._items.setdefault(key, []).append((index, value))
            updated[key] = index

        if remove_extra:
            for key, floor in updated.items():
                self._items[key] = [entry for entry in self._items[key] if entry[0] <= floor]

    def reverse(self: Self) -> Self:
        """Reverses the order of every item in the dictionary."""
        items: list[tuple[str, str | None]] = self.allitems()
        self.clear()
        for key, value in reversed(items):
            self._append(key, value)
        return self

    def clear(self: Self) -> None:
        self._items.clear()
        self._next_index = 0

    def copy(self: Self) -> Self:
        result: Self = self.__class__()
        for key, value in self.allitems():
            result._append(key, value)
        return result

    # Dictionary protocol

    def __getitem__(self: Self, key: str | int) -> str | None | tuple[str, str | None]:
        """omd[key] returns key's first value. omd[i] returns the i-th item of allitems()."""
        if isinstance(key, int):
            items: list[tuple[str, str | None]] = self.allitems()
            if not 0 <= key < len(items):
                raise IndexOutOfRangeError(f"index {key} is outside [0, {len(items)})")
            return items[key]
        if key not in self._items:
            raise KeyError(key)
        return self._items[key][0][1]

    def __setitem__(self: Self, key: str, value: str | None) -> None:
        self.set(key, value)

    def __delitem__(self: Self, key: str) -> None:
        if key not in self._items:
            raise KeyError(key)
        self.remove(key)

    def __contains__(self: Self, key: object) -> bool:
        return key in self._items

    def __iter__(self: Self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self: Self) -> int:
        return len(self._items)

    def __eq__(self: Self, other: object) -> bool:
        if not isinstance(other, OMDict):
            return NotImplemented
        return self.allitems() == other.allitems()

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({self.allitems()!r})"
