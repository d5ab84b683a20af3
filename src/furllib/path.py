"""furllib.path
URL and fragment paths as lists of decoded segments.
"""

import logging

from typing import Iterable, Self

from .codec import decode, encode_path_segment
from .errors import InvalidStateError

logger = logging.getLogger(__name__)


class Path:
    """A path made of zero or more decoded segments.

    A trailing '/' is kept as an empty last segment, so "/a/b/" has the
    segments ["a", "b", ""] and is a directory, while "/a/b" is a file.
    Segments are always decoded: assign "a b", not "a%20b".

    A path that belongs to a URL with a netloc is always absolute, because
    the '/' is what separates the path from the netloc. Setting isabsolute to
    False on such a path raises InvalidStateError.
    """

    def __init__(self: Self, segments: Iterable[str] | None = None, absolute: bool = False) -> None:
        self._segments: list[str] = list(segments) if segments is not None else []
        self._isabsolute: bool = absolute
        self._netloc_forced: bool = False

    @classmethod
    def parse(cls, path: str | None) -> Self:
        """Parses an encoded path string like "/a/b%20c/"."""
        if not path:
            return cls()
        absolute: bool = path.startswith("/")
        if absolute:
            path = path[1:]
        return cls([decode(segment) for segment in path.split("/")], absolute)

    @classmethod
    def from_segments(cls, segments: Iterable[str], absolute: bool = True) -> Self:
        return cls(segments, absolute)

    def load(self: Self, path: "str | Iterable[str] | Path | None") -> Self:
        """Replaces this path with path, which can be an encoded string, a
        list of decoded segments (taken as absolute) or another Path.
        """
        other: Path
        if path is None or isinstance(path, str):
            other = Path.parse(path)
        elif isinstance(path, Path):
            other = path
        else:
            other = Path.from_segments(path)
        self._segments = list(other._segments)
        self._isabsolute = other._isabsolute
        return self

    def use_netloc(self: Self, has_netloc: bool) -> None:
        """Called by the owning URL whenever its netloc may have changed."""
        self._netloc_forced = has_netloc

    @property
    def segments(self: Self) -> list[str]:
        return self._segments

    @segments.setter
    def segments(self: Self, segments: Iterable[str]) -> None:
        self._segments = list(segments)

    @property
    def isabsolute(self: Self) -> bool:
        return self._netloc_forced or self._isabsolute

    @isabsolute.setter
    def isabsolute(self: Self, isabsolute: bool) -> None:
        if self._netloc_forced and not isabsolute:
            raise InvalidStateError(
                "Path.isabsolute is True and read-only for URLs with a netloc"
                " (a username, password, host or port). A URL path must start"
                " with a '/' to separate itself from the netloc."
            )
        self._isabsolute = isabsolute

    @property
    def isdir(self: Self) -> bool:
        """True if the path is empty or ends in '/'."""
        return not self._segments or self._segments[-1] == ""

    @property
    def isfile(self: Self) -> bool:
        return not self.isdir

    def append(self: Self, segment: str) -> Self:
        """Adds one decoded segment. On a directory the new segment goes in
        front of the trailing '/', so "a/b/" becomes "a/b/c/".
        """
        if self._segments and self._segments[-1] == "":
            self._segments.insert(len(self._segments) - 1, segment)
        else:
            self._segments.append(segment)
        return self

    def add(self: Self, path: str | Iterable[str]) -> Self:
        """Joins path, an encoded string or a list of decoded segments, onto the end."""
        newsegments: list[str]
        if isinstance(path, str):
            if not self._segments and path.startswith("/"):
                self._isabsolute = True
            newsegments = Path.parse(path).segments
        else:
            newsegments = list(path)
        if not newsegments:
            return self

        if self._segments and self._segments[-1] == "":
            self._segments.pop()
        self._segments.extend(newsegments)
        return self

    def remove(self: Self, path: str | Iterable[str] | bool) -> Self:
        """Removes path from the end of this path if it's there, leaving a
        directory behind. True removes the whole path.
        """
        if path is True:
            self._segments = []
            self._isabsolute = False
            return self

        rsegments: list[str] = Path.parse(path).segments if isinstance(path, str) else list(path)
        count: int = len(rsegments)
        if count and self._segments[-count:] == rsegments:
            self._segments = self._segments[:-count] + [""]
        return self

    def normalize(self: Self) -> Self:
        """Drops '.' segments, and every '..' together with the segment before
        it. A '..' with nothing before it is kept. Turns "/a/./b/../c/" into "/a/c/".
        """
        original: list[str] = self._segments
        segments: list[str] = [segment for segment in original if segment != "."]

        masked: set[int] = set()
        for i, segment in enumerate(segments):
            if segment != "..":
                continue
            j: int = i - 1
            while j in masked:
                j -= 1
            if j >= 0 and segments[j] != "..":
                masked.update((j, i))
        segments = [segment for i, segment in enumerate(segments) if i not in masked]

        if original and self.isdir and (not segments or segments[-1] != ""):
            segments.append("")

        logger.debug("normalized path %r to %r", original, segments)
        self._segments = segments
        return self

    def copy(self: Self) -> Self:
        return self.__class__(self._segments, self._isabsolute)

    def __str__(self: Self) -> str:
        encoded: str = "/".join(encode_path_segment(segment) for segment in self._segments)
        return f"/{encoded}" if self.isabsolute else encoded

    def __bool__(self: Self) -> bool:
        return len(self._segments) > 0

    def __eq__(self: Self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._segments == other._segments and self.isabsolute == other.isabsolute

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}('{self}')"
