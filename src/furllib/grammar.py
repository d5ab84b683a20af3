"""furllib.grammar
Splits a URL string into its raw components:

    [scheme "://"] [username [":" password] "@"] [host] [":" port] [path] ["?" query] ["#" fragment]

This is a pragmatic subset of RFC 3986, not a validator for it. Each
component is located here and handed on still encoded; decoding is up to the
Path, Query and Fragment classes that take them over.
"""

import dataclasses
import logging
import re

from typing import Self

from .errors import ParseError

logger = logging.getLogger(__name__)

# Each of these ABNF rules is from RFC 3986 or 5234.

# ALPHA = %x41-5A / %x61-7A
_ALPHA: str = r"[A-Za-z]"

# DIGIT = %x30-39
_DIGIT: str = r"[0-9]"

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
_HEXDIG: str = rf"(?:{_DIGIT}|[A-Fa-f])"

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
_UNRESERVED: str = rf"(?:{_ALPHA}|{_DIGIT}|[-._~])"

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
_SUB_DELIMS: str = r"[!$&'()*+,;=]"

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME: str = rf"(?P<scheme>{_ALPHA}(?:{_ALPHA}|{_DIGIT}|[+\-.])*)"

# dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
_DEC_OCTET: str = rf"(?:{_DIGIT}|[1-9]{_DIGIT}|1{_DIGIT}{{2}}|2[0-4]{_DIGIT}|25[0-5])"

# IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet
_IPV4ADDRESS: str = rf"{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}"

# h16 = 1*4HEXDIG
_H16: str = rf"(?:{_HEXDIG}{{1,4}})"

# ls32 = ( h16 ":" h16 ) / IPv4address
_LS32: str = rf"(?:{_H16}:{_H16}|{_IPV4ADDRESS})"

# IPv6address =                                      6( h16 ":" ) ls32
#                       /                       "::" 5( h16 ":" ) ls32
#                       / [               h16 ] "::" 4( h16 ":" ) ls32
#                       / [ *1( h16 ":" ) h16 ] "::" 3( h16 ":" ) ls32
#                       / [ *2( h16 ":" ) h16 ] "::" 2( h16 ":" ) ls32
#                       / [ *3( h16 ":" ) h16 ] "::"    h16 ":"   ls32
#                       / [ *4( h16 ":" ) h16 ] "::"              ls32
#                       / [ *5( h16 ":" ) h16 ] "::"              h16
#                       / [ *6( h16 ":" ) h16 ] "::"
_IPV6ADDRESS: str = (
    "(?:"
    + r"|".join(
        (
                                           rf"(?:{_H16}:){{6}}{_LS32}",
                                         rf"::(?:{_H16}:){{5}}{_LS32}",
                              rf"(?:{_H16})?::(?:{_H16}:){{4}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,1}}{_H16})?::(?:{_H16}:){{3}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,2}}{_H16})?::(?:{_H16}:){{2}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,3}}{_H16})?::(?:{_H16}:){_LS32}",
            rf"(?:(?:{_H16}:){{0,4}}{_H16})?::{_LS32}",
            rf"(?:(?:{_H16}:){{0,5}}{_H16})?::{_H16}",
            rf"(?:(?:{_H16}:){{0,6}}{_H16})?::",
        )
    )
    + ")"
)

# IPvFuture = "v" 1*HEXDIG "." 1*( unreserved / sub-delims / ":" )
_IPVFUTURE: str = rf"v{_HEXDIG}+\.(?:{_UNRESERVED}|{_SUB_DELIMS}|:)+"

_SCHEME_PREFIX_PAT: re.Pattern[str] = re.compile(rf"{_SCHEME}://")
_IP_LITERAL_PAT: re.Pattern[str] = re.compile(rf"{_IPV6ADDRESS}|{_IPVFUTURE}")
_PORT_PAT: re.Pattern[str] = re.compile(rf"{_DIGIT}+")

# Characters that can never appear in a registered name, encoded or not.
_BAD_HOST_CHAR_PAT: re.Pattern[str] = re.compile(r"[\s<>\"{}|\\^`\[\]]")

_MAX_PORT: int = 65535


@dataclasses.dataclass
class UrlComponents:
    """The components of a URL as they appeared in the parsed string.

    None means the component was absent. An empty string means it was
    present but empty, e.g. raw_scheme == "" for "//host/path".
    Scheme and host are lowercased. Everything else is still percent-encoded.
    """

    raw_scheme: str | None = None
    raw_username: str | None = None
    raw_password: str | None = None
    raw_host: str | None = None
    raw_port: str | None = None
    raw_path: str = ""
    raw_query: str | None = None
    raw_fragment: str | None = None

    @property
    def port(self: Self) -> int | None:
        if self.raw_port is not None and len(self.raw_port) > 0:
            return int(self.raw_port, base=10)
        return None


class _Parser:
    """Recursive-descent parser over one URL string. Positions are offsets into data."""

    def __init__(self: Self, data: str) -> None:
        self.data: str = data
        self.pos: int = 0

    def _peek(self: Self) -> str:
        return self.data[self.pos] if self.pos < len(self.data) else ""

    def _take_until(self: Self, stops: str) -> str:
        start: int = self.pos
        while self.pos < len(self.data) and self.data[self.pos] not in stops:
            self.pos += 1
        return self.data[start : self.pos]

    def parse(self: Self) -> UrlComponents:
        result: UrlComponents = UrlComponents()

        m: re.Match[str] | None = _SCHEME_PREFIX_PAT.match(self.data, self.pos)
        if m is not None:
            result.raw_scheme = m["scheme"].lower()
            self.pos = m.end()
            self._authority(result)
        elif self.data.startswith("//", self.pos):
            # Protocol relative URL.
            result.raw_scheme = ""
            self.pos += len("//")
            self._authority(result)

        result.raw_path = self._take_until("?#")

        if self._peek() == "?":
            self.pos += 1
            result.raw_query = self._take_until("#")

        if self._peek() == "#":
            self.pos += 1
            result.raw_fragment = self.data[self.pos :]
            self.pos = len(self.data)

        return result

    def _authority(self: Self, result: UrlComponents) -> None:
        start: int = self.pos
        authority: str = self._take_until("/?#")
        username, password, host, port = _split_netloc(authority, start)
        result.raw_username = username
        result.raw_password = password
        result.raw_host = host
        result.raw_port = port


def _split_netloc(
    netloc: str, offset: int = 0
) -> tuple[str | None, str | None, str, str | None]:
    """user:pass@host:port -> (user, pass, host, port), each still encoded.
    offset is where netloc starts in the string being parsed, for error positions.
    """
    username: str | None = None
    password: str | None = None

    userinfo, at, hostport = netloc.rpartition("@")
    if at:
        user, colon, secret = userinfo.partition(":")
        username = user
        password = secret if colon else None
        offset += len(userinfo) + len(at)

    host: str
    port: str | None = None
    if hostport.startswith("["):
        close: int = hostport.find("]")
        if close < 0:
            raise ParseError("unterminated IP literal in host", hostport, offset)
        literal: str = hostport[1:close]
        if not _IP_LITERAL_PAT.fullmatch(literal):
            raise ParseError("invalid IP literal in host", literal, offset + 1)
        host = hostport[: close + 1].lower()
        rest: str = hostport[close + 1 :]
        if rest and not rest.startswith(":"):
            raise ParseError("unexpected text after IP literal", rest, offset + close + 1)
        if rest:
            port = rest[1:]
    else:
        name, colon, port_text = hostport.partition(":")
        validate_host(name, offset)
        host = name.lower()
        if colon:
            port = port_text

    if port is not None:
        port_offset: int = offset + len(hostport) - len(port)
        if port == "":
            port = None
        else:
            # Get rid of leading 0s.
            port = str(parse_port(port, port_offset))

    return username, password, host, port


def validate_host(host: str, offset: int = 0) -> None:
    """Raises ParseError if host can't be a domain name, IPv4 or bracketed IP literal."""
    if host.startswith("["):
        if not host.endswith("]"):
            raise ParseError("unterminated IP literal in host", host, offset)
        if not _IP_LITERAL_PAT.fullmatch(host[1:-1]):
            raise ParseError("invalid IP literal in host", host[1:-1], offset + 1)
        return
    m: re.Match[str] | None = _BAD_HOST_CHAR_PAT.search(host)
    if m is not None:
        raise ParseError("invalid character in host", host, offset + m.start())
    if ":" in host:
        raise ParseError("invalid character in host", host, offset + host.index(":"))


def parse_port(text: str, offset: int = 0) -> int:
    """Parses a port number in 1-65535."""
    if not _PORT_PAT.fullmatch(text):
        raise ParseError("port is not a number", text, offset)
    port: int = int(text, base=10)
    if not 0 < port <= _MAX_PORT:
        raise ParseError(f"port is outside 1-{_MAX_PORT}", text, offset)
    return port


def parse_netloc(netloc: str) -> tuple[str | None, str | None, str, int | None]:
    """Parses a bare user:pass@host:port string, as accepted by Furl.netloc."""
    username, password, host, port = _split_netloc(netloc)
    return username, password, host, int(port) if port is not None else None


def parse_url(data: str) -> UrlComponents:
    """Splits data into UrlComponents. The parse either succeeds as a whole or raises ParseError."""
    try:
        result: UrlComponents = _Parser(data).parse()
    except ParseError as e:
        logger.debug("failed to parse %r: %s", data, e)
        raise
    logger.debug("parsed %r into %r", data, result)
    return result
