"""furllib.codec
Percent-encoding and decoding for the individual URL components.
"""

from urllib.parse import quote, unquote, unquote_plus

# pchar = unreserved / pct-encoded / sub-delims / ":" / "@"
# '+' is left out so that it can't be read back as an encoded space.
PATH_SAFE: str = "!$&'()*,;=:@"

# query = *( pchar / "/" / "?" ), minus the pair delimiters '&', '=' and ';',
# and minus '+' and ',', which get escaped.
QUERY_SAFE: str = "!$'()*/:?@"

# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
# ':' is escaped here because it splits the username from the password.
USERINFO_SAFE: str = "!$&'()*+,;="


def encode(raw: str | None, safe: str = PATH_SAFE) -> str | None:
    """Percent-encodes everything in raw that isn't unreserved or in safe.
    Spaces always come out as %20, never as '+'.
    """
    if raw is None:
        return None
    return quote(raw, safe=safe)


def decode(encoded: str | None) -> str | None:
    """Reverses percent-encoding, treating '+' as a space.
    Malformed escapes like '%', '%2' or '%zz' are passed through as-is.
    """
    if encoded is None:
        return None
    return unquote_plus(encoded, errors="replace")


def encode_path_segment(segment: str | None) -> str | None:
    return encode(segment, PATH_SAFE)


def encode_query_component(component: str | None) -> str | None:
    return encode(component, QUERY_SAFE)


def encode_userinfo(userinfo: str | None) -> str | None:
    return encode(userinfo, USERINFO_SAFE)


def decode_userinfo(encoded: str | None) -> str | None:
    """Like decode(), except '+' stays a literal plus."""
    if encoded is None:
        return None
    return unquote(encoded, errors="replace")
