import pytest

from furllib.codec import decode, decode_userinfo, encode, encode_path_segment, encode_query_component, encode_userinfo


def test_encode_spaces_as_percent_20():
    assert encode("a b") == "a%20b"


def test_encode_never_leaves_plus():
    assert encode_path_segment("a+b") == "a%2Bb"
    assert encode_query_component("a+b") == "a%2Bb"


def test_encode_none():
    assert encode(None) is None
    assert decode(None) is None


def test_encode_query_component_escapes_delimiters():
    assert encode_query_component("a&b=c,d") == "a%26b%3Dc%2Cd"
    assert encode_query_component("/path?x:y@z") == "/path?x:y@z"


def test_encode_path_segment_keeps_sub_delims():
    assert encode_path_segment("!a=dict&of=args") == "!a=dict&of=args"
    assert encode_path_segment("a/b") == "a%2Fb"


def test_encode_userinfo_escapes_separators():
    assert encode_userinfo("p@ss:w") == "p%40ss%3Aw"


def test_decode_plus_is_space():
    assert decode("a+b%20c") == "a b c"


@pytest.mark.parametrize("malformed", ["%", "%2", "%zz", "100%"])
def test_decode_passes_malformed_escapes_through(malformed):
    assert decode(malformed) == malformed


def test_decode_invalid_utf8():
    assert decode("%FF") == "\ufffd"


def test_decode_userinfo_keeps_plus():
    assert decode_userinfo("p+w%40") == "p+w@"
