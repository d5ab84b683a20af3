import pytest

from furllib.errors import InvalidStateError
from furllib.path import Path


def test_parse_directory():
    path = Path.parse("/a/b/")
    assert path.segments == ["a", "b", ""]
    assert path.isabsolute
    assert path.isdir
    assert not path.isfile


def test_parse_relative_file():
    path = Path.parse("a/b")
    assert path.segments == ["a", "b"]
    assert not path.isabsolute
    assert path.isfile


def test_parse_empty():
    path = Path.parse("")
    assert path.segments == []
    assert path.isdir
    assert not path
    assert str(path) == ""


def test_segments_are_encoded_and_decoded():
    segments = ["path segments are", "decoded", '<>[]"#']
    path = Path.from_segments(segments)
    assert str(path) == "/path%20segments%20are/decoded/%3C%3E%5B%5D%22%23"
    assert Path.parse(str(path)).segments == segments


def test_plus_decodes_to_space():
    path = Path.parse("a+b")
    assert path.segments == ["a b"]
    assert str(path) == "a%20b"


def test_absolute_without_segments():
    assert str(Path.from_segments([])) == "/"


def test_append():
    assert str(Path.parse("a/b/").append("c")) == "a/b/c/"
    assert str(Path.parse("a/b").append("c")) == "a/b/c"
    assert str(Path().append("c d")) == "c%20d"


def test_add():
    path = Path.parse("/a/b/").add("c/d")
    assert path.segments == ["a", "b", "c", "d"]
    path.add(["e f"])
    assert str(path) == "/a/b/c/d/e%20f"


def test_add_to_empty_path():
    path = Path().add("/a/")
    assert path.isabsolute
    assert str(path) == "/a/"


def test_remove():
    path = Path.parse("/a/b/c").remove("b/c")
    assert path.segments == ["a", ""]
    assert str(path) == "/a/"
    assert str(path.remove("x")) == "/a/"
    assert str(path.remove(True)) == ""


@pytest.mark.parametrize(
    "before, after",
    [
        ("/a/./b/../c/", "/a/c/"),
        ("a/b/../../c", "c"),
        ("../a", "../a"),
        ("/a.b/c", "/a.b/c"),
        ("/a/b/c", "/a/b/c"),
    ],
)
def test_normalize(before, after):
    assert str(Path.parse(before).normalize()) == after


def test_isabsolute_forced_by_netloc():
    path = Path.parse("a")
    path.use_netloc(True)
    assert path.isabsolute
    assert str(path) == "/a"
    with pytest.raises(InvalidStateError):
        path.isabsolute = False
    assert path.isabsolute

    path.use_netloc(False)
    assert not path.isabsolute
    path.isabsolute = True
    assert str(path) == "/a"


def test_load():
    path = Path.parse("/x")
    path.load("a/b")
    assert str(path) == "a/b"
    path.load(["c"])
    assert str(path) == "/c"
    path.load(Path.parse("d/"))
    assert str(path) == "d/"


def test_copy_and_equality():
    path = Path.parse("/a/b")
    other = path.copy()
    assert other == path
    other.append("c")
    assert other != path
    assert path == Path.from_segments(["a", "b"])
    assert repr(path) == "Path('/a/b')"
