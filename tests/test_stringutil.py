import pytest

from hierlog.stringutil import split, trim, vform


def test_trim_strips_all_whitespace_kinds():
    assert trim("  \t abc \r\n") == "abc"


def test_trim_keeps_inner_whitespace():
    assert trim(" a b ") == "a b"


def test_trim_blank_and_empty():
    assert trim("   \t") == ""
    assert trim("") == ""


def test_split_all():
    assert split("a,b,c", ",") == ["a", "b", "c"]


def test_split_limited():
    assert split("a,b,c", ",", 2) == ["a", "b,c"]


def test_split_zero_segments_still_returns_whole():
    assert split("a,b", ",", 0) == ["a,b"]


def test_split_empty_string():
    assert split("", ",") == [""]


def test_split_keeps_empty_segments():
    assert split(",x,", ",") == ["", "x", ""]


@pytest.mark.parametrize("text", ["a.b.c", "noseparator", "..", "x.y"])
def test_split_join_round_trip(text):
    assert ".".join(split(text, ".")) == text


def test_vform_formats_arguments():
    assert vform("%s-%d", "x", 5) == "x-5"


def test_vform_without_arguments():
    assert vform("100%%") == "100%"


def test_vform_missing_argument_raises():
    with pytest.raises(TypeError):
        vform("%d")