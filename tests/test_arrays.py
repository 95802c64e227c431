import pytest

from pycfgfile.arrays import join_array_string, split_array_string
from pycfgfile.configfile import ConfigFile


def test_split_braced_quoted_elements() -> None:
    assert split_array_string('{"1", "2", \'test\'}') == ["1", "2", "test"]


def test_split_without_braces() -> None:
    assert split_array_string("a, b ,c") == ["a", "b", "c"]


def test_split_malformed_braces_degrades_to_raw_split() -> None:
    assert split_array_string("{a, b") == ["{a", "b"]


@pytest.mark.parametrize("text", ["", "{}"])
def test_split_empty(text: str) -> None:
    assert split_array_string(text) == []


def test_join() -> None:
    assert join_array_string(["a", "b", "c"]) == "{a,b,c}"
    assert join_array_string([]) == "{}"


def test_join_then_split_gives_back_items() -> None:
    items = ["alpha", "beta", "42", "x y"]
    assert split_array_string(join_array_string(items)) == items


def test_config_file_exposes_codec() -> None:
    assert ConfigFile.split_array_string("{1,2}") == ["1", "2"]
    assert ConfigFile.join_array_string(("1", "2")) == "{1,2}"
