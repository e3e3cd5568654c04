from datetime import datetime

import pytest

from moviescrape import textutils


@pytest.mark.parametrize(
    ("actors", "expected"),
    [
        (["hello", "world"], "hello,world"),
        ([], "佚名"),
        (["1", "2", "3", "4", "5"], "多人作品"),
    ],
)
def test_build_authors_name(actors, expected):
    assert textutils.build_authors_name(actors) == expected


def test_build_authors_name_length_limit():
    long_name = "x" * 250
    assert textutils.build_authors_name([long_name]) == ""
    assert textutils.build_authors_name(["a", long_name]) == "a,"


def test_build_title():
    assert textutils.build_title("short") == "short"
    assert len(textutils.build_title("a" * 250)) == 200
    cut = textutils.build_title("字" * 100)
    assert len(cut.encode()) <= 200
    assert "字" * 66 == cut


def test_string_list_helpers():
    assert textutils.dedup_string_list(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
    assert textutils.string_list_to_lower(["AbC", "x"]) == ["abc", "x"]
    assert textutils.string_list_to_set(["a", "a", "b"]) == {"a", "b"}


def test_format_time_to_date():
    ts = int(datetime(2024, 3, 18, 12, 0, 0).timestamp() * 1000)
    assert textutils.format_time_to_date(ts) == "2024-03-18"


def test_time_str_to_second():
    assert textutils.time_str_to_second("01:02:03") == 3723
    assert textutils.time_str_to_second("00:00:00") == 0


@pytest.mark.parametrize("text", ["1:2", "a:b:c", "1:2:3:4", "1: 2:3"])
def test_time_str_to_second_invalid(text):
    with pytest.raises(ValueError):
        textutils.time_str_to_second(text)