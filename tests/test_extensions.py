# tests/test_extensions.py
"""Tests for the extension pairing rule."""
from file_switcher.components.extensions import friend_extensions, friend_file_name

EXTENSION_PAIRS = ("h,hpp", "c,cpp")


def test_first_group_returns_second():
    assert friend_extensions("h", EXTENSION_PAIRS) == "c,cpp"
    assert friend_extensions(".hpp", EXTENSION_PAIRS) == "c,cpp"


def test_second_group_returns_first():
    assert friend_extensions("cpp", EXTENSION_PAIRS) == "h,hpp"
    assert friend_extensions(".c", EXTENSION_PAIRS) == "h,hpp"


def test_unknown_extension_returns_none():
    assert friend_extensions("js", EXTENSION_PAIRS) is None
    assert friend_extensions(".css", EXTENSION_PAIRS) is None


def test_membership_is_exact():
    assert friend_extensions("H", EXTENSION_PAIRS) is None
    assert friend_extensions("hp", EXTENSION_PAIRS) is None


def test_only_one_leading_dot_is_stripped():
    assert friend_extensions("..h", EXTENSION_PAIRS) is None


def test_first_group_wins_when_both_contain_extension():
    assert friend_extensions("h", ("h,x", "h,y")) == "h,y"


def test_friend_file_name_uses_brace_group():
    assert friend_file_name("engine", ".cpp", EXTENSION_PAIRS) == "engine.{h,hpp}"
    assert friend_file_name("engine", ".h", EXTENSION_PAIRS) == "engine.{c,cpp}"


def test_friend_file_name_without_extension():
    assert friend_file_name("Makefile", "", EXTENSION_PAIRS) is None


def test_friend_file_name_without_friend_group():
    assert friend_file_name("index", ".js", EXTENSION_PAIRS) is None
