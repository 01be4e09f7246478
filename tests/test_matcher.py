import pytest

from ethvanity.matcher import (
    MatchPattern,
    is_full_match,
    is_possible_pattern,
    score,
    validate_hex_pattern,
)

ADDRESS = "5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


@pytest.mark.parametrize(
    "pattern,expected",
    [
        ("", 0),
        ("5", 1),
        ("5aA", 3),
        ("5aa", 2),
        ("xyz", 0),
        ("5bAe", 3),
        (ADDRESS, 40),
    ],
)
def test_score(pattern, expected):
    assert score(ADDRESS, pattern) == expected
    assert 0 <= score(ADDRESS, pattern) <= len(pattern)


def test_full_match_requires_every_position():
    assert is_full_match(ADDRESS, "5aAeb")
    assert not is_full_match(ADDRESS, "5aaeb")
    assert is_full_match(ADDRESS, "")


@pytest.mark.parametrize("pattern", ["0", "dead", "0123456789abcdef", ""])
def test_possible_patterns(pattern):
    assert is_possible_pattern(pattern)


@pytest.mark.parametrize("pattern", ["g", "AB", "12-3", "dEad", "0x12", " 1"])
def test_impossible_patterns(pattern):
    assert not is_possible_pattern(pattern)


def test_validate_cleans_input():
    assert validate_hex_pattern("  0xdead ") == "dead"


@pytest.mark.parametrize("pattern", ["", "0x", "beeg", "DEAD", "a" * 41])
def test_validate_rejects(pattern):
    with pytest.raises(ValueError):
        validate_hex_pattern(pattern)


def test_compiled_pattern_case_sensitive():
    compiled = MatchPattern("5aa").compile()
    assert not compiled.matches(ADDRESS)
    assert MatchPattern("5aA").compile().matches(ADDRESS)


def test_compiled_pattern_case_insensitive():
    compiled = MatchPattern("5aae", case_sensitive=False).compile()
    assert compiled.matches(ADDRESS)
    assert not compiled.matches("6" + ADDRESS[1:])
