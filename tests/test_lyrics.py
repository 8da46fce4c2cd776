"""Tests for lyric/phoneme splitting and composing."""

import pytest

from ustxconv.utils.lyrics import compose_lyric, split_lyric


class TestSplitLyric:
    """Test cases for split_lyric."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("ka [k a]", ("ka", "k a")),
            ("[k a]", ("k a", "k a")),
            ("ka", ("ka", None)),
            ("  ka   [ k a ]", ("ka", "k a")),
            ("", ("", None)),
        ],
    )
    def test_split(self, raw, expected):
        assert split_lyric(raw) == expected

    def test_bracket_not_at_end_is_plain_lyric(self):
        """A bracket group followed by more text is not a phoneme suffix."""
        assert split_lyric("[k a] ka") == ("[k a] ka", None)

    def test_only_last_group_is_phoneme(self):
        assert split_lyric("[x] ka [k a]") == ("[x] ka", "k a")

    def test_nested_brackets_not_matched(self):
        assert split_lyric("ka [k [a]]") == ("ka [k [a]]", None)


class TestComposeLyric:
    """Test cases for compose_lyric."""

    def test_compose_with_phoneme(self):
        assert compose_lyric("ka", "k a") == "ka [k a]"

    def test_compose_without_phoneme(self):
        assert compose_lyric("ka", None) == "ka"

    def test_blank_phoneme_ignored(self):
        assert compose_lyric("ka", "  ") == "ka"

    def test_compose_inverts_split(self):
        lyric, phoneme = split_lyric("ka [k a]")
        assert compose_lyric(lyric, phoneme) == "ka [k a]"
