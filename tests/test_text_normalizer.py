"""
Tests for whitespace normalization and line splitting.
"""

from src.normalization import TextNormalizer, normalize_text, split_lines


class TestTextNormalizer:

    def setup_method(self):
        self.normalizer = TextNormalizer()

    def test_crlf_tabs_and_space_runs(self):
        text = "Acme\t Store\r\n\r\nTotal  5.00 "
        assert self.normalizer.normalize(text) == "Acme Store\n\nTotal 5.00"
        assert self.normalizer.to_lines(text) == ("Acme Store", "Total 5.00")

    def test_lone_carriage_return_is_a_line_break(self):
        assert self.normalizer.to_lines("Acme\rTotal 5.00") == ("Acme", "Total 5.00")

    def test_non_breaking_spaces_collapse(self):
        assert self.normalizer.to_lines("Total\u00a0\u00a05.00") == ("Total 5.00",)
        assert self.normalizer.to_lines("Total \u00a05.00") == ("Total 5.00",)

    def test_single_non_breaking_space_is_kept(self):
        assert self.normalizer.to_lines("Acme\u00a0Store") == ("Acme\u00a0Store",)

    def test_lines_are_trimmed_and_blank_lines_dropped(self):
        lines = self.normalizer.to_lines("   Bread  \n \t \n  Milk\n")
        assert lines == ("Bread", "Milk")

    def test_empty_input(self):
        assert self.normalizer.normalize("") == ""
        assert self.normalizer.to_lines("") == ()
        assert self.normalizer.to_lines("  \n\t\n") == ()


def test_module_shortcuts():
    assert normalize_text("a\tb") == "a b"
    assert split_lines("a\r\nb") == ("a", "b")
