from typeworks.utils.text import countable_length, normalize_text


class TestNormalizeText:
    def test_line_endings(self):
        assert normalize_text("a\r\nb\rc") == "a\nb\nc"

    def test_lines_are_trimmed(self):
        assert normalize_text("  one  \n\ttwo ") == "one\ntwo"

    def test_blank_runs_collapse(self):
        assert normalize_text("a\n\n\n\nb") == "a\n\nb"
        assert normalize_text("a\n  \n \n\nb") == "a\n\nb"

    def test_outer_whitespace(self):
        assert normalize_text("\n\n hello \n\n") == "hello"

    def test_empty(self):
        assert normalize_text("") == ""
        assert normalize_text(None) == ""


class TestCountableLength:
    def test_newlines_excluded(self):
        assert countable_length("ab\n\ncd") == 4

    def test_spaces_and_punctuation_count(self):
        assert countable_length("Hi, there.") == 10
