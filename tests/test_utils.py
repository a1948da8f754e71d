"""Tests for sanitization and JSON navigation helpers."""
from meta_description.utils import dig, first_string, load_json, sanitize_text, strip_tags


class TestSanitizeText:

    def test_strips_markup_and_scripts(self):
        text = sanitize_text('<style>p{}</style><p class="lead">Caf&eacute; guide</p><script>x()</script>')

        assert text == "Café guide"

    def test_removes_control_characters(self):
        assert sanitize_text("tea\x00\x07 time") == "tea time"

    def test_collapses_long_whitespace_runs(self):
        assert sanitize_text("a" + " " * 20 + "b") == "a b"

    def test_truncates_at_word_boundary(self):
        text = sanitize_text("alpha beta gamma delta", max_length=13)

        assert text == "alpha beta"

    def test_empty(self):
        assert sanitize_text("") == ""
        assert strip_tags("<br/>").strip() == ""


class TestJsonHelpers:

    def test_dig_follows_keys_and_indexes(self):
        data = {"choices": [{"message": {"content": "hi"}}]}

        assert dig(data, "choices", 0, "message", "content") == "hi"

    def test_dig_returns_none_on_shape_mismatch(self):
        assert dig({"choices": []}, "choices", 0, "message") is None
        assert dig({"choices": {"0": 1}}, "choices", 0) is None
        assert dig(None, "a") is None

    def test_first_string_skips_blank_and_non_strings(self):
        data = {"message": "  ", "error": {"message": 42}, "detail": " Bad model "}

        assert first_string(data, ("message",), ("error", "message"), ("detail",)) == "Bad model"
        assert first_string(data, ("missing",)) == ""

    def test_load_json(self):
        assert load_json('{"a": 1}') == {"a": 1}
        assert load_json("<html>") is None
        assert load_json("") is None
