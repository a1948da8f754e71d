"""Tests for summary prompt construction."""
from meta_description.services.summary import (
    DEFAULT_INSTRUCTION,
    build_instruction,
    build_summary_prompt,
)


class TestBuildSummaryPrompt:

    def test_default_instruction_with_bounds(self):
        prompt = build_summary_prompt("A post about tea.", 120, 160)

        assert prompt.startswith("Summarize the following text into a concise meta description between 120 and 160")
        assert prompt.endswith(': A post about tea.')
        assert "{min_length}" not in prompt

    def test_custom_prompt_replaces_default(self):
        prompt = build_summary_prompt("Body", 50, 70, custom_prompt="Write {min_length}-{max_length} chars in French")

        assert prompt == "Write 50-70 chars in French: Body"

    def test_trailing_colon_in_custom_prompt_is_not_doubled(self):
        prompt = build_summary_prompt("Body", 1, 2, custom_prompt="Describe this:")

        assert prompt == "Describe this: Body"

    def test_other_braces_are_left_alone(self):
        instruction = build_instruction(1, 2, custom_prompt="Keep {brand} and {max_length}")

        assert instruction == "Keep {brand} and 2"

    def test_blank_custom_prompt_uses_default(self):
        assert build_instruction(120, 160, "   ") == build_instruction(120, 160)
        assert "{max_length}" in DEFAULT_INSTRUCTION
