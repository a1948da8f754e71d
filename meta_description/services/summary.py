"""
Summary prompt construction.

The instruction asks the model for a meta description within a character
range; the (already sanitized) content follows after ": ".

Usage:
    from meta_description.services.summary import build_summary_prompt

    prompt = build_summary_prompt(content, 120, 160)
"""
from __future__ import annotations

DEFAULT_INSTRUCTION = (
    "Summarize the following text into a concise meta description between "
    "{min_length} and {max_length} characters long. Focus on the main topic and keywords. "
    "Ensure the description flows naturally and avoid cutting words mid-sentence. "
    "Output only the description text itself, without any introductory phrases "
    'like "Here is the summary:"'
)

PLACEHOLDER_MIN = "{min_length}"
PLACEHOLDER_MAX = "{max_length}"


def build_instruction(min_length: int, max_length: int, custom_prompt: str = "") -> str:
    """
    Resolve the instruction text for one provider.

    A non-empty ``custom_prompt`` replaces the default. Only the two length
    placeholders are substituted, so any other braces in a custom prompt
    are sent as written.
    """
    template = custom_prompt.strip() or DEFAULT_INSTRUCTION
    return (
        template
        .replace(PLACEHOLDER_MIN, str(min_length))
        .replace(PLACEHOLDER_MAX, str(max_length))
        .rstrip(": ")
    )


def build_summary_prompt(
    content: str,
    min_length: int,
    max_length: int,
    custom_prompt: str = "",
) -> str:
    """
    Build the full prompt sent to a provider.

    Args:
        content: Sanitized text to summarize
        min_length: Lower bound of the requested description length
        max_length: Upper bound of the requested description length
        custom_prompt: Provider-specific instruction (empty = default)

    Returns:
        Instruction and content joined by ": "
    """
    return f"{build_instruction(min_length, max_length, custom_prompt)}: {content}"
