"""
Utility functions for the meta description service.

Provides common functionality for:
- Input sanitization
- Safe lookups into decoded vendor JSON
- Text processing utilities
"""
from __future__ import annotations

import html
import json
import re
import unicodedata
from typing import Any

from meta_description.config import get_logger

logger = get_logger("utils")


# =============================================================================
# Input Sanitization
# =============================================================================

_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')
_EXCESSIVE_WHITESPACE = re.compile(r'\s{10,}')
_NULL_BYTES = re.compile(r'\x00')
_SCRIPT_STYLE = re.compile(r'<(script|style)\b[^>]*>.*?</\1\s*>', re.I | re.S)
_TAGS = re.compile(r'<[^>]*>')


def strip_tags(text: str) -> str:
    """
    Remove HTML markup from post content.

    Script and style blocks are dropped with their bodies, every other tag
    is removed and entities are unescaped.
    """
    text = _SCRIPT_STYLE.sub(" ", text)
    text = _TAGS.sub(" ", text)
    return html.unescape(text)


def sanitize_text(text: str, max_length: int | None = None) -> str:
    """
    Sanitize user input text for safe processing.

    - Strips HTML tags
    - Normalizes Unicode (NFC form)
    - Removes null bytes and control characters
    - Collapses excessive whitespace
    - Strips leading/trailing whitespace
    - Optionally truncates to max_length

    Args:
        text: Input text to sanitize
        max_length: Maximum allowed length (None for no limit)

    Returns:
        Sanitized text string
    """
    if not text:
        return ""

    text = strip_tags(text)
    text = unicodedata.normalize("NFC", text)
    text = _NULL_BYTES.sub("", text)
    text = _CONTROL_CHARS.sub("", text)
    text = _EXCESSIVE_WHITESPACE.sub(" ", text)
    text = text.strip()

    if max_length and len(text) > max_length:
        text = truncate_text(text, max_length, suffix="")
        logger.debug("Text truncated to %d characters", max_length)

    return text


# =============================================================================
# JSON Navigation
# =============================================================================

def dig(data: Any, *path: str | int) -> Any:
    """
    Follow a path of keys and indexes into decoded JSON.

    Returns None as soon as a step does not exist or has the wrong type,
    so vendor responses with unexpected shapes never raise.

    Example:
        >>> dig({"choices": [{"message": {"content": "hi"}}]}, "choices", 0, "message", "content")
        'hi'
    """
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
        elif not isinstance(current, dict) or step not in current:
            return None
        current = current[step]
    return current


def first_string(data: Any, *paths: tuple[str | int, ...]) -> str:
    """Return the first non-empty string found among ``paths``, else ""."""
    for path in paths:
        value = dig(data, *path)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def load_json(raw: str) -> Any:
    """Decode a raw response body, returning None when it is not JSON."""
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


# =============================================================================
# Text Processing Utilities
# =============================================================================

def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate text to max_length, adding suffix if truncated.

    Attempts to truncate at word boundaries when possible.
    """
    if len(text) <= max_length:
        return text

    target_length = max_length - len(suffix)
    if target_length <= 0:
        return suffix[:max_length]

    truncated = text[:target_length]
    last_space = truncated.rfind(" ")

    if last_space > target_length * 0.7:  # Only if not too far back
        truncated = truncated[:last_space]

    return truncated.rstrip() + suffix

