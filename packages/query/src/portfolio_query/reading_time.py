"""Reading-time estimate for markdown post bodies."""

from __future__ import annotations

import math
import re
from typing import Any

from .constants import MIN_READING_TIME_MINUTES, WORDS_PER_MINUTE

_CODE_BLOCK_RE = re.compile(r"```[\s\S]*?```")
_INLINE_CODE_RE = re.compile(r"`[^`]*`")
_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
_FORMATTING_RE = re.compile(r"[#*_~`]")
_NEWLINES_RE = re.compile(r"\n+")


def strip_markdown(content: str) -> str:
    text = _CODE_BLOCK_RE.sub("", content)
    text = _INLINE_CODE_RE.sub("", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _FORMATTING_RE.sub("", text)
    return _NEWLINES_RE.sub(" ", text).strip()


def calculate_reading_time(content: Any) -> int:
    """Minutes to read *content* at 200 wpm, never less than one."""
    if not content or not isinstance(content, str):
        return MIN_READING_TIME_MINUTES

    word_count = len(strip_markdown(content).split())
    return max(MIN_READING_TIME_MINUTES, math.ceil(word_count / WORDS_PER_MINUTE))
