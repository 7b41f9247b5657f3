"""
Plain text extraction for search and metadata.

The public helpers always sanitize first, so derived text carries the
same guarantees as rendered output. Callers that already hold sanitized
blocks use join_block_text and count_words_in_text directly.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from richtext_guard.core.entities import SanitizedBlock, SanitizedTextBlock
from richtext_guard.core.services.sanitizer import sanitize_portable_text

# Hiragana, katakana and CJK unified ideographs count one word per character
CJK_CHAR_PATTERN = re.compile(r"[\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF]")
ALNUM_WORD_PATTERN = re.compile(r"[a-zA-Z0-9]+")


def join_block_text(blocks: Sequence[SanitizedBlock]) -> str:
    """Join the text of every span in every text block with single spaces."""
    texts = [
        span.text
        for block in blocks
        if isinstance(block, SanitizedTextBlock)
        for span in block.children
    ]
    return " ".join(texts).strip()


def count_words_in_text(text: str) -> int:
    """
    Count words in a language-aware way.

    Each CJK character counts as one word, plus each run of ASCII letters
    and digits.
    """
    return len(CJK_CHAR_PATTERN.findall(text)) + len(ALNUM_WORD_PATTERN.findall(text))


def extract_plain_text(raw_blocks: object) -> str:
    return join_block_text(sanitize_portable_text(raw_blocks))


def count_characters(raw_blocks: object) -> int:
    return len(extract_plain_text(raw_blocks))


def count_words(raw_blocks: object) -> int:
    return count_words_in_text(extract_plain_text(raw_blocks))
