"""
Text Cleaner - multi-pass string cleaning for untrusted text.

Used for span text and image alt text. This is a string-level filter,
not an HTML parser: each pass removes one family of dangerous
substrings, in a fixed order.

Passes:
1. Script/style elements with their content, then any <...> tag
2. Character entities (&name; and &#NNN;)
3. Encoded tags (&lt;...&gt;)
4. Dangerous URI schemes (javascript:, data:, vbscript:) anywhere
5. Event handler attributes (on<word>=)
6. Script primitives (alert(, eval(, document., window.)
7. Trim and truncate

Passes 1-6 repeat until the text stops changing, so removing one
substring can never assemble a new one (e.g. "jajavascript:vascript:").

Cost is linear in the length of the input:
- Raw text is cut to RAW_LENGTH_FACTOR * max_length before any pass runs
- Every pass is a single left-to-right scan
- At most MAX_CLEANING_ROUNDS rounds run; text that is still changing
  after that is dropped (returns "")
"""

from __future__ import annotations

import logging
import re
import secrets
import string
from collections.abc import Callable
from functools import partial

from richtext_guard.core.allowlists import MAX_ALT_LENGTH, MAX_KEY_LENGTH, MAX_TEXT_LENGTH

logger = logging.getLogger(__name__)

# --- Limits ---

RAW_LENGTH_FACTOR = 4
MAX_CLEANING_ROUNDS = 8

# --- Patterns ---

ELEMENT_OPEN_PATTERN = re.compile(r"<(script|style)\b", re.IGNORECASE)
ELEMENT_CLOSE_PATTERNS = {
    "script": re.compile(r"</script\s*>", re.IGNORECASE),
    "style": re.compile(r"</style\s*>", re.IGNORECASE),
}
ENTITY_PATTERN = re.compile(r"&[a-zA-Z0-9#]+;")
ENCODED_TAG_PATTERN = re.compile(r"&lt;[^&]*&gt;", re.IGNORECASE)
PROTOCOL_PATTERN = re.compile(r"javascript:|data:|vbscript:", re.IGNORECASE)
# Whole word followed by "=": possessive, so a word is scanned once
WORD_ASSIGNMENT_PATTERN = re.compile(r"\b(\w++)\s*+=")
HANDLER_PREFIX_PATTERN = re.compile(r"on(?=\w)", re.IGNORECASE)
SCRIPT_PRIMITIVE_PATTERN = re.compile(
    r"alert\s*\(|eval\s*\(|document\.|window\.", re.IGNORECASE
)

KEY_DISALLOWED_PATTERN = re.compile(r"[^a-zA-Z0-9-]")
KEY_PREFIX = "sanitized-"
KEY_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
KEY_SUFFIX_LENGTH = 9


# --- Passes ---


def strip_script_elements(text: str) -> str:
    """
    Remove <script>/<style> elements together with their content.

    An opening tag without a matching closing tag is left for
    strip_tags. Once a closing tag is known to be missing it is never
    searched for again.
    """
    parts: list[str] = []
    pos = 0
    search_from = 0
    tag_end = -1
    unclosed: set[str] = set()

    while True:
        opening = ELEMENT_OPEN_PATTERN.search(text, search_from)
        if opening is None:
            break

        # First ">" after the tag name; reused while still ahead of us
        if tag_end < opening.end():
            tag_end = text.find(">", opening.end())
        if tag_end == -1:
            break

        name = opening.group(1).lower()
        closing = None
        if name not in unclosed:
            closing = ELEMENT_CLOSE_PATTERNS[name].search(text, tag_end + 1)
        if closing is None:
            unclosed.add(name)
            search_from = opening.start() + 1
            continue

        parts.append(text[pos : opening.start()])
        pos = search_from = closing.end()

    parts.append(text[pos:])
    return "".join(parts)


def strip_tags(text: str) -> str:
    """Remove every "<" up to and including the next ">"."""
    parts: list[str] = []
    pos = 0
    while True:
        start = text.find("<", pos)
        if start == -1:
            break
        end = text.find(">", start + 1)
        if end == -1:
            break
        parts.append(text[pos:start])
        pos = end + 1
    parts.append(text[pos:])
    return "".join(parts)


def _drop_handler(match: re.Match[str]) -> str:
    # Keep the part of the word before the first "on<word>"
    prefix = HANDLER_PREFIX_PATTERN.search(match.group(1))
    if prefix is None:
        return match.group()
    return match.group(1)[: prefix.start()]


def strip_event_handlers(text: str) -> str:
    """Remove on<word>= attribute assignments, e.g. "onclick =" or "xonload="."""
    return WORD_ASSIGNMENT_PATTERN.sub(_drop_handler, text)


CLEANING_PASSES: tuple[Callable[[str], str], ...] = (
    strip_script_elements,
    strip_tags,
    partial(ENTITY_PATTERN.sub, ""),
    partial(ENCODED_TAG_PATTERN.sub, ""),
    partial(PROTOCOL_PATTERN.sub, ""),
    strip_event_handlers,
    partial(SCRIPT_PRIMITIVE_PATTERN.sub, ""),
)


def _apply_passes(text: str) -> str:
    for clean in CLEANING_PASSES:
        text = clean(text)
    return text


def clean_text(value: object, max_length: int = MAX_TEXT_LENGTH) -> str:
    """
    Clean untrusted text for display.

    Non-string values become an empty string. Input longer than
    RAW_LENGTH_FACTOR * max_length is cut before cleaning. The result is
    trimmed and at most max_length characters long. Text that has not
    settled after MAX_CLEANING_ROUNDS rounds is dropped. Cleaning an
    already cleaned string returns it unchanged.
    """
    if not isinstance(value, str):
        return ""

    text = value[: max_length * RAW_LENGTH_FACTOR]
    for _ in range(MAX_CLEANING_ROUNDS):
        cleaned = _apply_passes(text)
        if cleaned == text:
            break
        text = cleaned
    else:
        logger.warning(
            "Text still changing after %d cleaning rounds, dropping it", MAX_CLEANING_ROUNDS
        )
        return ""

    return text.strip()[:max_length].strip()


def clean_alt_text(value: object) -> str:
    """Clean image alt text with the tighter caption cap."""
    return clean_text(value, max_length=MAX_ALT_LENGTH)


def generate_key() -> str:
    """Generate a fresh random key for blocks and spans without one."""
    suffix = "".join(secrets.choice(KEY_SUFFIX_ALPHABET) for _ in range(KEY_SUFFIX_LENGTH))
    return f"{KEY_PREFIX}{suffix}"


def clean_key(value: object) -> str:
    """
    Clean a block or span key.

    Keeps ASCII letters, digits and hyphens, capped at 50 characters.
    Falls back to a generated key when nothing usable remains.
    """
    if not isinstance(value, str):
        return generate_key()

    cleaned = KEY_DISALLOWED_PATTERN.sub("", value)[:MAX_KEY_LENGTH]
    return cleaned or generate_key()
