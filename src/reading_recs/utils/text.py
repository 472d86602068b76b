"""Text normalization helpers shared by deduplication and ranking."""

import re

_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9 ]")
_HTML_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")


def token_set(text: str) -> set[str]:
    """
    Tokenize text into a set of lower-case words.

    Anything outside ``[a-z0-9 ]`` becomes a space; tokens of one character are dropped.

    Examples:
        >>> sorted(token_set("The Stoic's Way, Part 2"))
        ['part', 'stoic', 'the', 'way']
    """
    normalized = _NON_TOKEN_CHARS.sub(" ", text.lower())
    return {token for token in normalized.split(" ") if len(token) > 1}


def normalize_title(title: str) -> str:
    """
    Normalize a title for duplicate detection.

    Examples:
        >>> normalize_title("Meditations: Book I")
        'meditations book i'
    """
    return _NON_TOKEN_CHARS.sub("", title.lower())


def strip_html_tags(text: str) -> str:
    """Remove markup tags, collapse whitespace and trim."""
    without_tags = _HTML_TAG.sub("", text)
    return _WHITESPACE.sub(" ", without_tags).strip()
