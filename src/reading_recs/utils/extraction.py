"""Best-effort main-text extraction from raw HTML."""

import re

from reading_recs.utils.logging import get_logger
from reading_recs.utils.reading import count_words

logger = get_logger(__name__)

_SCRIPT_BLOCK = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_STYLE_BLOCK = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
_PARAGRAPH = re.compile(r"<p[^>]*>([\s\S]*?)</p>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")

# Only this fixed set is decoded; everything else is left as-is.
_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)


class TextExtractor:
    """Pulls readable body text out of an HTML page.

    The first ``<article>`` element is preferred, then the first ``<main>``,
    then the whole document. Paragraph text is collected when present; otherwise
    all tags are stripped.
    """

    def extract_main_text(self, html: str) -> str:
        """
        Extract plain body text.

        Args:
            html: Raw markup

        Returns:
            Whitespace-collapsed text, or "" when nothing usable was found
        """
        try:
            scoped = self._tag_content(html, "article") or self._tag_content(html, "main") or html

            scoped = _SCRIPT_BLOCK.sub(" ", scoped)
            scoped = _STYLE_BLOCK.sub(" ", scoped)

            paragraphs = [_TAG.sub(" ", match) for match in _PARAGRAPH.findall(scoped)]
            base = "\n\n".join(paragraphs) if paragraphs else _TAG.sub(" ", scoped)

            return _WHITESPACE.sub(" ", self._decode_entities(base)).strip()
        except Exception as e:
            logger.warning("Text extraction failed", error=str(e))
            return ""

    def extract_with_word_count(self, html: str) -> tuple[str, int]:
        """Return extracted text together with its word count."""
        text = self.extract_main_text(html)
        return text, count_words(text)

    @staticmethod
    def _tag_content(html: str, tag: str) -> str | None:
        """Inner markup of the first ``<tag ...>...</tag>`` element, if any."""
        opening = re.compile(rf"<{tag}[^>]*>", re.IGNORECASE).search(html)
        if opening is None:
            return None

        closing = re.compile(rf"</{tag}>", re.IGNORECASE).search(html, opening.end())
        if closing is None:
            return None

        return html[opening.end() : closing.start()]

    @staticmethod
    def _decode_entities(text: str) -> str:
        for entity, replacement in _ENTITIES:
            text = text.replace(entity, replacement)
        return text
