"""Unit tests for HTML main-text extraction."""

import pytest

from reading_recs.utils.extraction import TextExtractor


@pytest.fixture
def extractor() -> TextExtractor:
    return TextExtractor()


class TestTextExtractor:
    """Test TextExtractor."""

    def test_prefers_article(self, extractor: TextExtractor) -> None:
        """Test the article element wins over surrounding chrome."""
        html = (
            "<html><body><nav>Menu Home About</nav>"
            "<article><p>First paragraph.</p><p>Second one.</p></article>"
            "<footer>Copyright</footer></body></html>"
        )

        text = extractor.extract_main_text(html)

        assert text == "First paragraph. Second one."

    def test_falls_back_to_main(self, extractor: TextExtractor) -> None:
        """Test main is used when there is no article."""
        html = "<body><div>Sidebar</div><MAIN class='x'><p>Body text here</p></MAIN></body>"

        assert extractor.extract_main_text(html) == "Body text here"

    def test_strips_all_tags_without_paragraphs(self, extractor: TextExtractor) -> None:
        """Test whole-document text when no paragraphs exist."""
        html = "<div>Alpha <b>beta</b></div><span>gamma</span>"

        assert extractor.extract_main_text(html) == "Alpha beta gamma"

    def test_drops_scripts_and_styles(self, extractor: TextExtractor) -> None:
        """Test script and style content is not counted."""
        html = (
            "<article><script>var words = 'many many';</script>"
            "<style>p { color: red; }</style><p>Only this</p></article>"
        )

        assert extractor.extract_main_text(html) == "Only this"

    def test_decodes_known_entities(self, extractor: TextExtractor) -> None:
        """Test the fixed entity set is decoded."""
        html = "<p>Tom&nbsp;&amp;&nbsp;Jerry &quot;say&quot; &#39;hi&#39; &lt;3 &copy;</p>"

        assert extractor.extract_main_text(html) == "Tom & Jerry \"say\" 'hi' <3 &copy;"

    def test_unclosed_article_uses_document(self, extractor: TextExtractor) -> None:
        """Test an unterminated article element is ignored."""
        html = "<article><p>Open</p>"

        assert extractor.extract_main_text(html) == "Open"

    def test_word_count(self, extractor: TextExtractor) -> None:
        """Test the word count matches the extracted text."""
        text, words = extractor.extract_with_word_count("<p>one two three</p>")

        assert text == "one two three"
        assert words == 3

    def test_empty_document(self, extractor: TextExtractor) -> None:
        """Test empty input gives no text."""
        assert extractor.extract_with_word_count("") == ("", 0)
