"""Utility functions and helpers."""

from reading_recs.utils.cache import ResultCache
from reading_recs.utils.config_loader import load_service_config, load_yaml_config
from reading_recs.utils.extraction import TextExtractor
from reading_recs.utils.links import is_http_url, is_reachable
from reading_recs.utils.logging import get_logger, setup_logging
from reading_recs.utils.reading import count_words, estimated_minutes, max_words
from reading_recs.utils.text import normalize_title, strip_html_tags, token_set

__all__ = [
    "ResultCache",
    "setup_logging",
    "get_logger",
    "load_yaml_config",
    "load_service_config",
    "TextExtractor",
    "is_http_url",
    "is_reachable",
    "count_words",
    "estimated_minutes",
    "max_words",
    "normalize_title",
    "strip_html_tags",
    "token_set",
]
