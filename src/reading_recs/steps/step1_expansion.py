"""Step 1: Query expansion."""

from reading_recs.utils.logging import get_logger

logger = get_logger(__name__)


def expand_queries(topic: str, synonyms: dict[str, str] | None = None) -> list[str]:
    """
    Derive lexical variants of a topic to search for.

    Variants are the trimmed topic, a naive singular/plural toggle, and a
    synonym-table lookup on the lower-cased topic. Duplicates are dropped and
    the first occurrence keeps its position.

    Args:
        topic: Free-text topic
        synonyms: Lower-cased topic -> broader phrase

    Returns:
        Ordered unique query variants; ``[""]`` for a blank topic

    Examples:
        >>> expand_queries("space", {"space": "astronomy"})
        ['space', 'spaces', 'astronomy']
        >>> expand_queries("  poems ")
        ['poems', 'poem']
    """
    trimmed = topic.strip()
    if not trimmed:
        return [""]

    variants = [trimmed]
    if trimmed.endswith("s"):
        variants.append(trimmed[:-1])
    else:
        variants.append(f"{trimmed}s")

    synonym = (synonyms or {}).get(trimmed.lower())
    if synonym:
        variants.append(synonym)

    queries = [variant for variant in dict.fromkeys(variants) if variant]
    logger.debug("Expanded topic", topic=trimmed, queries=queries)
    return queries
