"""
Keyword similarity between articles.
"""
from feedpulse.core.article import Article


def calculate_similarity(first: Article, second: Article) -> float:
    """
    Jaccard similarity of two articles' keyword sets.

    Args:
        first: An article
        second: Another article

    Returns:
        ``|A & B| / |A | B|`` in [0, 1]; 0 when either article has no keyword
        set or both sets are empty
    """
    if first.keywords is None or second.keywords is None:
        return 0.0

    keywords_first = set(first.keywords)
    keywords_second = set(second.keywords)

    union = keywords_first | keywords_second
    if not union:
        return 0.0

    return len(keywords_first & keywords_second) / len(union)
