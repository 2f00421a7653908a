"""
Keyword extraction for FeedPulse.
"""
import re
from collections import Counter
from typing import Iterable, List, Optional

from feedpulse.config import get_config

STOP_WORDS = frozenset([
    'the', 'and', 'a', 'an', 'in', 'on', 'at', 'to', 'for', 'of',
    'with', 'by', 'as', 'is', 'are', 'was', 'were', 'be', 'this', 'that',
])

PUNCTUATION_PATTERN = re.compile(r'[^\w\s]')


class KeywordExtractor:
    """
    Frequency-based keyword extractor.

    Keywords are the most frequent tokens after lower-casing, stripping
    punctuation and dropping stop words and short tokens. Ties keep the order
    in which the words first appear in the text.
    """
    def __init__(
        self,
        max_keywords: Optional[int] = None,
        min_length: Optional[int] = None,
        stop_words: Optional[Iterable[str]] = None,
    ):
        """
        Initialize the extractor.

        Args:
            max_keywords: Maximum number of keywords to return
            min_length: Minimum token length to be considered a keyword
            stop_words: Words that are never keywords
        """
        self.max_keywords = max_keywords if max_keywords is not None else get_config('keywords.max_keywords', 10)
        self.min_length = min_length if min_length is not None else get_config('keywords.min_length', 4)
        self.stop_words = frozenset(stop_words) if stop_words is not None else STOP_WORDS

    def tokenize(self, text: str) -> List[str]:
        """
        Split text into candidate keyword tokens.

        Args:
            text: Plain text to tokenize

        Returns:
            Lower-cased tokens that pass the length and stop-word filters
        """
        words = PUNCTUATION_PATTERN.sub('', text.lower()).split()
        return [
            word for word in words
            if len(word) >= self.min_length and word not in self.stop_words
        ]

    def extract_keywords(self, text: Optional[str]) -> List[str]:
        """
        Extract the most frequent keywords from text.

        Args:
            text: Plain text of the article

        Returns:
            Up to ``max_keywords`` keywords, most frequent first
        """
        if not text:
            return []

        # most_common sorts stably, so equal counts stay in first-seen order
        counts = Counter(self.tokenize(text))
        return [word for word, _ in counts.most_common(self.max_keywords)]


def extract_keywords(text: Optional[str], max_keywords: Optional[int] = None) -> List[str]:
    """
    Extract keywords with the default stop words.

    Args:
        text: Plain text of the article
        max_keywords: Maximum number of keywords to return

    Returns:
        Keywords, most frequent first
    """
    return KeywordExtractor(max_keywords=max_keywords).extract_keywords(text)
