"""
Article enrichment for FeedPulse.

Runs once per article when it is ingested, before it reaches the
recommendation engine or the statistics aggregator.
"""
import dataclasses
import logging
import re
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup
from tqdm import tqdm

from feedpulse.config import get_config
from feedpulse.core.article import Article
from feedpulse.utils.nlp import KeywordExtractor
from feedpulse.utils.text import estimate_reading_time

logger = logging.getLogger(__name__)


def html_to_text(html: Optional[str]) -> str:
    """
    Extract readable plain text from an HTML fragment.

    Args:
        html: HTML content of the article

    Returns:
        Text content with scripts and styles removed
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, 'html.parser')
    for elem in soup.find_all(['script', 'style']):
        elem.decompose()

    text = soup.get_text(separator=' ')
    # Keep blank lines between paragraphs, collapse everything else
    text = re.sub(r'[ \t\r\f\v]+', ' ', text)
    text = re.sub(r' *\n *', '\n', text)
    text = re.sub(r'\n{3,}', '\n\n', text)
    return text.strip()


class ArticleProcessor:
    """
    Fills in the derived fields of freshly ingested articles.
    """
    def __init__(self, extractor: Optional[KeywordExtractor] = None, summary_length: Optional[int] = None):
        self.extractor = extractor or KeywordExtractor()
        self.summary_length = summary_length if summary_length is not None else get_config('reading.summary_length', 150)

    def summarize(self, text: str) -> str:
        """First ``summary_length`` characters, with an ellipsis when truncated."""
        if len(text) > self.summary_length:
            return text[:self.summary_length] + '...'
        return text

    def process_article(self, article: Article) -> Article:
        """
        Enrich a single article.

        Keywords and reading time are derived only when the article has no
        keyword set yet, so an already enriched article is returned unchanged.

        Args:
            article: The ingested article

        Returns:
            A copy with ``plain_text_content``, ``summary``, ``keywords`` and
            ``estimated_reading_time`` populated
        """
        if article.keywords is not None:
            return article

        text = article.plain_text_content or html_to_text(article.content)

        return dataclasses.replace(
            article,
            plain_text_content=text,
            summary=article.summary or self.summarize(text),
            keywords=self.extractor.extract_keywords(text),
            estimated_reading_time=estimate_reading_time(text),
        )

    def process_articles(self, articles: Iterable[Article], show_progress: bool = True) -> List[Article]:
        """
        Enrich a batch of articles.

        Args:
            articles: Articles to enrich
            show_progress: Whether to show a progress bar

        Returns:
            The enriched articles, in input order
        """
        articles = list(articles)
        processed = []

        for article in tqdm(articles, desc="Enriching articles", disable=not show_progress):
            processed.append(self.process_article(article))
            logger.debug(f"Enriched article: {article.title} - Category: {article.category}")

        logger.info(f"Enriched {len(processed)} articles")
        return processed
