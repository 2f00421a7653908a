"""
Article recommendations for FeedPulse.
"""
import dataclasses
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence

from feedpulse.config import get_config
from feedpulse.core.article import Article, category_name
from feedpulse.core.similarity import calculate_similarity
from feedpulse.utils.dates import parse_timestamp, to_local

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def _newest_first(articles: Iterable[Article], attribute: str) -> List[Article]:
    """
    Sort articles by a timestamp attribute, newest first.

    Articles whose timestamp is missing or unparsable go last, in input order.
    """
    dated = []
    undated = []
    for article in articles:
        timestamp = parse_timestamp(getattr(article, attribute))
        if timestamp is None:
            undated.append(article)
        else:
            dated.append((timestamp, article))

    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [article for _, article in dated] + undated


class RecommendationEngine:
    """
    Ranks unread articles against the reader's recent history.

    Each unread article is compared with the most recently read articles:
    keyword similarity plus a bonus for a shared category, averaged over the
    reference set, then blended with a linear recency decay.
    """
    def __init__(
        self,
        history_size: Optional[int] = None,
        category_bonus: Optional[float] = None,
        recency_window_days: Optional[float] = None,
        similarity_weight: Optional[float] = None,
        recency_weight: Optional[float] = None,
        per_category: Optional[int] = None,
    ):
        def setting(value, key):
            return value if value is not None else get_config(f'recommendations.{key}')

        self.history_size = setting(history_size, 'history_size')
        self.category_bonus = setting(category_bonus, 'category_bonus')
        self.recency_window_days = setting(recency_window_days, 'recency_window_days')
        self.similarity_weight = setting(similarity_weight, 'similarity_weight')
        self.recency_weight = setting(recency_weight, 'recency_weight')
        self.per_category = setting(per_category, 'per_category')

    def recency_factor(self, article: Article, now: datetime) -> float:
        """
        Linear decay from 1 (just published) to 0 at the end of the window.

        Args:
            article: The article to score
            now: Reference time

        Returns:
            Recency in [0, 1]; 0 when the publish date is unknown
        """
        published = parse_timestamp(article.publish_date)
        if published is None:
            return 0.0

        age_in_days = (now - published) / ONE_DAY
        return max(0.0, 1 - age_in_days / self.recency_window_days)

    def average_similarity(self, article: Article, reference: Sequence[Article]) -> float:
        """
        Mean similarity of an article to the reference set.

        Args:
            article: Candidate article
            reference: Recently read articles, must not be empty

        Returns:
            Average of keyword similarity plus the category bonus
        """
        total = 0.0
        for read_article in reference:
            total += calculate_similarity(article, read_article)
            if article.category == read_article.category:
                total += self.category_bonus

        return total / len(reference)

    def score(self, article: Article, reference: Sequence[Article], now: datetime) -> float:
        return (
            self.similarity_weight * self.average_similarity(article, reference)
            + self.recency_weight * self.recency_factor(article, now)
        )

    def get_recommendations(
        self,
        articles: Iterable[Article],
        read_articles: Iterable[Article],
        max_recommendations: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[Article]:
        """
        Recommend unread articles.

        Args:
            articles: The full article collection
            read_articles: Articles the reader has read
            max_recommendations: Number of articles to return
            now: Reference time for recency, defaults to the current time

        Returns:
            Copies of the best unread articles, best first, each carrying its
            ``recommendation_score``. Without reading history this falls back
            to the newest unread articles.
        """
        if max_recommendations is None:
            max_recommendations = get_config('recommendations.max_recommendations', 10)
        now = to_local(now) if now is not None else datetime.now()

        unread = [article for article in articles if not article.is_read]
        read_articles = list(read_articles)

        if not read_articles:
            logger.debug(f"No reading history, recommending the {max_recommendations} newest articles")
            return _newest_first(unread, 'publish_date')[:max_recommendations]

        reference = _newest_first(read_articles, 'read_date')[:self.history_size]

        scored = [
            dataclasses.replace(article, recommendation_score=self.score(article, reference, now))
            for article in unread
        ]
        # sorted is stable, equal scores keep collection order
        scored = sorted(scored, key=lambda article: article.recommendation_score, reverse=True)

        logger.debug(f"Scored {len(scored)} unread articles against {len(reference)} recent reads")
        return scored[:max_recommendations]

    def get_recommendations_by_category(
        self,
        articles: Iterable[Article],
        categories: Iterable[Any],
    ) -> Dict[str, List[Article]]:
        """
        Newest unread articles for each category.

        Args:
            articles: The full article collection
            categories: Category objects, ``{"name": ...}`` mappings or names

        Returns:
            Mapping of category name to its newest unread articles; categories
            without unread articles are left out
        """
        unread = [article for article in articles if not article.is_read]
        recommendations = {}

        for category in categories:
            name = category_name(category)
            in_category = [article for article in unread if article.category == name]
            if in_category:
                recommendations[name] = _newest_first(in_category, 'publish_date')[:self.per_category]

        return recommendations


def get_recommendations(
    articles: Iterable[Article],
    read_articles: Iterable[Article],
    max_recommendations: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[Article]:
    """Recommend unread articles with the configured engine settings."""
    return RecommendationEngine().get_recommendations(articles, read_articles, max_recommendations, now)


def get_recommendations_by_category(
    articles: Iterable[Article],
    categories: Iterable[Any],
) -> Dict[str, List[Article]]:
    """Newest unread articles per category with the configured engine settings."""
    return RecommendationEngine().get_recommendations_by_category(articles, categories)
