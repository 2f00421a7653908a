"""
Reading statistics for FeedPulse.

Every aggregate is recomputed from the article collection: read state lives
on the articles themselves (``is_read``, ``read_date`` and
``actual_reading_time``), so nothing here keeps state between calls.
Articles with a missing or unparsable ``read_date`` still count as read but
are left out of the date-bucketed aggregates.
"""
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from feedpulse.config import get_config
from feedpulse.core.article import Article, ReadingEvent, normalize_category
from feedpulse.utils.dates import day_key, format_timestamp, parse_timestamp
from feedpulse.utils.text import round_half_up

logger = logging.getLogger(__name__)

CATEGORY_PALETTE = [
    '#FF6384', '#36A2EB', '#FFCE56', '#4BC0C0', '#9966FF',
    '#FF9F40', '#C9CBCF', '#7FC97F', '#BEAED4', '#FDC086',
]

HOUR_LABELS = [f'{hour}:00' for hour in range(24)]


@dataclass
class CategorySlice:
    label: str
    count: int
    color: str


@dataclass
class DailySeries:
    """Per-day article counts and reading minutes, oldest day first."""
    dates: List[date] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)
    article_counts: List[int] = field(default_factory=list)
    reading_minutes: List[int] = field(default_factory=list)


@dataclass
class ReadingStatistics:
    read_articles: int = 0
    total_reading_time: int = 0
    category_distribution: List[CategorySlice] = field(default_factory=list)
    time_of_day: List[int] = field(default_factory=lambda: [0] * 24)
    daily: DailySeries = field(default_factory=DailySeries)
    streak: int = 0
    top_categories: List[Tuple[str, int]] = field(default_factory=list)

    @property
    def formatted_reading_time(self) -> str:
        return format_total_reading_time(self.total_reading_time)

    @property
    def has_reading_data(self) -> bool:
        return self.read_articles > 0


def _read(articles: Iterable[Article]) -> List[Article]:
    return [article for article in articles if article.is_read]


def _read_dates(articles: Iterable[Article]) -> List[Tuple[Article, datetime]]:
    """Read articles paired with their parsed read date, skipping unknown dates."""
    dated = []
    for article in _read(articles):
        read_date = parse_timestamp(article.read_date)
        if read_date is None:
            logger.debug(f"Article {article.id} has no usable read date, skipping")
            continue
        dated.append((article, read_date))
    return dated


def _category_counts(articles: Iterable[Article]) -> Counter:
    # Counter keeps first-seen order for equal counts
    return Counter(normalize_category(article.category) for article in _read(articles))


def _today(today: Optional[date]) -> date:
    if today is None:
        return date.today()
    if isinstance(today, datetime):
        return today.date()
    return today


def category_distribution(articles: Iterable[Article]) -> List[CategorySlice]:
    """
    Read articles per category, in the order categories are first seen.

    Args:
        articles: The article collection

    Returns:
        One slice per category, coloured from ``CATEGORY_PALETTE`` in
        assignment order, wrapping around after ten categories
    """
    counts = _category_counts(articles)
    return [
        CategorySlice(label=label, count=count, color=CATEGORY_PALETTE[index % len(CATEGORY_PALETTE)])
        for index, (label, count) in enumerate(counts.items())
    ]


def time_of_day_histogram(articles: Iterable[Article]) -> List[int]:
    """
    Read articles per local hour of the day.

    Returns:
        24 counts, index 0 is midnight
    """
    hours = [0] * 24
    for _, read_date in _read_dates(articles):
        hours[read_date.hour] += 1
    return hours


def daily_series(
    articles: Iterable[Article],
    today: Optional[date] = None,
    days: Optional[int] = None,
) -> DailySeries:
    """
    Articles read and minutes spent reading per day.

    Args:
        articles: The article collection
        today: Last day of the window, defaults to today
        days: Window length, defaults to ``statistics.daily_window_days``

    Returns:
        DailySeries covering ``[today - days + 1, today]``. Minutes are the
        day's summed ``actual_reading_time`` seconds rounded once at the end.
    """
    today = _today(today)
    days = days if days is not None else get_config('statistics.daily_window_days', 14)

    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    index = {day: position for position, day in enumerate(window)}

    counts = [0] * days
    seconds = [0] * days
    for article, read_date in _read_dates(articles):
        position = index.get(read_date.date())
        if position is None:
            continue
        counts[position] += 1
        seconds[position] += article.actual_reading_time or 0

    return DailySeries(
        dates=window,
        labels=[f"{day.strftime('%b')} {day.day}" for day in window],
        article_counts=counts,
        reading_minutes=[int(round_half_up(total / 60)) for total in seconds],
    )


def reading_streak(
    articles: Iterable[Article],
    today: Optional[date] = None,
    max_days: Optional[int] = None,
) -> int:
    """
    Consecutive days, ending today, with at least one article read.

    A reader who has not read anything today has a streak of 0, even with an
    unbroken run up to yesterday.

    Args:
        articles: The article collection
        today: The day the streak ends on, defaults to today
        max_days: Longest streak reported, defaults to ``statistics.streak_max_days``

    Returns:
        Length of the streak in days
    """
    today = _today(today)
    max_days = max_days if max_days is not None else get_config('statistics.streak_max_days', 365)

    read_days = {day_key(read_date) for _, read_date in _read_dates(articles)}
    if day_key(today) not in read_days:
        return 0

    streak = 1
    for offset in range(1, max_days):
        if day_key(today - timedelta(days=offset)) not in read_days:
            break
        streak += 1

    return streak


def top_categories(articles: Iterable[Article], limit: Optional[int] = None) -> List[Tuple[str, int]]:
    """
    Most-read categories.

    Args:
        articles: The article collection
        limit: Number of categories, defaults to ``statistics.top_categories``

    Returns:
        ``(category, count)`` pairs, highest count first; ties keep the order
        in which categories were first read
    """
    limit = limit if limit is not None else get_config('statistics.top_categories', 3)
    return _category_counts(articles).most_common(limit)


def total_reading_seconds(articles: Iterable[Article]) -> int:
    return sum(article.actual_reading_time or 0 for article in articles)


def format_total_reading_time(seconds: Optional[int]) -> str:
    """
    Format seconds of reading as ``Hh Mm``.

    Hours are omitted when zero, so 90 seconds is ``2m`` and 3700 seconds is
    ``1h 2m``.
    """
    total_minutes = int(round_half_up((seconds or 0) / 60))
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f'{hours}h {minutes}m'
    return f'{minutes}m'


def events_from_articles(articles: Iterable[Article]) -> List[ReadingEvent]:
    """
    Rebuild the reading log from article read state.

    Returns:
        One event per read article with a usable read date, oldest first
    """
    dated = sorted(_read_dates(articles), key=lambda pair: pair[1])
    return [
        ReadingEvent(article_id=article.id, date=format_timestamp(read_date), category=article.category)
        for article, read_date in dated
    ]


def compute_statistics(
    articles: Iterable[Article],
    total_reading_time: Optional[int] = None,
    today: Optional[date] = None,
) -> ReadingStatistics:
    """
    Compute every reading statistic for the collection.

    Args:
        articles: The article collection
        total_reading_time: Running total folded from tracker ticks; defaults
            to the sum of per-article ``actual_reading_time``
        today: Reference day for the daily series and the streak

    Returns:
        ReadingStatistics
    """
    articles = list(articles)
    today = _today(today)

    if total_reading_time is None:
        total_reading_time = total_reading_seconds(articles)

    stats = ReadingStatistics(
        read_articles=len(_read(articles)),
        total_reading_time=total_reading_time,
        category_distribution=category_distribution(articles),
        time_of_day=time_of_day_histogram(articles),
        daily=daily_series(articles, today),
        streak=reading_streak(articles, today),
        top_categories=top_categories(articles),
    )
    logger.debug(f"Computed statistics for {stats.read_articles} read articles")
    return stats


class StatisticsAggregator:
    """
    Memoises :func:`compute_statistics` for an unchanged collection.

    The cache key is the full read state of every article plus the reference
    day, so a hit always equals a fresh computation.

    Repeated calls with an unchanged collection return the same
    :class:`ReadingStatistics` object. Callers must treat it as read-only.
    """
    def __init__(self):
        self._key = None
        self._result: Optional[ReadingStatistics] = None

    @staticmethod
    def _fingerprint(articles: List[Article], total_reading_time: Optional[int], today: date):
        return (
            today,
            total_reading_time,
            tuple(
                (article.id, article.category, article.is_read, str(article.read_date), article.actual_reading_time)
                for article in articles
            ),
        )

    def compute(
        self,
        articles: Iterable[Article],
        total_reading_time: Optional[int] = None,
        today: Optional[date] = None,
    ) -> ReadingStatistics:
        articles = list(articles)
        today = _today(today)
        key = self._fingerprint(articles, total_reading_time, today)

        if key != self._key or self._result is None:
            self._result = compute_statistics(articles, total_reading_time, today)
            self._key = key

        return self._result

    def invalidate(self) -> None:
        self._key = None
        self._result = None
