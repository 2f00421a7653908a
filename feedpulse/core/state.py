"""
Reader state and the commands that change it.

The host keeps one :class:`AppState` and replaces it with the result of
:func:`reduce` for every command. Articles and the reading log are never
mutated in place, so a snapshot handed to the recommendation engine or the
statistics aggregator stays consistent.
"""
import dataclasses
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Union

from feedpulse.core.article import Article, Category, ReadingEvent
from feedpulse.core.tracker import ReadingTick
from feedpulse.utils.dates import format_timestamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadingLog:
    read_articles: int = 0
    total_reading_time: int = 0
    category_breakdown: Dict[str, int] = field(default_factory=dict)
    reading_history: List[ReadingEvent] = field(default_factory=list)


@dataclass(frozen=True)
class AppState:
    articles: List[Article] = field(default_factory=list)
    bookmarks: List[str] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)
    statistics: ReadingLog = field(default_factory=ReadingLog)

    def find_article(self, article_id: str) -> Optional[Article]:
        for article in self.articles:
            if article.id == article_id:
                return article
        return None

    @property
    def read_articles(self) -> List[Article]:
        return [article for article in self.articles if article.is_read]


@dataclass(frozen=True)
class AddArticles:
    """Add newly ingested articles, skipping URLs already in the collection."""
    articles: List[Article]


@dataclass(frozen=True)
class MarkRead:
    """Mark an article read. Only the first read is recorded."""
    article_id: str
    at: Optional[datetime] = None


@dataclass(frozen=True)
class ToggleBookmark:
    article_id: str


@dataclass(frozen=True)
class UpdateReadingTime:
    """Credit reading seconds to an article and its category."""
    article_id: str
    category: str
    seconds: int


@dataclass(frozen=True)
class SetCategories:
    """Replace the category list, e.g. when restoring saved state."""
    categories: List[Category]


@dataclass(frozen=True)
class AddCategory:
    category: Category


@dataclass(frozen=True)
class RemoveCategory:
    """Remove every category with the given id."""
    category_id: str


Command = Union[
    AddArticles,
    MarkRead,
    ToggleBookmark,
    UpdateReadingTime,
    SetCategories,
    AddCategory,
    RemoveCategory,
]


def _replace_article(state: AppState, article_id: str, **changes) -> List[Article]:
    return [
        dataclasses.replace(article, **changes) if article.id == article_id else article
        for article in state.articles
    ]


def _add_articles(state: AppState, command: AddArticles) -> AppState:
    existing_urls = {article.url for article in state.articles if article.url}
    new_articles = []
    for article in command.articles:
        if article.url and article.url in existing_urls:
            continue
        if article.url:
            existing_urls.add(article.url)
        new_articles.append(article)

    logger.debug(f"Adding {len(new_articles)} of {len(command.articles)} articles")
    return dataclasses.replace(state, articles=state.articles + new_articles)


def _mark_read(state: AppState, command: MarkRead) -> AppState:
    article = state.find_article(command.article_id)
    if article is None:
        logger.warning(f"Cannot mark unknown article {command.article_id} as read")
        return state
    if article.is_read:
        return state

    read_date = format_timestamp(command.at or datetime.now())
    event = ReadingEvent(article_id=article.id, date=read_date, category=article.category)
    stats = state.statistics

    return dataclasses.replace(
        state,
        articles=_replace_article(state, article.id, is_read=True, read_date=read_date),
        statistics=dataclasses.replace(
            stats,
            read_articles=stats.read_articles + 1,
            reading_history=stats.reading_history + [event],
        ),
    )


def _toggle_bookmark(state: AppState, command: ToggleBookmark) -> AppState:
    article = state.find_article(command.article_id)
    if article is None:
        logger.warning(f"Cannot bookmark unknown article {command.article_id}")
        return state

    if article.is_bookmarked:
        bookmarks = [article_id for article_id in state.bookmarks if article_id != article.id]
    else:
        bookmarks = state.bookmarks + [article.id]

    return dataclasses.replace(
        state,
        articles=_replace_article(state, article.id, is_bookmarked=not article.is_bookmarked),
        bookmarks=bookmarks,
    )


def _update_reading_time(state: AppState, command: UpdateReadingTime) -> AppState:
    if command.seconds <= 0:
        return state

    article = state.find_article(command.article_id)
    articles = state.articles
    if article is not None:
        articles = _replace_article(
            state,
            article.id,
            actual_reading_time=(article.actual_reading_time or 0) + command.seconds,
        )

    stats = state.statistics
    breakdown = dict(stats.category_breakdown)
    breakdown[command.category] = breakdown.get(command.category, 0) + command.seconds

    return dataclasses.replace(
        state,
        articles=articles,
        statistics=dataclasses.replace(
            stats,
            total_reading_time=stats.total_reading_time + command.seconds,
            category_breakdown=breakdown,
        ),
    )


def reduce(state: AppState, command: Command) -> AppState:
    """
    Apply a command to the state.

    Args:
        state: Current state
        command: The command to apply

    Returns:
        The new state; ``state`` itself is left unchanged

    Raises:
        TypeError: If the command type is not known
    """
    if isinstance(command, AddArticles):
        return _add_articles(state, command)
    elif isinstance(command, MarkRead):
        return _mark_read(state, command)
    elif isinstance(command, ToggleBookmark):
        return _toggle_bookmark(state, command)
    elif isinstance(command, UpdateReadingTime):
        return _update_reading_time(state, command)
    elif isinstance(command, SetCategories):
        return dataclasses.replace(state, categories=list(command.categories))
    elif isinstance(command, AddCategory):
        return dataclasses.replace(state, categories=state.categories + [command.category])
    elif isinstance(command, RemoveCategory):
        categories = [category for category in state.categories if category.id != command.category_id]
        return dataclasses.replace(state, categories=categories)
    raise TypeError(f"Unknown command: {command!r}")


def apply_tick(state: AppState, tick: ReadingTick) -> AppState:
    """Fold a tracker tick into the state."""
    return reduce(state, UpdateReadingTime(article_id=tick.article_id, category=tick.category, seconds=tick.seconds))
