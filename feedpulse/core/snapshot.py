"""
JSON snapshots of reader state, used by the command-line host.

A snapshot looks like::

    {
        "articles": [{"id": "a1", "title": "...", "category": "Tech", ...}],
        "categories": [{"id": "c1", "name": "Tech"}],
        "reading_history": [{"article_id": "a1", "date": "...", "category": "Tech"}],
        "total_reading_time": 120,
        "category_breakdown": {"Tech": 120}
    }

Everything except ``articles`` is optional.
"""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from feedpulse.core.article import Article, Category, ReadingEvent
from feedpulse.core.state import AppState, ReadingLog

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when a snapshot file is missing or malformed."""


@dataclass
class Snapshot:
    articles: List[Article] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)
    reading_history: List[ReadingEvent] = field(default_factory=list)
    total_reading_time: Optional[int] = None
    category_breakdown: Optional[Dict[str, int]] = None

    @classmethod
    def from_state(cls, state: AppState) -> "Snapshot":
        """Capture reader state, including the folded reading totals."""
        return cls(
            articles=list(state.articles),
            categories=list(state.categories),
            reading_history=list(state.statistics.reading_history),
            total_reading_time=state.statistics.total_reading_time,
            category_breakdown=dict(state.statistics.category_breakdown),
        )

    def to_state(self) -> AppState:
        """Build reader state from the snapshot."""
        read_count = sum(1 for article in self.articles if article.is_read)
        total = self.total_reading_time
        if total is None:
            total = sum(article.actual_reading_time or 0 for article in self.articles)

        if self.category_breakdown is not None:
            breakdown = dict(self.category_breakdown)
        else:
            breakdown = {}
            for article in self.articles:
                if article.actual_reading_time:
                    breakdown[article.category] = breakdown.get(article.category, 0) + article.actual_reading_time

        return AppState(
            articles=list(self.articles),
            bookmarks=[article.id for article in self.articles if article.is_bookmarked],
            categories=list(self.categories),
            statistics=ReadingLog(
                read_articles=read_count,
                total_reading_time=total,
                category_breakdown=breakdown,
                reading_history=list(self.reading_history),
            ),
        )

    def to_dict(self) -> dict:
        data = {
            "articles": [article.to_dict() for article in self.articles],
            "categories": [{"id": category.id, "name": category.name} for category in self.categories],
            "reading_history": [event.to_dict() for event in self.reading_history],
        }
        if self.total_reading_time is not None:
            data["total_reading_time"] = self.total_reading_time
        if self.category_breakdown is not None:
            data["category_breakdown"] = dict(self.category_breakdown)
        return data


def parse_snapshot(data: dict) -> Snapshot:
    """
    Build a Snapshot from decoded JSON.

    Raises:
        SnapshotError: If the document does not have the expected shape
    """
    if not isinstance(data, dict) or not isinstance(data.get("articles"), list):
        raise SnapshotError("Snapshot must be an object with an 'articles' list")

    try:
        articles = [Article.from_dict(item) for item in data["articles"]]
        categories = [
            Category(name=item, id=None) if isinstance(item, str) else Category(name=item.get("name"), id=item.get("id"))
            for item in data.get("categories", [])
        ]
        history = [ReadingEvent.from_dict(item) for item in data.get("reading_history", [])]
    except (TypeError, KeyError, AttributeError) as e:
        raise SnapshotError(f"Invalid snapshot entry: {e}") from e

    total = data.get("total_reading_time")
    if total is not None and not isinstance(total, int):
        raise SnapshotError("'total_reading_time' must be an integer number of seconds")

    breakdown = data.get("category_breakdown")
    if breakdown is not None and (
        not isinstance(breakdown, dict) or not all(isinstance(seconds, int) for seconds in breakdown.values())
    ):
        raise SnapshotError("'category_breakdown' must map category names to integer seconds")

    return Snapshot(
        articles=articles,
        categories=categories,
        reading_history=history,
        total_reading_time=total,
        category_breakdown=breakdown,
    )


def load_snapshot(path: Union[str, Path]) -> Snapshot:
    """
    Load a snapshot from a JSON file.

    Raises:
        SnapshotError: If the file is missing or not a valid snapshot
    """
    snapshot_path = Path(path)
    try:
        data = json.loads(snapshot_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SnapshotError(f"Snapshot file not found: {snapshot_path}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Invalid JSON in snapshot file: {snapshot_path}") from e

    snapshot = parse_snapshot(data)
    logger.info(f"Loaded {len(snapshot.articles)} articles from {snapshot_path}")
    return snapshot


def save_snapshot(snapshot: Snapshot, path: Union[str, Path]) -> None:
    """Write a snapshot as JSON."""
    snapshot_path = Path(path)
    snapshot_path.parent.mkdir(parents=True, exist_ok=True)
    snapshot_path.write_text(json.dumps(snapshot.to_dict(), indent=2), encoding="utf-8")
    logger.info(f"Saved {len(snapshot.articles)} articles to {snapshot_path}")
