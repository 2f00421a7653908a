"""
Article data model for FeedPulse.
"""
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

DEFAULT_CATEGORY = "Uncategorized"
MAX_KEYWORDS = 10


def normalize_category(category: Optional[str]) -> str:
    """
    Normalise a free-form category label.

    Args:
        category: Raw category from the feed or the user

    Returns:
        The stripped label, or ``DEFAULT_CATEGORY`` when it is missing or blank
    """
    if not isinstance(category, str):
        return DEFAULT_CATEGORY
    category = category.strip()
    return category or DEFAULT_CATEGORY


def category_name(category: Any) -> str:
    """Name of a Category, a ``{"name": ...}`` mapping or a plain string."""
    if isinstance(category, dict):
        return normalize_category(category.get("name"))
    return normalize_category(getattr(category, "name", category))


@dataclass
class Article:
    """
    Represents an article with its derived fields and reading state.

    ``keywords`` and ``estimated_reading_time`` are filled once at ingestion.
    ``is_read``, ``read_date``, ``actual_reading_time`` and ``is_bookmarked``
    are the only fields that change afterwards, and only through
    :func:`feedpulse.core.state.reduce`.
    """
    id: str
    title: str = ""
    plain_text_content: str = ""
    category: str = DEFAULT_CATEGORY
    publish_date: Optional[Union[str, datetime]] = None
    keywords: Optional[List[str]] = None
    estimated_reading_time: int = 0
    is_read: bool = False
    read_date: Optional[Union[str, datetime]] = None
    actual_reading_time: int = 0
    is_bookmarked: bool = False
    url: Optional[str] = None
    content: Optional[str] = None  # HTML body, only needed until ingestion
    summary: Optional[str] = None
    author: Optional[str] = None
    feed_id: Optional[str] = None
    recommendation_score: Optional[float] = None

    def __post_init__(self):
        self.category = normalize_category(self.category)
        if self.keywords is not None:
            self.keywords = list(self.keywords)[:MAX_KEYWORDS]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Article":
        """Build an article from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ("publish_date", "read_date"):
            if isinstance(data[key], datetime):
                data[key] = data[key].isoformat()
        return data


@dataclass(frozen=True)
class ReadingEvent:
    """One entry of the append-only reading log, written on an article's first read."""
    article_id: str
    date: str
    category: str = DEFAULT_CATEGORY

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReadingEvent":
        return cls(
            article_id=data["article_id"],
            date=data["date"],
            category=normalize_category(data.get("category")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Category:
    """A user-defined category used to group recommendations."""
    name: str
    id: Optional[str] = None

    def __post_init__(self):
        self.name = normalize_category(self.name)
