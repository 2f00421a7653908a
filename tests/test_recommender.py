from datetime import datetime

import pytest

from feedpulse.core.article import Article, Category
from feedpulse.core.recommender import (
    RecommendationEngine,
    get_recommendations,
    get_recommendations_by_category,
)

NOW = datetime(2024, 1, 31, 12, 0)


def make_engine(**overrides) -> RecommendationEngine:
    settings = dict(
        history_size=5,
        category_bonus=0.2,
        recency_window_days=30,
        similarity_weight=0.7,
        recency_weight=0.3,
        per_category=5,
    )
    settings.update(overrides)
    return RecommendationEngine(**settings)


def unread(article_id: str, published: str, category: str = "Tech", keywords=None) -> Article:
    return Article(id=article_id, title=article_id, category=category, publish_date=published, keywords=keywords)


def read(article_id: str, read_date: str, category: str = "Tech", keywords=None) -> Article:
    return Article(
        id=article_id,
        title=article_id,
        category=category,
        publish_date="2024-01-01T00:00:00",
        keywords=keywords,
        is_read=True,
        read_date=read_date,
    )


def test_cold_start_returns_newest_unread() -> None:
    articles = [
        unread("old", "2024-01-01T08:00:00"),
        unread("newest", "2024-01-30T08:00:00"),
        read("seen", "2024-01-30T09:00:00"),
        unread("middle", "2024-01-15T08:00:00"),
        unread("undated", None),
    ]

    result = make_engine().get_recommendations(articles, [], max_recommendations=10, now=NOW)

    assert [article.id for article in result] == ["newest", "middle", "old", "undated"]


def test_cold_start_respects_limit() -> None:
    articles = [unread(f"a{day}", f"2024-01-{day:02d}T00:00:00") for day in range(1, 21)]

    result = make_engine().get_recommendations(articles, [], max_recommendations=3, now=NOW)

    assert [article.id for article in result] == ["a20", "a19", "a18"]


def test_empty_collection() -> None:
    assert get_recommendations([], [], now=NOW) == []


def test_scores_blend_similarity_and_recency() -> None:
    history = read("r1", "2024-01-30T10:00:00", keywords=["python", "code"])
    similar = unread("similar", "2024-01-31T12:00:00", keywords=["python", "code"])
    other_topic = unread("other", "2024-01-31T12:00:00", category="Sports", keywords=["football"])
    stale = unread("stale", "2023-12-01T12:00:00", keywords=None)
    articles = [stale, other_topic, similar, history]

    result = make_engine().get_recommendations(articles, [history], now=NOW)

    assert [article.id for article in result] == ["similar", "other", "stale"]
    # (1.0 similarity + 0.2 category bonus) * 0.7 + 1.0 recency * 0.3
    assert result[0].recommendation_score == pytest.approx(1.14)
    assert result[1].recommendation_score == pytest.approx(0.3)
    assert result[2].recommendation_score == pytest.approx(0.14)


def test_recency_decays_linearly() -> None:
    engine = make_engine()

    assert engine.recency_factor(unread("a", "2024-01-31T12:00:00"), NOW) == pytest.approx(1.0)
    assert engine.recency_factor(unread("b", "2024-01-16T12:00:00"), NOW) == pytest.approx(0.5)
    assert engine.recency_factor(unread("c", "2023-11-01T12:00:00"), NOW) == 0
    assert engine.recency_factor(unread("d", "not a date"), NOW) == 0


def test_only_most_recent_reads_are_used() -> None:
    older = read("older", "2024-01-10T10:00:00", category="General", keywords=["alpha"])
    newer = read("newer", "2024-01-20T10:00:00", category="General", keywords=["beta"])
    candidates = [
        unread("matches-older", "2024-01-31T12:00:00", category="General", keywords=["alpha"]),
        unread("matches-newer", "2024-01-31T12:00:00", category="General", keywords=["beta"]),
    ]

    result = make_engine(history_size=1).get_recommendations(candidates, [older, newer], now=NOW)

    assert [article.id for article in result] == ["matches-newer", "matches-older"]


def test_equal_scores_keep_input_order() -> None:
    history = read("r1", "2024-01-30T10:00:00", keywords=["python"])
    articles = [unread(name, "2024-01-20T12:00:00", keywords=["python"]) for name in ("b", "a", "c")]

    result = make_engine().get_recommendations(articles, [history], now=NOW)

    assert [article.id for article in result] == ["b", "a", "c"]


def test_inputs_are_not_mutated() -> None:
    history = read("r1", "2024-01-30T10:00:00", keywords=["python"])
    candidate = unread("u1", "2024-01-30T12:00:00", keywords=["python"])

    result = make_engine().get_recommendations([candidate, history], [history], now=NOW)

    assert result[0].recommendation_score is not None
    assert candidate.recommendation_score is None


def test_recommendations_by_category() -> None:
    articles = [
        unread(f"tech{day}", f"2024-01-{day:02d}T00:00:00", category="Tech") for day in range(1, 8)
    ] + [
        unread("sport1", "2024-01-02T00:00:00", category="Sports"),
        read("sport-read", "2024-01-03T00:00:00", category="Sports"),
        unread("sport2", "2024-01-05T00:00:00", category="Sports"),
    ]
    categories = ["Tech", Category(name="Sports"), {"name": "Empty"}]

    result = make_engine().get_recommendations_by_category(articles, categories)

    assert list(result) == ["Tech", "Sports"]
    assert [article.id for article in result["Tech"]] == ["tech7", "tech6", "tech5", "tech4", "tech3"]
    assert [article.id for article in result["Sports"]] == ["sport2", "sport1"]


def test_recommendations_by_category_module_function() -> None:
    assert get_recommendations_by_category([], ["Tech"]) == {}
