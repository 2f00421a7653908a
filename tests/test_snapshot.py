import json
from pathlib import Path

import pytest

from feedpulse.core.article import Article, Category, ReadingEvent
from feedpulse.core.snapshot import Snapshot, SnapshotError, load_snapshot, save_snapshot
from feedpulse.core.state import AppState, ReadingLog


def test_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "snapshot.json"
    snapshot = Snapshot(
        articles=[
            Article(id="a1", title="One", category="Tech", keywords=["python"], is_read=True,
                    read_date="2024-01-12T09:00:00", actual_reading_time=30, is_bookmarked=True),
            Article(id="a2", title="Two"),
        ],
        categories=[Category(name="Tech", id="c1")],
        reading_history=[ReadingEvent(article_id="a1", date="2024-01-12T09:00:00", category="Tech")],
    )
    save_snapshot(snapshot, path)

    loaded = load_snapshot(path)

    assert [article.id for article in loaded.articles] == ["a1", "a2"]
    assert loaded.articles[0].keywords == ["python"]
    assert loaded.articles[1].category == "Uncategorized"
    assert loaded.categories[0].name == "Tech"
    assert loaded.reading_history[0].article_id == "a1"

    state = loaded.to_state()
    assert state.statistics.read_articles == 1
    assert state.statistics.total_reading_time == 30
    assert state.statistics.category_breakdown == {"Tech": 30}
    assert state.bookmarks == ["a1"]


def test_unknown_fields_are_ignored(tmp_path: Path) -> None:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({"articles": [{"id": "a1", "imageUrl": "x.png"}], "categories": ["Tech"]}))

    loaded = load_snapshot(path)

    assert loaded.articles[0].id == "a1"
    assert loaded.categories[0].name == "Tech"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SnapshotError):
        load_snapshot(tmp_path / "absent.json")


def test_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "snapshot.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(SnapshotError):
        load_snapshot(path)


def test_invalid_shape(tmp_path: Path) -> None:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({"articles": [{"title": "no id"}]}), encoding="utf-8")

    with pytest.raises(SnapshotError):
        load_snapshot(path)

    path.write_text(json.dumps([]), encoding="utf-8")
    with pytest.raises(SnapshotError):
        load_snapshot(path)


def test_folded_totals_survive_save_and_load(tmp_path: Path) -> None:
    path = tmp_path / "snapshot.json"
    state = AppState(
        articles=[Article(id="a1", category="Tech", actual_reading_time=10)],
        categories=[Category(name="Tech", id="c1")],
        statistics=ReadingLog(total_reading_time=25, category_breakdown={"Tech": 10, "Science": 15}),
    )

    save_snapshot(Snapshot.from_state(state), path)
    restored = load_snapshot(path).to_state()

    assert restored.statistics.total_reading_time == 25
    assert restored.statistics.category_breakdown == {"Tech": 10, "Science": 15}
    assert [category.id for category in restored.categories] == ["c1"]


def test_invalid_category_breakdown(tmp_path: Path) -> None:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({"articles": [], "category_breakdown": {"Tech": "ten"}}), encoding="utf-8")

    with pytest.raises(SnapshotError):
        load_snapshot(path)
