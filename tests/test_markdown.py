from datetime import date, datetime

from feedpulse.core.article import Article
from feedpulse.core.statistics import compute_statistics
from feedpulse.formatters.html import HtmlConverter
from feedpulse.formatters.markdown import NO_READING_DATA, NO_RECOMMENDATIONS, MarkdownFormatter

GENERATED_AT = datetime(2024, 1, 12, 9, 0)


def test_empty_statistics_report() -> None:
    stats = compute_statistics([], today=date(2024, 1, 12))

    report = MarkdownFormatter(GENERATED_AT).format_statistics(stats)

    assert "Generated on January 12, 2024" in report
    assert "| 0 | 0m | 0 days | - |" in report
    assert report.endswith(NO_READING_DATA)
    assert "## Daily Reading Activity" not in report


def test_statistics_report_sections() -> None:
    articles = [
        Article(id="a", category="Tech", is_read=True, read_date="2024-01-12T08:15:00", actual_reading_time=90),
    ]
    stats = compute_statistics(articles, today=date(2024, 1, 12))

    report = MarkdownFormatter(GENERATED_AT).format_statistics(stats)

    assert "| Tech | 1 |" in report
    assert "1. Tech (1)" in report
    assert "| 8:00 | 1 |" in report
    assert "## Daily Reading Activity (Last 14 Days)" in report
    assert "| Jan 12 | 1 | 2 |" in report


def test_empty_recommendations() -> None:
    report = MarkdownFormatter(GENERATED_AT).format_recommendations([])

    assert NO_RECOMMENDATIONS in report
    assert "## By Category" not in report


def test_article_entry() -> None:
    article = Article(
        id="a",
        title="Python news",
        url="https://example.com/a",
        category="Tech",
        publish_date="2024-01-10T08:00:00",
        estimated_reading_time=3,
        recommendation_score=0.5,
    )

    entry = MarkdownFormatter(GENERATED_AT).format_article(article)

    assert entry.startswith("- [Python news](https://example.com/a)")
    assert "**Published:** January 10, 2024" in entry
    assert "**Score:** 0.50" in entry


def test_html_conversion_renders_tables() -> None:
    html = HtmlConverter().convert("# Title\n\n| A | B |\n| --- | --- |\n| 1 | 2 |\n", title="Report")

    assert "<title>Report</title>" in html
    assert "<h1>Title</h1>" in html
    assert "<table>" in html
