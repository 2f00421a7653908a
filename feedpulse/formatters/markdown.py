"""
Markdown formatting of recommendations and reading statistics.
"""
from datetime import datetime
from typing import Dict, List, Optional

from feedpulse.core.article import Article
from feedpulse.core.statistics import HOUR_LABELS, ReadingStatistics
from feedpulse.utils.dates import parse_timestamp
from feedpulse.utils.text import format_reading_time

NO_RECOMMENDATIONS = "No recommendations yet. Read a few articles to get personalised suggestions."
NO_READING_DATA = "No reading data available yet. Start reading some articles!"


class MarkdownFormatter:
    """
    Formats recommendations and statistics as Markdown.
    """
    def __init__(self, generated_at: Optional[datetime] = None):
        self.today = (generated_at or datetime.now()).strftime("%B %d, %Y")

    def format_article_metadata(self, article: Article) -> str:
        """
        Format article metadata on one line.

        Args:
            article: The article to format metadata for

        Returns:
            Metadata fields separated by spaces
        """
        metadata = [f"**Category:** {article.category}"]

        published = parse_timestamp(article.publish_date)
        if published:
            metadata.append(f"**Published:** {published.strftime('%B %d, %Y')}")
        elif article.publish_date:
            metadata.append(f"**Published:** {article.publish_date}")
        else:
            metadata.append("**Published:** Unknown")

        metadata.append(f"**Reading Time:** {format_reading_time(article.estimated_reading_time)}")
        if article.recommendation_score is not None:
            metadata.append(f"**Score:** {article.recommendation_score:.2f}")

        return " ".join(metadata)

    def format_article(self, article: Article) -> str:
        """
        Format a single article as a list entry.

        Args:
            article: The article to format

        Returns:
            Markdown list item with title, link and metadata
        """
        title = f"[{article.title}]({article.url})" if article.url else article.title
        lines = [f"- {title}", f"  {self.format_article_metadata(article)}"]
        if article.summary:
            lines.append(f"  {article.summary}")
        return "\n".join(lines)

    def format_recommendations(
        self,
        recommendations: List[Article],
        by_category: Optional[Dict[str, List[Article]]] = None,
    ) -> str:
        """
        Format recommended articles.

        Args:
            recommendations: Ranked recommendations
            by_category: Newest unread articles per category

        Returns:
            Markdown document
        """
        content = [
            "# Recommended for You",
            "",
            f"Generated on {self.today}",
            "",
        ]

        if not recommendations:
            content.append(NO_RECOMMENDATIONS)
            content.append("")
        else:
            for article in recommendations:
                content.append(self.format_article(article))
            content.append("")

        if by_category:
            content.append("## By Category")
            content.append("")
            for category, articles in by_category.items():
                content.append(f"### {category}")
                content.append("")
                for article in articles:
                    content.append(self.format_article(article))
                content.append("")

        return "\n".join(content)

    def format_statistics(self, stats: ReadingStatistics) -> str:
        """
        Format reading statistics.

        Args:
            stats: Computed statistics

        Returns:
            Markdown document with summary figures and one table per chart
        """
        top_category = stats.top_categories[0][0] if stats.top_categories else "-"
        content = [
            "# Reading Statistics",
            "",
            f"Generated on {self.today}",
            "",
            "| Articles Read | Reading Time | Current Streak | Top Category |",
            "| --- | --- | --- | --- |",
            f"| {stats.read_articles} | {stats.formatted_reading_time} | {stats.streak} days | {top_category} |",
            "",
        ]

        if not stats.has_reading_data:
            content.append(NO_READING_DATA)
            return "\n".join(content)

        content.extend(["## Articles Read by Category", "", "| Category | Articles | Color |", "| --- | --- | --- |"])
        for item in stats.category_distribution:
            content.append(f"| {item.label} | {item.count} | {item.color} |")
        content.append("")

        content.extend(["## Top Categories", ""])
        for position, (category, count) in enumerate(stats.top_categories, 1):
            content.append(f"{position}. {category} ({count})")
        content.append("")

        content.extend(["## Reading Activity by Time of Day", ""])
        if any(stats.time_of_day):
            content.extend(["| Hour | Articles |", "| --- | --- |"])
            for label, count in zip(HOUR_LABELS, stats.time_of_day):
                if count:
                    content.append(f"| {label} | {count} |")
        else:
            content.append(NO_READING_DATA)
        content.append("")

        content.extend([f"## Daily Reading Activity (Last {len(stats.daily.dates)} Days)", ""])
        if any(stats.daily.article_counts):
            content.extend(["| Day | Articles | Reading Time (min) |", "| --- | --- | --- |"])
            for label, count, minutes in zip(
                stats.daily.labels, stats.daily.article_counts, stats.daily.reading_minutes
            ):
                content.append(f"| {label} | {count} | {minutes} |")
        else:
            content.append(NO_READING_DATA)
        content.append("")

        return "\n".join(content)
