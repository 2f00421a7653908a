"""
Command-line interface for FeedPulse.
"""
import sys
import argparse
import logging
from datetime import date, datetime
from typing import List, Optional

from dotenv import load_dotenv

from feedpulse.config import get_config
from feedpulse.core.processor import ArticleProcessor
from feedpulse.core.recommender import RecommendationEngine
from feedpulse.core.snapshot import SnapshotError, load_snapshot, save_snapshot
from feedpulse.core.statistics import StatisticsAggregator
from feedpulse.formatters.html import HtmlConverter
from feedpulse.formatters.markdown import MarkdownFormatter

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """
    Configure root logging for the command-line run.

    Args:
        verbose: Log at DEBUG instead of INFO
        log_file: Optional file to log to in addition to stderr
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def parse_date(value: str) -> date:
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD") from e


def parse_args(argv: Optional[List[str]] = None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="FeedPulse - reading recommendations and statistics")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    enrich = subparsers.add_parser("enrich", help="Derive keywords and reading time for ingested articles")
    enrich.add_argument("snapshot", help="Path to the snapshot JSON file")
    enrich.add_argument("-o", "--output", help="Where to write the enriched snapshot (default: in place)")
    enrich.add_argument("--no-progress", action="store_true", help="Hide the progress bar")

    recommend = subparsers.add_parser("recommend", help="Print article recommendations")
    recommend.add_argument("snapshot", help="Path to the snapshot JSON file")
    recommend.add_argument(
        "--max",
        type=int,
        dest="max_recommendations",
        default=get_config('recommendations.max_recommendations', 10),
        help="Number of recommendations",
    )
    recommend.add_argument("--html", help="Also write the report as HTML to this path")

    stats = subparsers.add_parser("stats", help="Print reading statistics")
    stats.add_argument("snapshot", help="Path to the snapshot JSON file")
    stats.add_argument("--today", type=parse_date, help="Reference day (YYYY-MM-DD), defaults to today")
    stats.add_argument("--html", help="Also write the report as HTML to this path")

    return parser.parse_args(argv)


def run_enrich(args) -> int:
    snapshot = load_snapshot(args.snapshot)
    processor = ArticleProcessor()
    snapshot.articles = processor.process_articles(snapshot.articles, show_progress=not args.no_progress)
    save_snapshot(snapshot, args.output or args.snapshot)
    return 0


def run_recommend(args) -> int:
    snapshot = load_snapshot(args.snapshot)
    state = snapshot.to_state()
    engine = RecommendationEngine()

    recommendations = engine.get_recommendations(state.articles, state.read_articles, args.max_recommendations)
    # Without a configured category list, group by the categories articles carry
    categories = state.categories or list(dict.fromkeys(article.category for article in state.articles))
    by_category = engine.get_recommendations_by_category(state.articles, categories)
    logger.info(f"Generated {len(recommendations)} recommendations")

    report = MarkdownFormatter().format_recommendations(recommendations, by_category)
    print(report)
    if args.html:
        HtmlConverter().write(report, args.html, title="Recommended for You")
    return 0


def run_stats(args) -> int:
    snapshot = load_snapshot(args.snapshot)
    state = snapshot.to_state()

    stats = StatisticsAggregator().compute(
        state.articles,
        total_reading_time=state.statistics.total_reading_time,
        today=args.today,
    )

    report = MarkdownFormatter().format_statistics(stats)
    print(report)
    if args.html:
        HtmlConverter().write(report, args.html, title="Reading Statistics")
    return 0


COMMANDS = {
    "enrich": run_enrich,
    "recommend": run_recommend,
    "stats": run_stats,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the command-line script.
    """
    load_dotenv()
    args = parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    try:
        return COMMANDS[args.command](args)
    except SnapshotError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"An error occurred: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
