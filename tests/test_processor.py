from feedpulse.core.article import Article
from feedpulse.core.processor import ArticleProcessor, html_to_text


def test_html_to_text_drops_markup_and_scripts() -> None:
    html = "<p>Hello <b>world</b></p><script>track()</script><style>p {}</style>"

    assert html_to_text(html) == "Hello world"
    assert html_to_text(None) == ""


def test_process_article_derives_fields() -> None:
    article = Article(
        id="a1",
        title="Release notes",
        category=None,
        content="<p>Python release brings faster python startup.</p><p>Release notes follow.</p>",
    )

    processed = ArticleProcessor().process_article(article)

    assert processed.keywords[:2] == ["python", "release"]
    assert processed.estimated_reading_time == 1
    assert "Python release brings faster python startup." in processed.plain_text_content
    assert processed.summary == processed.plain_text_content
    assert processed.category == "Uncategorized"
    assert article.keywords is None


def test_process_article_keeps_existing_keywords() -> None:
    article = Article(id="a1", plain_text_content="brand new words here", keywords=["original"])

    assert ArticleProcessor().process_article(article) is article


def test_summary_is_truncated() -> None:
    text = "word " * 100
    article = Article(id="a1", plain_text_content=text)

    processed = ArticleProcessor(summary_length=20).process_article(article)

    assert processed.summary == text[:20] + "..."
    assert processed.estimated_reading_time == 1


def test_process_articles_keeps_order() -> None:
    articles = [Article(id=f"a{n}", plain_text_content=f"article number {n} content") for n in range(3)]

    processed = ArticleProcessor().process_articles(articles, show_progress=False)

    assert [article.id for article in processed] == ["a0", "a1", "a2"]
    assert all(article.keywords is not None for article in processed)
