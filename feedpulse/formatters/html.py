"""
HTML conversion for FeedPulse reports.
"""
import logging
from pathlib import Path
from typing import Union

import mistune

logger = logging.getLogger(__name__)

DEFAULT_CSS = """
body {
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
    max-width: 1000px;
    margin: 0 auto;
    padding: 20px;
    line-height: 1.6;
    color: #333;
}

h1, h2, h3 {
    color: #1a1a1a;
    margin-top: 1.5em;
    margin-bottom: 0.5em;
}

a {
    color: #0066cc;
    text-decoration: none;
}

table {
    border-collapse: collapse;
    margin: 1rem 0;
}

th, td {
    border: 1px solid #e9ecef;
    padding: 6px 12px;
    text-align: left;
}
"""


class HtmlConverter:
    """
    Converts Markdown reports to standalone HTML pages.
    """
    def __init__(self, css: str = DEFAULT_CSS):
        self.css = css
        self.markdown = mistune.create_markdown(escape=False, plugins=['table'])

    def convert(self, markdown_text: str, title: str = "FeedPulse") -> str:
        """
        Convert Markdown text to an HTML document.

        Args:
            markdown_text: Markdown source
            title: Document title

        Returns:
            Complete HTML document
        """
        body = self.markdown(markdown_text)
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="generator" content="FeedPulse">
    <title>{title}</title>
    <style>{self.css}</style>
</head>
<body>
{body}
</body>
</html>"""

    def write(self, markdown_text: str, html_file_path: Union[str, Path], title: str = "FeedPulse") -> Path:
        """
        Convert Markdown text and write the HTML document to a file.

        Args:
            markdown_text: Markdown source
            html_file_path: Destination path
            title: Document title

        Returns:
            The written path
        """
        path = Path(html_file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.convert(markdown_text, title), encoding='utf-8')
        logger.info(f"Wrote HTML report to {path}")
        return path
