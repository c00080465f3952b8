"""Display helpers for post metadata."""

from urllib.parse import parse_qs, quote, urlsplit

from postpipe.content.index_builder import parse_post_date

POST_PAGE = "post.html"
INDEX_PAGE = "index.html"
FILE_PARAMETER = "file"


def format_date(value: str) -> str:
    """Long date label such as ``January 5, 2024``; unparseable input is kept."""
    parsed = parse_post_date(value)
    if parsed is None:
        return value
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def post_href(file: str) -> str:
    return f"{POST_PAGE}?{FILE_PARAMETER}={quote(file, safe='')}"


def get_post_file(url: str) -> str | None:
    """Return the ``file`` query parameter of a page URL or query string."""
    query = urlsplit(url).query if "?" in url else url.lstrip("?")
    values = parse_qs(query).get(FILE_PARAMETER)
    if not values or not values[0]:
        return None
    return values[0]
