"""Test the single post page"""

from pathlib import Path

import pytest

from postpipe.site.errors import DocumentLoadError, PostPipeError
from postpipe.site.formatting import format_date, get_post_file, post_href
from postpipe.site.loader import PostLoader
from postpipe.site.post_page import PostPageController
from postpipe.site.render import MarkdownRenderer, plain_text_html
from postpipe.site.views import ErrorView, PostCard, PostView


@pytest.fixture
def controller(site_root: Path) -> PostPageController:
    return PostPageController(
        PostLoader(content_root=str(site_root)), site_title="My Blog"
    )


class TestFormatting:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-01-15", "January 15, 2024"),
            ("2024-03-05T08:00:00Z", "March 5, 2024"),
            ("not a date", "not a date"),
            ("", ""),
        ],
    )
    def test_format_date(self, value: str, expected: str) -> None:
        assert format_date(value) == expected

    def test_post_href_encodes_file_name(self) -> None:
        assert post_href("my post&more.md") == "post.html?file=my%20post%26more.md"

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("post.html?file=a.md", "a.md"),
            ("https://x.dev/post.html?file=my%20post.md&x=1", "my post.md"),
            ("?file=b.md", "b.md"),
            ("file=c.md", "c.md"),
            ("post.html", None),
            ("post.html?file=", None),
            ("post.html?other=1", None),
        ],
    )
    def test_get_post_file(self, url: str, expected: str | None) -> None:
        assert get_post_file(url) == expected

    def test_href_round_trips_through_query(self) -> None:
        assert get_post_file(post_href("2024 notes/é.md")) == "2024 notes/é.md"


class TestRenderer:
    def test_headings_and_highlighted_code(self) -> None:
        html = MarkdownRenderer().render("# Title\n\n```python\nx = 1\n```\n")

        assert "Title</h1>" in html
        assert 'class="highlight"' in html

    def test_single_line_breaks_are_kept(self) -> None:
        html = MarkdownRenderer().render("one\ntwo")

        assert "<br" in html

    def test_tables(self) -> None:
        html = MarkdownRenderer().render("| a | b |\n|---|---|\n| 1 | 2 |\n")

        assert "<table>" in html

    def test_renderer_is_reusable(self) -> None:
        renderer = MarkdownRenderer()

        first = renderer("# Same")
        second = renderer("# Same")

        assert first == second

    def test_plain_text_fallback(self) -> None:
        assert plain_text_html("a < b\nc & d") == "a &lt; b<br>c &amp; d"


class TestPostPageController:
    @pytest.mark.asyncio
    async def test_loads_and_renders_post(
        self, controller: PostPageController
    ) -> None:
        view = await controller.load("post.html?file=2024-01-15-hello.md")

        assert isinstance(view, PostView)
        assert view.title == "Hello"
        assert view.document_title == "Hello - My Blog"
        assert view.date_label == "January 15, 2024"
        assert view.category == "notes"
        assert view.tags == ["intro", "python"]
        assert "Heading</h1>" in view.html
        assert "<strong>blog</strong>" in view.html
        assert 'class="highlight"' in view.html
        assert "title: Hello" not in view.html

    @pytest.mark.asyncio
    async def test_post_without_front_matter(
        self, controller: PostPageController
    ) -> None:
        view = await controller.load_post("plain.md")

        assert view.title == "Untitled"
        assert view.document_title == "Post - My Blog"
        assert view.date_label == ""
        assert view.tags == []
        assert "No front matter here." in view.html

    @pytest.mark.asyncio
    async def test_missing_parameter(self, controller: PostPageController) -> None:
        view = await controller.load("post.html")

        assert isinstance(view, ErrorView)
        assert view.message == "No post file was specified."
        assert view.back_href == "index.html"

    @pytest.mark.asyncio
    async def test_missing_post(self, controller: PostPageController) -> None:
        view = await controller.load(post_href("gone.md"))

        assert isinstance(view, ErrorView)
        assert "gone.md" in view.message

    @pytest.mark.asyncio
    async def test_load_post_propagates_errors(
        self, controller: PostPageController
    ) -> None:
        with pytest.raises(DocumentLoadError):
            await controller.load_post("gone.md")

    def test_error_messages(self) -> None:
        assert (
            PostPageController.error_message(PostPipeError("boom"))
            == "An unknown error occurred."
        )
        assert PostPageController.error_message(
            DocumentLoadError("x.md", "status 500", status=500)
        ) == ("Failed to load post 'x.md': status 500")


class TestPostCard:
    def test_summary_prefers_excerpt(self, sample_posts) -> None:
        card = PostCard.from_summary(sample_posts[0])

        assert card.summary == "Some content"
        assert card.href == "post.html?file=2024-03-01-python-tips.md"
        assert card.date_label == "March 1, 2024"

    def test_summary_falls_back_to_description(self, sample_posts) -> None:
        post = sample_posts[0].model_copy(update={"excerpt": ""})

        assert PostCard.from_summary(post).summary == "Useful tricks"
