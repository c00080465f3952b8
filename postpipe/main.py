"""
Command line entry point for postpipe
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from postpipe import __version__
from postpipe.config import get_settings, override_settings
from postpipe.content.index_builder import build_index
from postpipe.site.errors import PostPipeError
from postpipe.site.formatting import post_href
from postpipe.site.listing import ListingController
from postpipe.site.loader import PostLoader
from postpipe.site.post_page import PostPageController
from postpipe.site.theme import ThemeStore
from postpipe.site.views import ErrorView
from postpipe.utils import get_logger, setup_logging

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="postpipe", description="Markdown blog content pipeline"
    )
    parser.add_argument("--version", action="version", version=__version__)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Generate the post index")
    build.add_argument("--pages", type=Path, help="Markdown pages directory")
    build.add_argument("--output", type=Path, help="Index file to write")

    search = subparsers.add_parser("search", help="Search the post index")
    search.add_argument("query", nargs="?", default="")
    search.add_argument("--tag", help="Restrict results to one tag")

    show = subparsers.add_parser("show", help="Render one post as HTML")
    show.add_argument("file", nargs="?", help="Post file name")

    theme = subparsers.add_parser("theme", help="Show or toggle the theme")
    theme.add_argument("--toggle", action="store_true")

    return parser


async def run_build(args: argparse.Namespace, logger: "BoundLogger") -> int:
    overrides = {}
    if args.pages:
        overrides["pages_dir"] = args.pages
    if args.output:
        overrides["output_file"] = args.output

    with override_settings(**overrides) as settings:
        posts = await build_index(settings)

    logger.info("Build finished", post_count=len(posts))
    return 0


async def run_search(args: argparse.Namespace, logger: "BoundLogger") -> int:
    settings = get_settings()
    controller = ListingController.from_settings(settings)
    view = await controller.start()

    if view.is_empty:
        print("No posts.")
        return 0

    if args.tag:
        controller.on_tag_selected(args.tag)
    results = controller.engine.search(args.query)

    for post in results:
        print(f"{post.date}  {post.title}  ({post_href(post.file)})")
    logger.debug("Search printed", query=args.query, total_results=len(results))
    return 0


async def run_show(args: argparse.Namespace, logger: "BoundLogger") -> int:
    settings = get_settings()
    controller = PostPageController(
        PostLoader.from_settings(settings), site_title=settings.site_title
    )
    url = post_href(args.file) if args.file else "post.html"
    view = await controller.load(url)

    if isinstance(view, ErrorView):
        print(f"{view.title}: {view.message}", file=sys.stderr)
        return 1

    print(view.html)
    return 0


def run_theme(args: argparse.Namespace) -> int:
    settings = get_settings()
    store = ThemeStore(
        storage_path=settings.theme_storage_path,
        prefers_dark=settings.prefers_dark_theme,
    )
    if args.toggle:
        store.toggle()
    print(f"{store.applied} {store.theme_color}")
    return 0


async def main(argv: list[str] | None = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    setup_logging()
    logger = get_logger("main")
    logger.debug("Starting postpipe", version=__version__, command=args.command)

    try:
        if args.command == "build":
            return await run_build(args, logger)
        if args.command == "search":
            return await run_search(args, logger)
        if args.command == "show":
            return await run_show(args, logger)
        return run_theme(args)
    except (PostPipeError, OSError) as exc:
        logger.error("Command failed", command=args.command, error=str(exc))
        return 1


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
