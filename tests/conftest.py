"""
Shared fixtures.

- Test environment variables are set for every test (autouse)
- The cached settings are dropped around every test
- The project root is added to ``sys.path`` so ``import postpipe`` resolves
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

import pytest

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from postpipe.config import clear_settings_cache  # noqa: E402
from postpipe.content.models import PostSummary  # noqa: E402


@pytest.fixture(autouse=True)
def _test_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Point settings at throwaway locations for each test."""
    env: dict[str, str] = {
        "POSTPIPE_LOG_DIR": str(tmp_path / "logs"),
        "POSTPIPE_LOG_LEVEL": "DEBUG",
    }
    for k, v in env.items():
        monkeypatch.setenv(k, v)

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Remove root handlers installed by ``setup_logging``."""

    def _drop_handlers() -> None:
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

    _drop_handlers()
    try:
        yield
    finally:
        _drop_handlers()


@dataclass
class FakeTimer:
    when: float
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class FakeScheduler:
    """Virtual clock for debounce tests; time only moves on ``advance``."""

    now: float = 0.0
    timers: list[FakeTimer] = field(default_factory=list)

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(when=self.now + delay, callback=callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = sorted(
                (t for t in self.pending if t.when <= target), key=lambda t: t.when
            )
            if not due:
                break
            timer = due[0]
            self.now = timer.when
            timer.fired = True
            timer.callback()
        self.now = target


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def sample_posts() -> list[PostSummary]:
    return [
        PostSummary(
            file="2024-03-01-python-tips.md",
            title="Python Tips",
            date="2024-03-01",
            tags=["python", "tips"],
            category="dev",
            description="Useful tricks",
            excerpt="Some content",
        ),
        PostSummary(
            file="2024-02-01-travel.md",
            title="Travel Diary",
            date="2024-02-01",
            tags=["travel"],
            category="life",
            excerpt="Walking in   Seoul",
        ),
        PostSummary(
            file="2024-01-01-async.md",
            title="Async IO",
            date="2024-01-01",
            tags=["python", "async"],
            category="dev",
            excerpt="event loops",
        ),
    ]


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Content root with a pages directory holding three posts."""
    root = tmp_path / "site"
    pages = root / "pages"
    pages.mkdir(parents=True)

    (pages / "2024-01-15-hello.md").write_text(
        "\ufeff---\n"
        "title: Hello\n"
        "date: 2024-01-15\n"
        'tags: ["intro", "python"]\n'
        "category: notes\n"
        "description: First post\n"
        "---\n"
        "# Heading\n"
        "\n"
        "Welcome to the **blog**.\n"
        "\n"
        "```python\n"
        "print('hi')\n"
        "```\n",
        encoding="utf-8",
    )
    (pages / "2024-02-20-windows.md").write_bytes(
        b"---\r\ntitle: 'Line Endings'\r\ndate: 2024-02-20\r\n"
        b"tags: [windows, python]\r\n---\r\nCRLF body\r\nsecond line\r\n"
    )
    (pages / "plain.md").write_text("No front matter here.", encoding="utf-8")
    (pages / "notes.txt").write_text("not a post", encoding="utf-8")
    return root
