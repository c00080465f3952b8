"""Search and tag filtering over the loaded post index."""

from postpipe.search.debounce import Debouncer, LoopScheduler, Scheduler
from postpipe.search.engine import ALL_TAGS, SearchFilterEngine
from postpipe.search.models import SearchState, normalize_text

__all__ = [
    "ALL_TAGS",
    "Debouncer",
    "LoopScheduler",
    "Scheduler",
    "SearchFilterEngine",
    "SearchState",
    "normalize_text",
]
