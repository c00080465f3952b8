"""Dark/light theme preference with persistence and change notification."""

import json
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from postpipe.utils.mixins import LoggerMixin

THEME_KEY = "blog-theme"
DARK_THEME = "dark"
LIGHT_THEME = "light"

# Browser chrome color per theme
THEME_COLORS = {
    DARK_THEME: "#0d0d0d",
    LIGHT_THEME: "#faf9f7",
}


@dataclass(frozen=True)
class ThemeChange:
    theme: str


ThemeListener = Callable[[ThemeChange], None]


def comment_widget_theme(theme: str) -> str:
    """Map a site theme onto the comment widget's theme names."""
    return DARK_THEME if theme == DARK_THEME else LIGHT_THEME


class ThemeStore(LoggerMixin):
    """Keeps the chosen theme in a small JSON key-value file.

    When the file cannot be read or written the preference lives in memory
    for the rest of the session; content display is never affected.
    """

    def __init__(
        self,
        storage_path: Path | None = None,
        prefers_dark: bool = False,
    ):
        self.storage_path = storage_path
        self.prefers_dark = prefers_dark
        self._memory: dict[str, str] = {}
        self._listeners: list[ThemeListener] = []
        self.applied = self.current()

    @property
    def theme_color(self) -> str:
        return THEME_COLORS.get(self.applied, THEME_COLORS[LIGHT_THEME])

    def saved_theme(self) -> str | None:
        if THEME_KEY in self._memory:
            return self._memory[THEME_KEY]
        if self.storage_path is None or not self.storage_path.exists():
            return None

        try:
            data = json.loads(self.storage_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self.logger.warning("Theme storage not available", error=str(e))
            return None

        value = data.get(THEME_KEY) if isinstance(data, dict) else None
        return value if isinstance(value, str) else None

    def save(self, theme: str) -> None:
        self._memory[THEME_KEY] = theme
        if self.storage_path is None:
            return

        try:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            self.storage_path.write_text(
                json.dumps({THEME_KEY: theme}), encoding="utf-8"
            )
        except OSError as e:
            self.logger.warning("Failed to save theme", theme=theme, error=str(e))

    def current(self) -> str:
        saved = self.saved_theme()
        if saved:
            return saved
        return DARK_THEME if self.prefers_dark else LIGHT_THEME

    def is_dark(self) -> bool:
        return self.current() == DARK_THEME

    def apply(self, theme: str) -> None:
        self.applied = theme

    def toggle(self) -> str:
        new_theme = LIGHT_THEME if self.applied == DARK_THEME else DARK_THEME
        self.apply(new_theme)
        self.save(new_theme)
        self._notify(ThemeChange(theme=new_theme))
        return new_theme

    def on_system_preference_changed(self, prefers_dark: bool) -> None:
        """Follow the system setting unless the user picked a theme."""
        self.prefers_dark = prefers_dark
        if not self.saved_theme():
            self.apply(DARK_THEME if prefers_dark else LIGHT_THEME)

    def subscribe(self, listener: ThemeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: ThemeChange) -> None:
        for listener in list(self._listeners):
            listener(event)
