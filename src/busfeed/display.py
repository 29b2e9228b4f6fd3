"""Display sinks for rendered feed text."""

from __future__ import annotations

import logging
from typing import Protocol

from busfeed._constants import INITIAL_DISPLAY_TEXT

_logger = logging.getLogger(__name__)


class DisplaySink(Protocol):
    """Anything that can show a block of pre-formatted text."""

    def show(self, text: str) -> None:
        ...


class TextDisplay:
    """In-memory sink holding the text currently on screen."""

    def __init__(self, initial_text: str = INITIAL_DISPLAY_TEXT) -> None:
        self._text = initial_text
        self._history: list[str] = []

    @property
    def text(self) -> str:
        return self._text

    @property
    def history(self) -> list[str]:
        """Every frame shown, oldest first."""
        return list(self._history)

    def show(self, text: str) -> None:
        self._text = text
        self._history.append(text)


class LoggingDisplay:
    """Sink that writes each frame to a logger."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self._logger = logger or _logger
        self._level = level

    def show(self, text: str) -> None:
        self._logger.log(self._level, "Feed:\n%s", text.rstrip("\n"))
