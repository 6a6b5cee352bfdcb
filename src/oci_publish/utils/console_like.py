"""Console protocol shared by the CLI and the publish pipeline."""

from __future__ import annotations

from typing import Protocol

from loguru import logger
from rich.console import ConsoleRenderable
from rich.text import Text


class ConsoleLike(Protocol):
    def print(self, msg: ConsoleRenderable | str | None = None) -> None: ...

    def info(self, msg: str) -> None: ...

    def warn(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...

    def ok(self, msg: str) -> None: ...


def _plain(msg: ConsoleRenderable | str | None) -> str:
    if msg is None:
        return ""
    if isinstance(msg, str):
        return Text.from_markup(msg).plain
    return repr(msg)


class LoggerConsole:
    """Console that writes through loguru.

    Used when the publisher runs without the CLI, e.g. from another
    Python program. Rich markup is stripped from messages.
    """

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        logger.info(_plain(msg))

    def info(self, msg: str) -> None:
        logger.info(_plain(msg))

    def warn(self, msg: str) -> None:
        logger.warning(_plain(msg))

    def error(self, msg: str) -> None:
        logger.error(_plain(msg))

    def ok(self, msg: str) -> None:
        logger.success(_plain(msg))


def coalesce_console(console: ConsoleLike | None) -> ConsoleLike:
    return console if console is not None else LoggerConsole()
