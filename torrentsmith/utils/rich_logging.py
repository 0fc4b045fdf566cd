"""Rich logging integration for torrentsmith.

Provides a RichHandler that carries correlation IDs and highlights sizes and
digests, plus a formatter that strips Rich markup for log files.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

RICH_MARKUP_PATTERN = re.compile(r"\[/?[^\]]+\]")


class CorrelationRichHandler(RichHandler):
    """RichHandler with correlation ID support and size/digest highlighting.

    Method names are prefixed in pink (#ff69b4); piece sizes such as 256KiB
    and hex digests are colored bright cyan.
    """

    HIGHLIGHT_PATTERNS = [
        r"\b\d+(?:KiB|MiB)\b",
        r"\b[0-9A-Fa-f]{32,40}\b",
    ]

    def __init__(
        self,
        *args: Any,
        console: Console | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the handler on stderr unless a console is given."""
        if console is None:
            console = Console(file=sys.stderr, markup=True)
        kwargs.setdefault("markup", True)
        super().__init__(*args, console=console, **kwargs)

    def _highlight(self, message: str) -> str:
        for pattern in self.HIGHLIGHT_PATTERNS:
            message = re.sub(pattern, r"[bright_cyan]\g<0>[/bright_cyan]", message)
        return message

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a record with correlation ID and colored method name."""
        if not hasattr(record, "correlation_id"):
            from torrentsmith.utils.logging_config import correlation_id

            record.correlation_id = correlation_id.get() or "no-correlation-id"

        message = self._highlight(escape(record.getMessage()))
        func_name = getattr(record, "funcName", None)
        if func_name:
            message = f"[#ff69b4]{func_name}[/#ff69b4] {message}"

        # Other handlers (the log file) still see the plain message
        rendered = logging.makeLogRecord(record.__dict__)
        rendered.msg = message
        rendered.args = ()
        super().emit(rendered)


def strip_rich_markup(text: str) -> str:
    """Remove Rich markup tags like ``[red]`` or ``[/bright_cyan]``."""
    return RICH_MARKUP_PATTERN.sub("", text)


class FileFormatter(logging.Formatter):
    """Formatter for file output that strips Rich markup."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, stripping Rich markup for file output."""
        return strip_rich_markup(super().format(record))


def create_rich_handler(
    console: Console | None = None,
    level: int | str = logging.INFO,
    show_path: bool = False,
    rich_tracebacks: bool = True,
) -> logging.Handler:
    """Create a CorrelationRichHandler.

    Args:
        console: Optional Rich Console instance (stderr by default)
        level: Log level
        show_path: Whether to show file paths in log output
        rich_tracebacks: Whether to use rich tracebacks

    Returns:
        Configured handler

    """
    return CorrelationRichHandler(
        console=console,
        level=level,
        show_path=show_path,
        rich_tracebacks=rich_tracebacks,
    )
