"""Console output for the apidesign CLI.

Extraction results and other data go to stdout; status lines, warnings,
errors and debug traces go to stderr, so ``apidesign extract doc.yaml | jq``
always sees clean data.

Which renderer is used for data depends on :class:`OutputFormat`. ``AUTO``
picks Rich tables and highlighting on an interactive terminal and plain
tab-separated text otherwise. ``NO_COLOR``, ``TERM=dumb`` and ``--no-color``
switch colour off.

The root command builds one :class:`OutputManager` per invocation and
installs it with :func:`set_output`; commands call the module-level helpers
(:func:`format_response`, :func:`error`, ...) which forward to it.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

_SYNTAX_THEME = "monokai"


class OutputFormat(str, Enum):
    """How data written to stdout is rendered."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


def _to_json(data: Any) -> str:  # noqa: ANN401
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


class OutputManager:
    """Renders data to stdout and diagnostics to stderr.

    Args:
        format: Requested data format; ``AUTO`` is resolved once, here.
        no_color: Turn colour off even on a terminal.
        quiet: Drop ``info`` and ``success`` lines.
        verbose: Show ``debug`` lines.
        output_file: Write data to this path instead of stdout.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file

        if format != OutputFormat.AUTO:
            self._format = format
        elif _is_tty() and not self._no_color:
            self._format = OutputFormat.RICH
        else:
            self._format = OutputFormat.PLAIN

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=self._format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def stderr_console(self) -> Console:
        """Console that log records are rendered to under ``--verbose``."""
        return self._stderr

    # --- data (stdout) ---

    def format_response(self, data: Any) -> None:  # noqa: ANN401
        """Render a dict, list or scalar result in the active format.

        Dicts become ``key<TAB>value`` lines in plain mode, with list values
        comma-joined (``tags\\tpets,store``). With ``output_file`` set the
        result is written there as JSON regardless of format.
        """
        if self._output_file:
            text = _to_json(data) if isinstance(data, (dict, list)) else str(data)
            with open(self._output_file, "w", encoding="utf-8") as f:
                f.write(text if text.endswith("\n") else text + "\n")
            return

        if self._format == OutputFormat.JSON:
            self.print_data(_to_json(data))
        elif self._format == OutputFormat.PLAIN:
            for line in _plain_lines(data):
                self.print_data(line)
        elif isinstance(data, (dict, list)):
            self._highlight(_to_json(data), "json")
        else:
            self._stdout.print(escape(str(data)))

    def print_document(self, text: str, syntax: str) -> None:
        """Write serialized document text; highlighted as *syntax* in Rich mode."""
        if self._output_file or self._format != OutputFormat.RICH:
            self.print_data(text.rstrip("\n"))
        else:
            self._highlight(text, syntax)

    def print_data(self, text: str) -> None:
        """Write one line of raw text, appending to ``output_file`` when set."""
        if not self._output_file:
            print(text, file=sys.stdout, flush=True)
            return
        with open(self._output_file, "a", encoding="utf-8") as f:
            f.write(text if text.endswith("\n") else text + "\n")

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Write rows as a Rich table, JSON records, or tab-separated lines.

        Cell, header and title text come from user documents and is never
        interpreted as Rich markup.
        """
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
            return
        if self._format == OutputFormat.PLAIN:
            for row in [headers, *rows]:
                self.print_data("\t".join(row))
            return

        table = Table(
            title=escape(title) if title is not None else None,
            show_header=True,
            header_style="bold cyan",
        )
        for header in headers:
            table.add_column(escape(header))
        for row in rows:
            table.add_row(*(escape(cell) for cell in row))
        self._stdout.print(table)

    def _highlight(self, text: str, syntax: str) -> None:
        self._stdout.print(Syntax(text, syntax, theme=_SYNTAX_THEME, word_wrap=True))

    # --- diagnostics (stderr) ---

    def _diagnostic(self, message: str, label: str = "", style: str = "") -> None:
        if self._no_color:
            print(f"{label}{message}", file=sys.stderr, flush=True)
            return
        prefix = f"[{style}]{escape(label)}[/{style}]" if label and style else escape(label)
        body = escape(message)
        if style and not label:
            body = f"[{style}]{body}[/{style}]"
        self._stderr.print(prefix + body)

    def info(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic(message, style="green")

    def warning(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._diagnostic(message, "Warning: ", "yellow")

    def error(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._diagnostic(message, "Error: ", "bold red")

    def debug(self, message: str) -> None:
        if self._verbose:
            self._diagnostic(message, "[debug] ", "dim")


def _plain_lines(data: Any) -> list[str]:  # noqa: ANN401
    if isinstance(data, dict):
        lines = []
        for key, value in data.items():
            if isinstance(value, list):
                value = ",".join(str(v) for v in value)
            lines.append(f"{key}\t{value}")
        return lines
    if isinstance(data, list):
        return [str(item) for item in data]
    return [str(data)]


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# --- process-wide manager ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager so the next call rebinds to current streams."""
    global _output
    _output = None


def format_response(data: Any) -> None:  # noqa: ANN401
    get_output().format_response(data)


def print_document(text: str, syntax: str) -> None:
    get_output().print_document(text, syntax)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
