"""Rich console renderer for structured logs.

Used with ``LOG_FORMAT=console`` for local development. Renders each record
as one colored line followed by its extra fields, indented.
"""

from typing import Any

from rich.console import Console
from rich.markup import escape


class RichConsoleRenderer:
    """Structlog renderer using Rich markup."""

    def __init__(
        self,
        show_caller: bool = True,
        show_timestamp: bool = True,
        show_stacktrace: bool = True,
        width: int = 120,
    ) -> None:
        """Initialize the Rich console renderer.

        Args:
        ----
            show_caller: Whether to show logger name, caller and function
            show_timestamp: Whether to show timestamp
            show_stacktrace: Whether to print the stack trace of a record
            width: Line width used for rendering

        """
        self.show_caller = show_caller
        self.show_timestamp = show_timestamp
        self.show_stacktrace = show_stacktrace
        self._console = Console(force_terminal=True, width=width, highlight=False, soft_wrap=True)

        # Log level colors
        self.level_styles = {
            "debug": "dim cyan",
            "info": "green",
            "warn": "yellow",
            "error": "red bold",
            "panic": "red bold reverse",
            "fatal": "red bold reverse",
        }

    def __call__(self, _: Any, __: str, event_dict: dict[str, Any]) -> str:
        """Render a record.

        Args:
        ----
            _: Logger (unused)
            __: Method name (unused)
            event_dict: Event dictionary from structlog

        Returns:
        -------
            The rendered record, including ANSI styles

        """
        level = str(event_dict.pop("lvl", "info"))
        msg = event_dict.pop("msg", "")
        timestamp = event_dict.pop("ts", None)
        name = event_dict.pop("name", None)
        caller = event_dict.pop("caller", None)
        func = event_dict.pop("func", None)
        stacktrace = event_dict.pop("stacktrace", None)

        style = self.level_styles.get(level, "white")
        output_parts = []

        if self.show_timestamp and timestamp:
            output_parts.append(f"[dim]{timestamp}[/dim]")

        output_parts.append(f"[{style}]{level.upper():>5}[/{style}]")

        if self.show_caller:
            location_parts = [part for part in (name, caller) if part]
            if func:
                location_parts.append(f"in {func}()")
            if location_parts:
                output_parts.append(f"[dim blue]{escape(' '.join(location_parts))}[/dim blue]")

        with self._console.capture() as capture:
            self._console.print(" │ ".join(output_parts), end=" ")
            self._console.print(f"[bold]{escape(str(msg))}[/bold]")
            if event_dict:
                self._render_extra_fields(event_dict, indent=2)
            if self.show_stacktrace and stacktrace:
                self._console.print(f"[dim]{escape(stacktrace)}[/dim]")

        return capture.get().rstrip("\n")

    def _render_extra_fields(self, fields: dict[str, Any], indent: int = 0) -> None:
        """Render additional fields, one per line."""
        indent_str = " " * indent
        for key, value in fields.items():
            if isinstance(value, dict):
                self._console.print(f"{indent_str}[dim cyan]{escape(str(key))}:[/dim cyan]")
                self._render_extra_fields(value, indent + 2)
            else:
                self._console.print(
                    f"{indent_str}[dim cyan]{escape(str(key))}:[/dim cyan] {escape(str(value))}"
                )
