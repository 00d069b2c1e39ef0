#!/usr/bin/env python3
"""
lazyboot Console Output
Colour-coded status lines and tables on top of rich
"""

from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table


BANNER_WIDTH = 59


class Printer:
    """
    Formats bootstrapper output.

    Holds no run state; every component receives the same instance so tests
    can swap in a console that records to a buffer.
    """

    def __init__(self, console: Optional[Console] = None, debug: bool = False):
        self.console = console or Console(highlight=False)
        self.show_debug = debug

    def info(self, message: str):
        self.console.print(f"[blue][INFO][/blue] {escape(message)}")

    def success(self, message: str):
        self.console.print(f"[green][SUCCESS][/green] {escape(message)}")

    def warning(self, message: str):
        self.console.print(f"[yellow][WARNING][/yellow] {escape(message)}")

    def error(self, message: str):
        self.console.print(f"[red][ERROR][/red] {escape(message)}")

    def step(self, message: str):
        self.console.print(f"[bold cyan]==>[/bold cyan] [bold]{escape(message)}[/bold]")

    def debug(self, message: str):
        if self.show_debug:
            self.console.print(f"[dim]$ {escape(message)}[/dim]")

    def bullet(self, message: str, indent: int = 2):
        self.console.print(f"{' ' * indent}- {escape(message)}")

    def line(self, message: str = '', indent: int = 0):
        self.console.print(f"{' ' * indent}{escape(message)}")

    def blank(self):
        self.console.print()

    def banner(self, title: str):
        """Print a boxed title"""
        inner = BANNER_WIDTH
        self.console.print(f"[bold magenta]╔{'═' * inner}╗[/bold magenta]")
        self.console.print(f"[bold magenta]║{escape(title).center(inner)}║[/bold magenta]")
        self.console.print(f"[bold magenta]╚{'═' * inner}╝[/bold magenta]")

    def table(self, title: str, columns: Iterable[str], rows: Iterable[Iterable[str]]):
        """Render rows that may already contain rich markup"""
        table = Table(title=title, show_header=True, header_style="bold cyan")
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*row)
        self.console.print(table)
