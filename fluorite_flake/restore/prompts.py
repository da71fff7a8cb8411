"""Interactive prompt collaborator for the confirmation gate.

The gate only depends on the Prompter protocol: present options, return the
answer, or return None when the user cancels. TyperPrompter implements it on
the terminal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Sequence

import typer
from rich.console import Console
from rich.markup import escape


@dataclass(frozen=True)
class PromptOption:
    """Selectable option.

    Attributes:
        value: Value returned when selected
        label: Display label
        hint: Extra detail shown next to the label (optional)
    """

    value: Any
    label: str
    hint: str = ""


class Prompter(Protocol):
    """Synchronous request/response prompt interface.

    Every method returns None when the user cancels.
    """

    def multiselect(self, message: str, options: Sequence[PromptOption]) -> Optional[List[Any]]:
        ...

    def select(self, message: str, options: Sequence[PromptOption]) -> Optional[Any]:
        ...

    def confirm(self, message: str, default: bool = False) -> Optional[bool]:
        ...

    def text(self, message: str) -> Optional[str]:
        ...


class TyperPrompter:
    """Terminal prompter built on typer prompts and rich output.

    Ctrl-C or end of input during any prompt counts as cancellation.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def multiselect(self, message: str, options: Sequence[PromptOption]) -> Optional[List[Any]]:
        """Ask for one or more options by number (comma separated)."""
        self._print_options(message, options)
        while True:
            try:
                answer = typer.prompt("Enter numbers separated by commas", default="", show_default=False)
            except typer.Abort:
                return None

            if not answer.strip():
                return []

            indexes = self._parse_indexes(answer, len(options))
            if indexes is None:
                self.console.print(f"[red]Enter numbers between 1 and {len(options)}[/red]")
                continue

            return [options[i].value for i in indexes]

    def select(self, message: str, options: Sequence[PromptOption]) -> Optional[Any]:
        """Ask for exactly one option by number."""
        self._print_options(message, options)
        while True:
            try:
                answer = typer.prompt("Enter a number", type=int)
            except typer.Abort:
                return None

            if 1 <= answer <= len(options):
                return options[answer - 1].value
            self.console.print(f"[red]Enter a number between 1 and {len(options)}[/red]")

    def confirm(self, message: str, default: bool = False) -> Optional[bool]:
        try:
            return typer.confirm(message, default=default)
        except typer.Abort:
            return None

    def text(self, message: str) -> Optional[str]:
        try:
            return typer.prompt(message)
        except typer.Abort:
            return None

    def _print_options(self, message: str, options: Sequence[PromptOption]) -> None:
        self.console.print(f"\n[bold]{message}[/bold]")
        for index, option in enumerate(options, start=1):
            hint = f" [dim]({escape(option.hint)})[/dim]" if option.hint else ""
            self.console.print(f"  {index}. {escape(option.label)}{hint}")

    @staticmethod
    def _parse_indexes(answer: str, count: int) -> Optional[List[int]]:
        indexes: List[int] = []
        for part in answer.split(","):
            part = part.strip()
            if not part:
                continue
            if not part.isdigit():
                return None
            number = int(part)
            if not 1 <= number <= count:
                return None
            if number - 1 not in indexes:
                indexes.append(number - 1)
        return indexes
