"""Interactive search prompts for picking components."""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol

from rich.console import Console
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

OptionsProvider = Callable[[str], List[str]]


class Prompter(Protocol):
    def select_one(self, label: str, options: OptionsProvider) -> str:
        ...

    def select_many(self, label: str, options: OptionsProvider) -> List[str]:
        ...


def _parse_indices(value: str, count: int) -> Optional[List[int]]:
    indices: List[int] = []
    for part in value.replace(" ", "").split(","):
        if not part:
            continue
        if not part.isdigit():
            return None
        index = int(part)
        if index < 1 or index > count:
            return None
        if index not in indices:
            indices.append(index)
    return indices or None


class RichPrompter:
    """Search-then-pick prompts rendered with rich.

    The user types a search term (blank shows everything), gets a numbered
    table of matches and picks by number.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def _search(self, label: str, options: OptionsProvider) -> List[str]:
        self.console.print(Panel(label, border_style="cyan", title="flux"))
        while True:
            query = Prompt.ask("Search (blank for all)", default="", console=self.console).strip()
            candidates = options(query)
            if candidates:
                break
            self.console.print(f"No components match [bold]{query}[/bold].", style="yellow")

        table = Table()
        table.add_column("#", justify="right")
        table.add_column("Component")
        for idx, candidate in enumerate(candidates, start=1):
            table.add_row(str(idx), candidate)
        self.console.print(table)
        return candidates

    def select_one(self, label: str, options: OptionsProvider) -> str:
        candidates = self._search(label, options)
        while True:
            index = IntPrompt.ask("Select", default=1, console=self.console)
            if 1 <= index <= len(candidates):
                return candidates[index - 1]
            self.console.print(f"Selection out of range: {index}", style="red")

    def select_many(self, label: str, options: OptionsProvider) -> List[str]:
        candidates = self._search(label, options)
        while True:
            answer = Prompt.ask("Select (comma separated, e.g. 1,3)", console=self.console)
            indices = _parse_indices(answer, len(candidates))
            if indices is not None:
                return [candidates[index - 1] for index in indices]
            self.console.print(f"Invalid selection: {answer}", style="red")
