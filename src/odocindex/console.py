from __future__ import annotations

from typing import Iterable, Iterator

from rich.console import Console
from rich.table import Table

from .engine import FilterEngine, entry_href
from .entries import EntryKind
from .logger import logger

QUIT_COMMANDS = {":q", ":quit"}

_KIND_STYLE = {
    EntryKind.CLASS: "bold magenta",
    EntryKind.METHOD: "cyan",
    EntryKind.FIELD: "green",
}


def results_table(engine: FilterEngine, *, limit: int | None = None) -> Table:
    visible = engine.visible_entries()
    shown = visible if limit is None else visible[:limit]
    table = Table(
        title=f"{len(visible)} of {len(engine.model)} entries match {engine.query!r}",
        show_lines=False,
    )
    table.add_column("Kind")
    table.add_column("Name", no_wrap=True)
    table.add_column("Owner")
    table.add_column("Inherited", justify="center")
    table.add_column("Link", overflow="fold")
    for entry in shown:
        table.add_row(
            f"[{_KIND_STYLE[entry.kind]}]{entry.kind.value}[/]",
            entry.name,
            "" if entry.kind == EntryKind.CLASS else entry.owner_class,
            "yes" if not entry.declared_here else "",
            entry_href(entry, engine.class_dir),
        )
    if len(shown) < len(visible):
        table.caption = f"showing first {len(shown)}"
    return table


def _prompt_queries(console: Console) -> Iterator[str]:
    while True:
        try:
            yield console.input("[bold]search[/]> ")
        except EOFError:
            return


def browse(
    engine: FilterEngine,
    console: Console | None = None,
    *,
    queries: Iterable[str] | None = None,
    limit: int | None = 50,
) -> int:
    """Feed queries to the engine until exhausted or a quit command; returns passes run."""
    console = console or Console()
    passes = 0
    console.print(results_table(engine, limit=limit))
    for query in queries if queries is not None else _prompt_queries(console):
        if query.strip() in QUIT_COMMANDS:
            break
        engine.on_query_changed(query)
        passes += 1
        console.print(results_table(engine, limit=limit))
    logger.debug("Browse session ended after %d filter passes", passes)
    return passes


__all__ = ["browse", "results_table"]
