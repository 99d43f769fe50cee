from __future__ import annotations

from typing import Generic

from .dom import NodeT, RenderSubstrate
from .entries import EntryKey, EntryKind, IndexEntry, contains
from .index_model import IndexModel
from .logger import logger

ROW_CLASS = "g"


def entry_href(entry: IndexEntry, class_dir: str = "class") -> str:
    page = f"{class_dir}/{entry.owner_class}.html"
    if entry.kind == EntryKind.CLASS:
        return page
    return f"{page}#{entry.kind.prefix}-{entry.name}"


def entry_label(entry: IndexEntry) -> str:
    """Plain-text rendering of a row, as a reader sees it."""
    if entry.kind == EntryKind.CLASS:
        return f"[class] {entry.name}"
    label = f"[{entry.kind.value}] {entry.name} of {entry.owner_class}"
    if not entry.declared_here:
        label += " (inherited)"
    return label


class FilterEngine(Generic[NodeT]):
    """
    Renders one row per index entry into ``container`` and toggles row
    visibility on every query change.

    Rows are addressed through their :class:`EntryKey`; a filter pass looks each
    entry's row up by key and tests only the entry's own name, so label
    decoration such as ``(inherited)`` never influences matching.
    """

    def __init__(
        self,
        model: IndexModel,
        substrate: RenderSubstrate[NodeT],
        container: NodeT,
        *,
        query: str = "",
        class_dir: str = "class",
        link_target: str = "_blank",
    ):
        self.model = model
        self.substrate = substrate
        self.container = container
        self.class_dir = class_dir
        self.link_target = link_target
        self.query = query
        self._rows: dict[EntryKey, list[NodeT]] = {}
        self._render()

    def _render(self) -> None:
        for entry in self.model.iter_entries():
            row = self._build_row(entry)
            self.substrate.set_hidden(row, not contains(entry.name, self.query))
            self.substrate.append_child(self.container, row)
            rows = self._rows.setdefault(entry.key, [])
            if rows:
                logger.debug("Duplicate row id %s", entry.key.dom_id)
            rows.append(row)
        logger.debug(
            "Rendered %d rows (%d keys) for query %r",
            len(self.model),
            len(self._rows),
            self.query,
        )

    def _build_row(self, entry: IndexEntry) -> NodeT:
        s = self.substrate
        link = s.create_element("a")
        s.set_attribute(link, "href", entry_href(entry, self.class_dir))
        s.set_attribute(link, "target", self.link_target)
        s.append_text(link, entry.name)

        row = s.create_element("p" if entry.kind == EntryKind.CLASS else "li")
        s.set_attribute(row, "id", entry.key.dom_id)
        s.set_attribute(row, "class", ROW_CLASS)
        s.set_attribute(row, "data-name", entry.name)
        s.append_text(row, f"[{entry.kind.value}] ")
        s.append_child(row, link)
        if entry.kind != EntryKind.CLASS:
            s.append_text(row, f" of {entry.owner_class}")
            if not entry.declared_here:
                s.append_text(row, " (inherited)")
        if entry.kind == EntryKind.FIELD:
            s.append_child(row, s.create_element("br"))
        return row

    def on_query_changed(self, query: str) -> int:
        """Apply ``query`` to every row; returns the number of visible entries."""
        self.query = query
        visible = 0
        for entry in self.model.iter_entries():
            show = contains(entry.name, query)
            for row in self._rows[entry.key]:
                self.substrate.set_hidden(row, not show)
            visible += show
        logger.debug("Filter %r: %d/%d entries visible", query, visible, len(self.model))
        return visible

    def rows_for(self, key: EntryKey) -> list[NodeT]:
        return list(self._rows[key])

    def row_for(self, key: EntryKey) -> NodeT:
        return self._rows[key][0]

    def is_visible(self, key: EntryKey) -> bool:
        return not self.substrate.is_hidden(self.row_for(key))

    def visible_entries(self) -> list[IndexEntry]:
        """Entries whose row is currently shown, in display order."""
        seen: dict[EntryKey, int] = {}
        result = []
        for entry in self.model.iter_entries():
            nth = seen.get(entry.key, 0)
            seen[entry.key] = nth + 1
            if not self.substrate.is_hidden(self._rows[entry.key][nth]):
                result.append(entry)
        return result


__all__ = ["FilterEngine", "ROW_CLASS", "entry_href", "entry_label"]
