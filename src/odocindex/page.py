from __future__ import annotations

import json
from html import escape
from pathlib import Path

from .config import PageConfig
from .dom import Document
from .engine import FilterEngine
from .index_model import IndexModel
from .logger import logger

# Browser-side twin of FilterEngine.on_query_changed: rows are resolved once
# from their keyed ids, then every pass tests only the indexed name.
_FILTER_SCRIPT = """
const rowKeys = %(row_keys)s
const search = document.getElementById("search")
const rows = rowKeys.map(([id, name]) => [document.getElementById(id), name])
function update() {
    const needle = search.value
    for (const [row, name] of rows) {
        row.hidden = !name.includes(needle)
    }
}
search.addEventListener("input", update)
update()
"""


def row_keys(model: IndexModel) -> list[list[str]]:
    """``[dom_id, name]`` for every entry, in display order."""
    return [[entry.key.dom_id, entry.name] for entry in model.iter_entries()]


def _script_json(value: object) -> str:
    return json.dumps(value, ensure_ascii=False).replace("</", "<\\/")


def render_index_page(
    model: IndexModel, config: PageConfig | None = None, *, query: str = ""
) -> tuple[str, FilterEngine]:
    config = config or PageConfig()
    doc = Document.index_skeleton(query)
    engine = FilterEngine(
        model,
        doc,
        doc.get_element_by_id("data"),
        query=doc.query_value(),
        class_dir=config.class_dir,
        link_target=config.link_target,
    )
    title = escape(config.page_title)
    html = (
        "<!doctype html>"
        '<html lang="en">'
        "<head>"
        '<meta charset="UTF-8" />'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0" />'
        f"<title>{title}</title>"
        "</head>"
        "<body>"
        f"<h1>{title}</h1>"
        f"{doc.to_html()}"
        f"<script>{_FILTER_SCRIPT % {'row_keys': _script_json(row_keys(model))}}</script>"
        "</body>"
        "</html>\n"
    )
    return html, engine


def write_index_page(
    model: IndexModel, out_dir: str | Path, config: PageConfig | None = None
) -> Path:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    html, engine = render_index_page(model, config)
    path = out / "index.html"
    path.write_text(html, encoding="utf-8")
    logger.info("Index page written to %s (%d entries)", path, len(engine.model))
    return path


__all__ = ["render_index_page", "row_keys", "write_index_page"]
