from __future__ import annotations

import argparse
import sys
import webbrowser
from pathlib import Path

from rich.console import Console

from .config import PageConfig
from .console import browse, results_table
from .dom import Document
from .engine import FilterEngine
from .index_model import validate_model
from .logger import logger, set_verbosity
from .page import write_index_page
from .store import IndexFormatError, dump_index_json, load_index

EXIT_PROBLEMS = 1
EXIT_BAD_INDEX = 2


def _page_config(args) -> PageConfig:
    return PageConfig.from_env().with_overrides(
        title=getattr(args, "title", None),
        branch=getattr(args, "branch", None),
        class_dir=getattr(args, "class_dir", None),
        link_target=getattr(args, "target", None),
    )


def _engine(model, config: PageConfig, query: str = "") -> FilterEngine:
    doc = Document.index_skeleton(query)
    return FilterEngine(
        model,
        doc,
        doc.get_element_by_id("data"),
        query=query,
        class_dir=config.class_dir,
        link_target=config.link_target,
    )


def cmd_page(args) -> int:
    bundle = load_index(args.index)
    config = _page_config(args)
    validate_model(bundle.model)
    path = write_index_page(bundle.model, args.out, config)
    print(f"Index page: {path}")
    if args.open_html:
        webbrowser.open(path.resolve().as_uri())
    return 0


def cmd_search(args) -> int:
    bundle = load_index(args.index)
    engine = _engine(bundle.model, _page_config(args))
    engine.on_query_changed(args.query)
    Console().print(results_table(engine, limit=args.limit))
    return 0


def cmd_browse(args) -> int:
    bundle = load_index(args.index)
    engine = _engine(bundle.model, _page_config(args))
    browse(engine, limit=args.limit)
    return 0


def cmd_check(args) -> int:
    bundle = load_index(args.index)
    report = validate_model(bundle.model)
    if report.ok:
        print(f"{args.index}: OK ({len(bundle.model)} entries)")
        return 0
    print(f"{args.index}: {len(report.problems)} problem(s)")
    for problem in report.problems:
        print(f"  - {problem}")
    return EXIT_PROBLEMS


def cmd_convert(args) -> int:
    bundle = load_index(args.index)
    out = dump_index_json(bundle.model, args.out)
    logger.info("Index written to: %s", out)
    return 0


def _add_page_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--class-dir", help="Directory of per-class pages (default: class)")
    p.add_argument("--target", help="Link target for entries (default: _blank)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="odocindex",
        description="Searchable index page for generated API documentation",
    )
    p.add_argument("-v", "--verbose", action="count", default=0)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_p = sub.add_parser("page", help="Write index.html for a documentation site")
    p_p.add_argument("index", help="Path to db.js or index JSON")
    p_p.add_argument("--out", default=".", help="Output directory (default: .)")
    p_p.add_argument("--title", help="Page title (default: odocgen)")
    p_p.add_argument("--branch", help="Branch name shown next to the title")
    p_p.add_argument("--open-html", action="store_true")
    _add_page_options(p_p)
    p_p.set_defaults(func=cmd_page)

    p_s = sub.add_parser("search", help="Print entries whose name contains QUERY")
    p_s.add_argument("index")
    p_s.add_argument("query", help="Case-sensitive substring")
    p_s.add_argument("--limit", type=int, default=None, help="Max rows to print")
    _add_page_options(p_s)
    p_s.set_defaults(func=cmd_search)

    p_b = sub.add_parser("browse", help="Filter the index interactively")
    p_b.add_argument("index")
    p_b.add_argument("--limit", type=int, default=50)
    _add_page_options(p_b)
    p_b.set_defaults(func=cmd_browse)

    p_c = sub.add_parser("check", help="Validate index invariants")
    p_c.add_argument("index")
    p_c.set_defaults(func=cmd_check)

    p_v = sub.add_parser("convert", help="Rewrite an index as JSON")
    p_v.add_argument("index")
    p_v.add_argument("out", type=Path)
    p_v.set_defaults(func=cmd_convert)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    set_verbosity(args.verbose)
    try:
        return args.func(args)
    except IndexFormatError:
        return EXIT_BAD_INDEX


if __name__ == "__main__":
    sys.exit(main())
