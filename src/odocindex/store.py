from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from .entries import MemberEntry
from .index_model import IndexModel
from .jsliteral import LiteralSyntaxError, ObjectPairs, parse_bindings
from .logger import logger

INDEX_BINDING = "globalIndex"
QUOTES_BINDING = "globalQuoteList"


class IndexFormatError(ValueError):
    pass


@dataclass
class IndexBundle:
    model: IndexModel
    source: str | None = None
    quotes: list[str] = field(default_factory=list)


def load_index(path: str | os.PathLike) -> IndexBundle:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error_raise(f"Cannot read index {path}: {exc}", exc=IndexFormatError)
    if path.suffix == ".json":
        bundle = loads_index_json(text, source=str(path))
    else:
        bundle = loads_db_js(text, source=str(path))
    logger.info(
        "Loaded index %s: classes=%d methods=%d fields=%d",
        path,
        len(bundle.model.classes),
        len(bundle.model.methods),
        len(bundle.model.fields),
    )
    return bundle


def loads_db_js(text: str, *, source: str | None = None) -> IndexBundle:
    """Decode the ``db.js`` script the documentation generator emits."""
    try:
        bindings = parse_bindings(text)
    except LiteralSyntaxError as exc:
        logger.error_raise(f"{source or '<db.js>'}: {exc}", exc=IndexFormatError)
    if INDEX_BINDING not in bindings:
        logger.error_raise(
            f"{source or '<db.js>'}: no `{INDEX_BINDING}` declaration found",
            exc=IndexFormatError,
        )
    quotes = bindings.get(QUOTES_BINDING) or []
    return IndexBundle(
        model=_model_from_raw(bindings[INDEX_BINDING], source),
        source=source,
        quotes=[q for q in quotes if isinstance(q, str)],
    )


def loads_index_json(text: str, *, source: str | None = None) -> IndexBundle:
    try:
        raw = json.loads(text, object_pairs_hook=ObjectPairs)
    except json.JSONDecodeError as exc:
        logger.error_raise(f"{source or '<json>'}: {exc}", exc=IndexFormatError)
    if isinstance(raw, ObjectPairs) and INDEX_BINDING in raw.to_dict():
        raw = raw.to_dict()[INDEX_BINDING]
    return IndexBundle(model=_model_from_raw(raw, source), source=source)


def dump_index_json(model: IndexModel, path: str | os.PathLike) -> Path:
    """Write the model as JSON; members are ``[name, {c, o}]`` pairs to keep repeats."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(model.to_payload(), ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return path


def _model_from_raw(raw: object, source: str | None) -> IndexModel:
    where = source or "<index>"
    if not isinstance(raw, ObjectPairs):
        logger.error_raise(f"{where}: index must be an object", exc=IndexFormatError)
    top = raw.to_dict()
    classes = top.get("classes") or []
    if not isinstance(classes, list) or not all(isinstance(c, str) for c in classes):
        logger.error_raise(f"{where}: `classes` must be a list of strings", exc=IndexFormatError)
    return IndexModel.build(
        classes,
        methods=_members(top.get("methods"), "methods", where),
        fields=_members(top.get("fields"), "fields", where),
    )


def _members(raw: object, label: str, where: str) -> list[MemberEntry]:
    if raw is None:
        return []
    if isinstance(raw, ObjectPairs):
        pairs = list(raw)
    elif isinstance(raw, list):
        pairs = []
        for item in raw:
            if not (isinstance(item, list) and len(item) == 2):
                logger.error_raise(
                    f"{where}: `{label}` entries must be [name, {{c, o}}] pairs",
                    exc=IndexFormatError,
                )
            pairs.append((item[0], item[1]))
    else:
        logger.error_raise(f"{where}: `{label}` must be an object or a list", exc=IndexFormatError)

    members: list[MemberEntry] = []
    for name, data in pairs:
        if not isinstance(name, str) or not isinstance(data, ObjectPairs):
            logger.error_raise(f"{where}: malformed {label} entry {name!r}", exc=IndexFormatError)
        meta = data.to_dict()
        owner = meta.get("c")
        declared = meta.get("o", True)
        if not isinstance(owner, str):
            logger.error_raise(
                f"{where}: {label} entry {name!r} has no owner class `c`",
                exc=IndexFormatError,
            )
        if not isinstance(declared, bool):
            logger.error_raise(
                f"{where}: {label} entry {name!r} has non-boolean `o`",
                exc=IndexFormatError,
            )
        members.append(MemberEntry(name, owner, declared))
    return members


__all__ = [
    "IndexBundle",
    "IndexFormatError",
    "dump_index_json",
    "load_index",
    "loads_db_js",
    "loads_index_json",
]
